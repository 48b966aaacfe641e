from __future__ import annotations

import os
from pathlib import Path

DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

DEFAULT_LLM_MODEL = "qwenqwen25-coder-32b-instruct"
DEFAULT_VOICE = os.getenv("TTS_DEFAULT_VOICE", "Ivy")
AWS_REGION = os.getenv("AWS_REGION", "us-east-1")


def _flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


# Read per call so tests (and reloads) can point the app at another tree.
def data_dir() -> Path:
    return Path(os.getenv("QUIZZER_DATA_DIR", "./data")).resolve()


def samples_dir() -> Path:
    return data_dir() / "samples"


def cors_origins() -> list[str]:
    raw = os.getenv("CORS_ORIGINS", "")
    origins = [o.strip() for o in raw.split(",") if o.strip()]
    return origins or list(DEFAULT_CORS_ORIGINS)


def db_auto_create() -> bool:
    return _flag("DB_AUTO_CREATE", True)


def llm_base_url() -> str:
    return os.getenv("LLM_BASE_URL", "").rstrip("/")


def llm_token() -> str:
    return os.getenv("LLM_BEARER_TOKEN", "")


def llm_model() -> str:
    return os.getenv("LLM_DEFAULT_MODEL", DEFAULT_LLM_MODEL)


def llm_timeout() -> float:
    return float(os.getenv("LLM_TIMEOUT", "60"))


def code_run_enabled() -> bool:
    return _flag("CODE_RUN_ENABLED", True)


def code_run_timeout() -> float:
    return float(os.getenv("CODE_RUN_TIMEOUT", "5"))
