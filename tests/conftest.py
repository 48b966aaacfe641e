# quizzer/tests/conftest.py
import json
import os
import tempfile
from pathlib import Path

import pytest

# The engine is built at import time, so point it at a scratch DB first.
_DB_DIR = tempfile.mkdtemp(prefix="quizzer-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{_DB_DIR}/test.db"
os.environ.setdefault("DB_AUTO_CREATE", "true")

from db import Base, engine  # noqa: E402
import models  # noqa: E402,F401
from quizbank import reload_quizzes  # noqa: E402

Base.metadata.create_all(bind=engine)

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-image"

SINGLE = {
    "question": "Which keyword defines a function in Python?",
    "choices": ["def", "func", "lambda", "fn"],
    "notes": ["", "", "", ""],
    "answers": ["def"],
}
MULTI = {
    "question": "Which of these are mutable?",
    "choices": ["list", "tuple", "dict", "str"],
    "answers": ["list", "dict"],
}
CODING = {
    "question": "Write a bubble sort in python",
    "choices": [],
    "answers": [[[[5, 2, 4]], [2, 4, 5]], [[[3, 1]], [1, 3]]],
}


def _write(path: Path, obj) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(obj if isinstance(obj, str) else json.dumps(obj), encoding="utf-8")


@pytest.fixture(autouse=True)
def data_dir(tmp_path, monkeypatch):
    root = tmp_path / "data"

    _write(root / "quiz" / "python" / "basics" / "01.question", SINGLE)
    _write(root / "quiz" / "python" / "basics" / "02.question", MULTI)
    _write(root / "quiz" / "python" / "basics" / "03.json", CODING)
    _write(root / "quiz" / "python" / "basics" / "readme.txt", "not a quiz")
    _write(root / "quiz" / "mixed" / "a.question", "{not json")
    _write(root / "quiz" / "mixed" / "b.question", {"choices": ["no question field"]})
    _write(root / "quiz" / "mixed" / "c.question", SINGLE)
    _write(root / "quiz" / "only-coding" / "01.question", CODING)
    (root / "quiz" / "empty").mkdir(parents=True)
    _write(root / "quiz" / "empty" / "notes.md", "nothing here")
    _write(root / "samples" / "quiz" / "intro" / "01.json", MULTI)

    _write(root / "quizzes" / "legacy" / "01.question", SINGLE)
    _write(root / "quizzes" / "legacy" / "02.json", MULTI)
    _write(root / "samples" / "quizzes" / "starter" / "01.question", MULTI)

    _write(
        root / "teachers" / "ada" / "data.json",
        {
            "name": "Ada",
            "gender": "female",
            "background": "compilers",
            "personality": "patient",
            "ttsEngine": {"baseUrl": "https://tts.example", "token": "s3cret", "model": "tts-1", "voiceName": "nova"},
            "images": {
                "neutral": "neutral.png",
                "happy": "data:image/png;base64,AAAA",
                "sad": "missing.png",
            },
        },
    )
    (root / "teachers" / "ada" / "neutral.png").write_bytes(PNG_BYTES)
    _write(
        root / "samples" / "teachers" / "bob" / "data.json",
        {"name": "Bob", "gender": "male", "ttsEngine": {"voiceName": "Matthew"}, "images": {}},
    )

    _write(
        root / "prefs" / "alice.json",
        {
            "username": "alice",
            "image": None,
            "teacher": "ada",
            "favorites": {"❤️️ Liked": {}, "☠️ Difficult": {}},
            "records": {},
        },
    )
    _write(
        root / "samples" / "prefs" / "sampler.json",
        {"username": "sampler", "image": None, "teacher": None, "favorites": {}, "records": {}},
    )

    monkeypatch.setenv("QUIZZER_DATA_DIR", str(root))
    reload_quizzes()
    yield root
    reload_quizzes()
