from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

import settings
from jsonfiles import image_to_data_url, is_base64, read_json, safe_join

logger = logging.getLogger("quizzer.teachers")

SAMPLE_PREFIX = "sample__"
DATA_FILE = "data.json"


class TeacherNotFound(LookupError):
    pass


class TtsEngine(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    base_url: Optional[str] = Field(default=None, alias="baseUrl")
    token: Optional[str] = None
    model: Optional[str] = None
    voice_name: Optional[str] = Field(default=None, alias="voiceName")


class Teacher(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    name: str
    gender: str = ""
    background: str = ""
    personality: str = ""
    tts_engine: TtsEngine = Field(default_factory=TtsEngine, alias="ttsEngine")
    images: Dict[str, Any] = {}

    def public(self) -> Dict[str, Any]:
        """Client shape: camelCase keys and no TTS credentials."""
        out = self.model_dump(by_alias=True)
        out["ttsEngine"].pop("token", None)
        return out


def _folder(name: str) -> Path:
    is_sample = name.startswith(SAMPLE_PREFIX)
    clean = name[len(SAMPLE_PREFIX):] if is_sample else name
    root = settings.samples_dir() if is_sample else settings.data_dir()
    return safe_join(root / "teachers", clean)


def _dir_names(root: Path) -> List[str]:
    if not root.is_dir():
        return []
    return sorted(p.name for p in root.iterdir() if p.is_dir())


def list_teachers() -> Dict[str, List[str]]:
    return {
        "generated": _dir_names(settings.data_dir() / "teachers"),
        "samples": _dir_names(settings.samples_dir() / "teachers"),
    }


def list_sample_teachers() -> List[str]:
    return _dir_names(settings.samples_dir() / "teachers")


def read_teacher(name: str) -> Teacher:
    data_path = _folder(name) / DATA_FILE
    if not data_path.is_file():
        raise TeacherNotFound(name)
    return Teacher.model_validate(read_json(data_path))


def _inline_images(folder: Path, images: Dict[str, Any]) -> Dict[str, Any]:
    processed: Dict[str, Any] = {}
    for emotion, image in images.items():
        if not isinstance(image, str) or is_base64(image):
            processed[emotion] = image
            continue
        try:
            processed[emotion] = image_to_data_url(safe_join(folder, image))
        except (OSError, ValueError) as e:
            logger.error("failed to inline image %s for emotion %s: %s", image, emotion, e)
            processed[emotion] = image
    return processed


def load_teacher(name: str) -> Teacher:
    """
    Load a teacher persona. Image paths are replaced with data URLs so the
    front-end never has to reach into the data directory.
    """
    teacher = read_teacher(name)
    teacher.images = _inline_images(_folder(name), teacher.images)
    return teacher


def gender_of(name: Optional[str]) -> Optional[str]:
    """Gender of a teacher for prompt wording; None when unknown."""
    if not name:
        return None
    try:
        return read_teacher(name).gender or None
    except (TeacherNotFound, ValueError):
        logger.info("unknown teacher %s", name)
        return None
