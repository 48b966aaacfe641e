# quizzer/quizbank.py

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

from pydantic import BaseModel, ValidationError

import settings
from jsonfiles import safe_join

logger = logging.getLogger("quizzer.quizbank")

QUIZ = "quiz"
LEGACY = "quizzes"

# Which file names count as quiz files in each collection.
_MARKERS = {
    QUIZ: (".question", ".json"),
    LEGACY: (".question",),
}

SAMPLES_PREFIX = "samples/"


class QuizNotFound(LookupError):
    pass


class QuizQuestion(BaseModel):
    question: str
    question_images: List[str] = []
    choices: List[str] = []
    choice_images: List[Optional[str]] = []
    notes: List[str] = []
    note_images: List[Optional[str]] = []
    # multiple-choice: correct choice texts; coding: [inputs, expected] pairs
    answers: List[Any] = []

    @property
    def is_coding(self) -> bool:
        return len(self.choices) == 0

    @property
    def is_single_choice(self) -> bool:
        return len(self.answers) == 1


def _is_quiz_file(name: str, collection: str) -> bool:
    return any(marker in name for marker in _MARKERS[collection])


def _iter_json(p: Path) -> Iterable[Dict[str, Any]]:
    with p.open("r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError:
            logger.warning("skipping malformed quiz file %s", p)
            return
    # one question per file, but tolerate a list of them
    if isinstance(data, list):
        for obj in data:
            if isinstance(obj, dict):
                yield obj
    elif isinstance(data, dict):
        yield data


def _check_collection(collection: str) -> None:
    if collection not in _MARKERS:
        raise ValueError(f"unknown quiz collection: {collection}")


def resolve(collection: str, path: str) -> Tuple[Path, bool]:
    """
    Map a client path onto a folder. Anything containing "samples/" lives in
    the samples mirror, with that segment dropped.
    """
    _check_collection(collection)
    clean = path.strip().strip("/")
    is_sample = SAMPLES_PREFIX in clean + "/"
    if is_sample:
        clean = (clean + "/").replace(SAMPLES_PREFIX, "", 1).strip("/")
        root = settings.samples_dir() / collection
    else:
        root = settings.data_dir() / collection
    parts = [p for p in clean.split("/") if p]
    return safe_join(root, *parts), is_sample


class QuizBank:
    _cache: Dict[Path, List[Dict[str, Any]]] = {}

    @classmethod
    def load(cls, collection: str, path: str) -> List[Dict[str, Any]]:
        folder, _ = resolve(collection, path)
        if folder not in cls._cache:
            cls._cache[folder] = cls._read_folder(folder, collection)
        return cls._cache[folder]

    @classmethod
    def _read_folder(cls, folder: Path, collection: str) -> List[Dict[str, Any]]:
        if not folder.is_dir():
            raise QuizNotFound(str(folder))

        questions: List[Dict[str, Any]] = []
        for p in sorted(folder.iterdir(), key=lambda x: x.name):
            if not p.is_file() or not _is_quiz_file(p.name, collection):
                continue
            for raw in _iter_json(p):
                try:
                    questions.append(QuizQuestion(**raw).model_dump())
                except ValidationError:
                    logger.warning("skipping invalid question in %s", p)
                    continue

        logger.info("loaded %d questions from %s", len(questions), folder)
        return questions

    @classmethod
    def reload(cls) -> int:
        n = len(cls._cache)
        cls._cache = {}
        return n


def _tree_for(root: Path, collection: str, prefix: str) -> Dict[str, List[str]]:
    mapping: Dict[str, List[str]] = {}
    if not root.is_dir():
        return mapping
    for folder in sorted([root, *(d for d in root.rglob("*") if d.is_dir())]):
        names = sorted(
            p.name for p in folder.iterdir() if p.is_file() and _is_quiz_file(p.name, collection)
        )
        if not names:
            continue
        rel = folder.relative_to(root).as_posix()
        key = prefix + ("" if rel == "." else rel)
        mapping[key.rstrip("/") or "."] = names
    return mapping


# Public API
def list_tree(collection: str, include_samples: bool = True) -> Dict[str, List[str]]:
    _check_collection(collection)
    tree = _tree_for(settings.data_dir() / collection, collection, "")
    if include_samples:
        tree.update(_tree_for(settings.samples_dir() / collection, collection, SAMPLES_PREFIX))
    return tree


def load_quiz(collection: str, path: str) -> List[QuizQuestion]:
    return [QuizQuestion(**q) for q in QuizBank.load(collection, path)]


def reload_quizzes() -> int:
    return QuizBank.reload()
