from __future__ import annotations

import copy
import logging
import time
from pathlib import Path
from typing import Any, Dict, List, Optional

import settings
from jsonfiles import read_json, update_deep, write_json
from schemas.prefs import PrefsOut

logger = logging.getLogger("quizzer.prefs")

LIKED = "❤️️ Liked"
DIFFICULT = "☠️ Difficult"

DEFAULT_PREFS: Dict[str, Any] = {
    "username": "Default",
    "image": None,
    "teacher": None,
    "favorites": {
        LIKED: {},
        DIFFICULT: {},
    },
    "records": {},
}

MAX_SEQUENCE = 9999


class PrefsNotFound(LookupError):
    pass


class PrefsConflict(RuntimeError):
    pass


def default_prefs() -> Dict[str, Any]:
    return copy.deepcopy(DEFAULT_PREFS)


def validate_username(username: str) -> str:
    name = (username or "").strip()
    if not name or name in (".", "..") or any(c in name for c in "/\\\0"):
        raise ValueError(f"invalid username: {username!r}")
    return name


def _prefs_dir() -> Path:
    return settings.data_dir() / "prefs"


def _samples_prefs_dir() -> Path:
    return settings.samples_dir() / "prefs"


def _usernames(folder: Path) -> List[str]:
    if not folder.is_dir():
        return []
    return sorted(p.stem for p in folder.glob("*.json") if p.is_file())


def list_prefs() -> List[str]:
    return _usernames(_prefs_dir()) + _usernames(_samples_prefs_dir())


def _path_for(username: str) -> Path:
    return _prefs_dir() / f"{validate_username(username)}.json"


def _find(username: str) -> Path:
    path = _path_for(username)
    if path.is_file():
        return path
    sample = _samples_prefs_dir() / path.name
    if sample.is_file():
        return sample
    raise PrefsNotFound(username)


def check_prefs(prefs: Dict[str, Any]) -> Dict[str, Any]:
    """
    Refuse a prefs object clients could not read back. Raises pydantic's
    ValidationError, a ValueError, so nothing bad reaches the disk.
    """
    PrefsOut.model_validate(prefs)
    return prefs


def non_colliding_username(base: str, existing: set[str]) -> str:
    """
    `base` if free, otherwise `base_0000`, `base_0001`, ... up to `base_9999`.
    """
    candidate = base
    sequence = 0
    while candidate in existing:
        if sequence > MAX_SEQUENCE:
            raise PrefsConflict(f"no free username left for {base!r}")
        candidate = f"{base}_{sequence:04d}"
        sequence += 1
    return candidate


def create_prefs(body: Dict[str, Any]) -> Dict[str, Any]:
    new_prefs = default_prefs()
    for key, value in body.items():
        if key in new_prefs:
            new_prefs[key] = value

    base = validate_username(str(new_prefs["username"]))
    new_prefs["username"] = non_colliding_username(base, set(_usernames(_prefs_dir())))

    write_json(_path_for(new_prefs["username"]), check_prefs(new_prefs))
    logger.info("created prefs for %s", new_prefs["username"])
    return new_prefs


def get_prefs(username: str) -> Dict[str, Any]:
    return read_json(_find(username))


def save_prefs(username: str, prefs: Dict[str, Any]) -> Dict[str, Any]:
    # samples are read-only; edits always land in the generated folder
    write_json(_path_for(username), check_prefs(prefs))
    return prefs


def update_prefs(username: str, body: Dict[str, Any]) -> Dict[str, Any]:
    current = get_prefs(username)
    known = {k: v for k, v in body.items() if k in current}
    dropped = set(body) - set(known)
    if dropped:
        logger.debug("ignoring unknown prefs keys for %s: %s", username, sorted(dropped))
    return save_prefs(username, update_deep(current, known))


def record_attempt(
    username: str, quiz_path: str, passed: bool, when: Optional[int] = None
) -> Dict[str, Any]:
    current = get_prefs(username)
    records = current.setdefault("records", {})
    record = records.setdefault(quiz_path, {"attempts": 0, "pass": 0, "lastAttempted": None})
    record["attempts"] = int(record.get("attempts") or 0) + 1
    if passed:
        record["pass"] = int(record.get("pass") or 0) + 1
    record["lastAttempted"] = when if when is not None else int(time.time() * 1000)
    return save_prefs(username, current)


def set_favorite(username: str, list_name: str, quiz_path: str, value: bool) -> Dict[str, Any]:
    current = get_prefs(username)
    favorites = current.setdefault("favorites", {})
    entries = favorites.setdefault(list_name, {})
    if value:
        entries[quiz_path] = True
    else:
        entries.pop(quiz_path, None)
    return save_prefs(username, current)
