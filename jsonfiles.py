# Small helpers shared by the flat-file content stores (quizzes, teachers, prefs).
from __future__ import annotations

import base64
import binascii
import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict

_MIME_TYPES = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".svg": "image/svg+xml",
}


def read_json(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def write_json(path: Path, obj: Any) -> None:
    """
    Write `obj` as UTF-8 JSON, replacing the file in one step so readers
    never see a half-written document.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(obj, f, ensure_ascii=False, indent=2)
        os.replace(tmp, path)
    except BaseException:
        if os.path.exists(tmp):
            os.unlink(tmp)
        raise


def update_deep(target: Dict[str, Any], source: Dict[str, Any]) -> Dict[str, Any]:
    for key, value in source.items():
        current = target.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            update_deep(current, value)
        else:
            target[key] = value
    return target


def safe_join(root: Path, *parts: str) -> Path:
    root = root.resolve()
    candidate = root.joinpath(*parts).resolve()
    if candidate != root and root not in candidate.parents:
        raise ValueError(f"path escapes content root: {'/'.join(parts)}")
    return candidate


def is_base64(value: str) -> bool:
    if value.startswith("data:image/"):
        return True
    # base64 has no "."; file names like "happy.png" would otherwise need decoding
    if not value or "." in value:
        return False
    try:
        return base64.b64encode(base64.b64decode(value, validate=True)).decode() == value
    except (binascii.Error, ValueError):
        return False


def mime_for(filename: str) -> str:
    return _MIME_TYPES.get(Path(filename).suffix.lower(), "image/png")


def image_to_data_url(path: Path) -> str:
    data = path.read_bytes()
    return f"data:{mime_for(path.name)};base64,{base64.b64encode(data).decode('ascii')}"
