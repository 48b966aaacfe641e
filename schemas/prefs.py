# quizzer/schemas/prefs.py
from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class RecordOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    attempts: int = 0
    passes: int = Field(default=0, alias="pass")
    last_attempted: Optional[int] = Field(default=None, alias="lastAttempted")


class PrefsOut(BaseModel):
    model_config = ConfigDict(extra="allow")

    username: str
    image: Optional[str] = None
    teacher: Optional[str] = None
    favorites: Dict[str, Dict[str, bool]] = {}
    records: Dict[str, RecordOut] = {}


class FavoriteRequest(BaseModel):
    quiz_path: str
    value: bool = True


class PrefsCreate(BaseModel):
    model_config = ConfigDict(extra="allow")

    username: str = "Default"
    image: Optional[str] = None
    teacher: Optional[str] = None
    favorites: Optional[Dict[str, Dict[str, bool]]] = None
    records: Optional[Dict[str, Any]] = None
