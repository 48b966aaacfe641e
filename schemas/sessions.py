# quizzer/schemas/sessions.py
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict

from hints import HintKind


class SessionCreate(BaseModel):
    quiz_path: str
    collection: str = "quiz"
    teacher: Optional[str] = None
    username: Optional[str] = None


class SelectRequest(BaseModel):
    choice: str
    checked: bool = True


class CodeRequest(BaseModel):
    code: str


class LanguageRequest(BaseModel):
    language: str
    replace: bool = False


class SessionHintRequest(BaseModel):
    type: HintKind = "question"
    choice: Optional[str] = None
    # explanations are asked for from the results review, by question index
    index: Optional[int] = None


class SessionOut(BaseModel):
    id: int
    quiz_path: str
    teacher: Optional[str] = None
    username: Optional[str] = None
    status: str
    index: int
    total: int
    progress: float
    question: Dict[str, Any]
    selected: List[str] = []
    code: Optional[str] = None
    language: Optional[str] = None
    code_result: Optional[Dict[str, Any]] = None
    hint: Optional[str] = None
    score: Optional[Dict[str, Any]] = None
    bubble: Dict[str, Any]


class SessionSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    created_at: datetime | None
    quiz_path: str
    teacher: Optional[str] = None
    username: Optional[str] = None
    status: str
    score: Optional[float] = None
    finished_at: datetime | None = None
