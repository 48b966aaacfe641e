# quizzer/schemas/quizzes.py
from typing import Any, List, Optional

from pydantic import BaseModel


class QuestionOut(BaseModel):
    question: str
    question_images: List[str] = []
    choices: List[str] = []
    choice_images: List[Optional[str]] = []
    notes: List[str] = []
    note_images: List[Optional[str]] = []
    answers: List[Any] = []
