from __future__ import annotations

import logging
from typing import Dict, List

from fastapi import APIRouter, HTTPException

from quizbank import LEGACY, QUIZ, QuizNotFound, list_tree, load_quiz
from schemas.common import Envelope
from schemas.quizzes import QuestionOut

logger = logging.getLogger("quizzer.routers.quizzes")

router = APIRouter(prefix="/api", tags=["quizzes"])


def _questions(collection: str, path: str) -> List[dict]:
    try:
        return [q.model_dump() for q in load_quiz(collection, path)]
    except QuizNotFound:
        raise HTTPException(status_code=404, detail="quiz not found")
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/quiz", response_model=Dict[str, List[str]])
def quiz_tree():
    return list_tree(QUIZ)


@router.get("/quiz/{path:path}", response_model=List[QuestionOut])
def quiz_questions(path: str):
    logger.debug("quiz path: %s", path)
    return _questions(QUIZ, path)


# ---------- legacy "quizzes" collection ----------


@router.get("/quizzes", response_model=Envelope)
def quizzes_tree():
    return Envelope(data=list_tree(LEGACY))


@router.get("/quizzes/generated", response_model=Envelope)
def quizzes_generated_tree():
    return Envelope(data=list_tree(LEGACY, include_samples=False))


@router.get("/quizzes/generated/{path:path}", response_model=Envelope)
def quizzes_generated_questions(path: str):
    return Envelope(data=_questions(LEGACY, path))


@router.get("/quizzes/{path:path}", response_model=List[QuestionOut])
def quizzes_questions(path: str):
    return _questions(LEGACY, path)
