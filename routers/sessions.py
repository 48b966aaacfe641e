# quizzer/routers/sessions.py

from __future__ import annotations

import copy
import logging
from datetime import UTC, datetime
from typing import Any, Dict, Tuple

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

import prefs
import speech
from db import SessionLocal
from deps.services import get_llm
from hints import analysis_prompt, hint_prompt, user_message
from llm import LLMClient, LLMError
from models import QuizSessionRow
from quizbank import QuizNotFound, QuizQuestion, load_quiz
from schemas.sessions import (
    CodeRequest,
    LanguageRequest,
    SelectRequest,
    SessionCreate,
    SessionHintRequest,
    SessionOut,
    SessionSummary,
)
from session import RESULTS, EmptyQuiz, InvalidTransition, QuizSession
from teachers import TeacherNotFound, gender_of, read_teacher

logger = logging.getLogger("quizzer.routers.sessions")

router = APIRouter(prefix="/api/sessions", tags=["sessions"])


def _view(row: QuizSessionRow, session: QuizSession) -> Dict[str, Any]:
    return {
        "id": row.id,
        "quiz_path": row.quiz_path,
        "teacher": row.teacher,
        "username": row.username,
        **session.view(),
    }


def _load(db: Session, session_id: int) -> Tuple[QuizSessionRow, QuizSession]:
    row = db.get(QuizSessionRow, session_id)
    if not row:
        raise HTTPException(status_code=404, detail="session not found")
    questions = [QuizQuestion(**q) for q in row.questions]
    # work on a copy so the JSON column sees a new value on save
    return row, QuizSession(questions, copy.deepcopy(row.state))


def _save(db: Session, row: QuizSessionRow, session: QuizSession) -> None:
    was_finished = row.status == RESULTS
    row.state = session.state
    row.status = session.status

    if session.status == RESULTS and not was_finished:
        row.score = session.state["score"]["percent"]
        row.finished_at = datetime.now(UTC)
        _record_attempt(row, session)
    elif session.status != RESULTS:
        row.score = None
        row.finished_at = None

    db.commit()
    db.refresh(row)


def _record_attempt(row: QuizSessionRow, session: QuizSession) -> None:
    if not row.username:
        return
    try:
        prefs.record_attempt(row.username, row.quiz_path, bool(session.state["score"]["passed"]))
    except (prefs.PrefsNotFound, ValueError) as e:
        logger.warning("could not record attempt for %s: %s", row.username, e)


def _transition(session_id: int, action) -> Dict[str, Any]:
    with SessionLocal() as db:
        row, session = _load(db, session_id)
        try:
            action(session)
        except InvalidTransition as e:
            raise HTTPException(status_code=409, detail=str(e))
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        _save(db, row, session)
        return _view(row, session)


@router.post("", response_model=SessionOut)
def start_session(req: SessionCreate):
    try:
        questions = load_quiz(req.collection, req.quiz_path)
    except QuizNotFound:
        raise HTTPException(status_code=404, detail="quiz not found")
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    display_name = None
    if req.teacher:
        try:
            display_name = read_teacher(req.teacher).name
        except (TeacherNotFound, ValueError):
            logger.info("session started with unknown teacher %s", req.teacher)

    try:
        session = QuizSession.start(questions, display_name)
    except EmptyQuiz as e:
        raise HTTPException(status_code=400, detail=str(e))

    with SessionLocal() as db:
        row = QuizSessionRow(
            collection=req.collection,
            quiz_path=req.quiz_path,
            teacher=req.teacher,
            username=req.username,
            status=session.status,
            questions=[q.model_dump() for q in questions],
            state=session.state,
        )
        db.add(row)
        db.commit()
        db.refresh(row)
        logger.info("started session %s on %s", row.id, row.quiz_path)
        return _view(row, session)


@router.get("/recent-list")
def recent_sessions(limit: int = 20):
    limit = max(1, min(limit, 100))

    with SessionLocal() as db:
        rows = (
            db.query(QuizSessionRow)
            .order_by(QuizSessionRow.created_at.desc(), QuizSessionRow.id.desc())
            .limit(limit)
            .all()
        )

    items = [SessionSummary.model_validate(r).model_dump() for r in rows]
    return {"ok": True, "items": items, "count": len(items)}


@router.get("/{session_id}", response_model=SessionOut)
def get_session(session_id: int):
    with SessionLocal() as db:
        row, session = _load(db, session_id)
        return _view(row, session)


@router.post("/{session_id}/select", response_model=SessionOut)
def select_choice(session_id: int, req: SelectRequest):
    return _transition(session_id, lambda s: s.select(req.choice, req.checked))


@router.post("/{session_id}/code", response_model=SessionOut)
def save_code(session_id: int, req: CodeRequest):
    return _transition(session_id, lambda s: s.set_code(req.code))


@router.post("/{session_id}/language", response_model=SessionOut)
def change_language(session_id: int, req: LanguageRequest):
    return _transition(session_id, lambda s: s.set_language(req.language, req.replace))


@router.post("/{session_id}/run", response_model=SessionOut)
def run_code(session_id: int):
    return _transition(session_id, lambda s: s.run_code())


@router.post("/{session_id}/next", response_model=SessionOut)
def next_question(session_id: int):
    return _transition(session_id, lambda s: s.next())


@router.post("/{session_id}/previous", response_model=SessionOut)
def previous_question(session_id: int):
    return _transition(session_id, lambda s: s.previous())


@router.post("/{session_id}/restart", response_model=SessionOut)
def restart(session_id: int):
    return _transition(session_id, lambda s: s.restart())


@router.get("/{session_id}/results")
def results(session_id: int):
    with SessionLocal() as db:
        _, session = _load(db, session_id)
        try:
            return session.results_view()
        except InvalidTransition as e:
            raise HTTPException(status_code=409, detail=str(e))


@router.post("/{session_id}/hint", response_model=SessionOut)
def hint(session_id: int, req: SessionHintRequest, client: LLMClient = Depends(get_llm)):
    with SessionLocal() as db:
        row, session = _load(db, session_id)
        index = session.index if req.index is None else req.index
        try:
            question = session.question_at(index)
        except IndexError as e:
            raise HTTPException(status_code=400, detail=str(e))
        if req.type == "choice" and req.choice not in question.choices:
            raise HTTPException(status_code=400, detail="unknown choice")

        content = req.choice if req.type == "choice" else question.question
        prompt = hint_prompt(req.type, question, content or "", gender_of(row.teacher))
        try:
            text = client.chat(user_message(prompt))
        except LLMError as e:
            logger.warning("hint for session %s failed: %s", session_id, e)
            text = None

        session.apply_hint(text, index)
        _save(db, row, session)
        return _view(row, session)


@router.post("/{session_id}/analyze", response_model=SessionOut)
def analyze(session_id: int, client: LLMClient = Depends(get_llm)):
    with SessionLocal() as db:
        row, session = _load(db, session_id)
        question = session.current
        if not question.is_coding:
            raise HTTPException(status_code=409, detail="current question is not a coding question")

        code = session.code_for(session.index)
        if not code.strip():
            session.say(speech.nothing_to_analyze())
        else:
            prompt = analysis_prompt(question, code, session.language, gender_of(row.teacher))
            try:
                text = client.chat(user_message(prompt))
            except LLMError as e:
                logger.warning("analysis for session %s failed: %s", session_id, e)
                text = None
            session.apply_analysis(text)

        _save(db, row, session)
        return _view(row, session)
