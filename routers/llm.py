from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

import speech
from deps.services import get_llm
from hints import hint_prompt, user_message
from llm import LLMClient, LLMError
from schemas.llm import ChatRequest, HintRequest, HintResponse
from teachers import gender_of

logger = logging.getLogger("quizzer.routers.llm")

router = APIRouter(prefix="/api", tags=["llm"])


@router.get("/llm")
def llm_models(client: LLMClient = Depends(get_llm)):
    try:
        return client.list_models()
    except LLMError as e:
        raise HTTPException(status_code=502, detail=str(e))


@router.post("/llm")
def llm_chat(req: ChatRequest, client: LLMClient = Depends(get_llm)):
    messages = [m.model_dump() for m in req.messages]
    try:
        return client.chat(messages, req.model)
    except LLMError as e:
        raise HTTPException(status_code=502, detail=str(e))


@router.post("/hints", response_model=HintResponse)
def hint(req: HintRequest, client: LLMClient = Depends(get_llm)):
    """
    Ask the LLM for a hint and hand it back as something the teacher can say.
    Upstream failures still answer 200 with the teacher's apology bubble.
    """
    prompt = hint_prompt(req.type, req.question, req.content, gender_of(req.teacher))
    try:
        text = client.chat(user_message(prompt))
    except LLMError as e:
        logger.warning("hint generation failed: %s", e)
        bubble = speech.hint_failed()
        return {"ok": False, "message": bubble.message, "bubble": bubble}

    return {"ok": True, "message": text, "bubble": speech.hint_ready(text)}
