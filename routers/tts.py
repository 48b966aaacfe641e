from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse, Response

from deps.services import get_synth
from schemas.llm import TTSRequest
from teachers import TeacherNotFound, TtsEngine, read_teacher
from tts import SpeechSynth, TTSError

logger = logging.getLogger("quizzer.routers.tts")

router = APIRouter(prefix="/api/tts", tags=["tts"])


@router.get("")
def voices(synth: SpeechSynth = Depends(get_synth)):
    try:
        return synth.list_voices()
    except TTSError as e:
        raise HTTPException(status_code=502, detail=str(e))


def _engine_for(req: TTSRequest) -> TtsEngine | None:
    # a named teacher brings its own engine, token included
    if req.teacher:
        try:
            return read_teacher(req.teacher).tts_engine
        except (TeacherNotFound, ValueError):
            logger.info("tts requested for unknown teacher %s", req.teacher)
    if req.base_url or req.model:
        return TtsEngine(base_url=req.base_url, model=req.model)
    return None


@router.post("")
def synthesize(req: TTSRequest, synth: SpeechSynth = Depends(get_synth)):
    try:
        audio = synth.synthesize(
            req.text,
            voice=req.voice_id,
            output_format=req.output_format,
            sample_rate=req.sample_rate,
            engine=_engine_for(req),
        )
    except TTSError as e:
        logger.error("error synthesizing speech: %s", e)
        # the text is echoed back so the client can fall back to local speech
        return JSONResponse(
            status_code=502,
            content={"text": req.text or "Couldn't find Text in Payload.", "detail": str(e)},
        )

    return Response(
        content=audio,
        media_type="audio/mpeg",
        headers={"Content-Disposition": "inline; filename=speech.mp3"},
    )
