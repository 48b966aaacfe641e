from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Dict, List, Optional

import boto3
import httpx
from botocore.exceptions import BotoCoreError, ClientError

import settings
from teachers import TtsEngine

logger = logging.getLogger("quizzer.tts")

POLLY = "polly"
DEFAULT_FORMAT = "mp3"
DEFAULT_SAMPLE_RATE = "22050"


class TTSError(RuntimeError):
    pass


@lru_cache(maxsize=1)
def polly_client() -> Any:
    return boto3.client("polly", region_name=settings.AWS_REGION)


class SpeechSynth:
    """
    Amazon Polly by default; a teacher whose ttsEngine names a base URL and a
    non-polly model goes to that OpenAI-compatible /audio/speech endpoint.
    """

    def __init__(self, polly: Any = None, transport: Optional[httpx.BaseTransport] = None):
        self._polly = polly
        self.transport = transport

    @property
    def polly(self) -> Any:
        if self._polly is None:
            self._polly = polly_client()
        return self._polly

    def list_voices(self) -> Dict[str, Dict[str, List[str]]]:
        try:
            resp = self.polly.describe_voices()
        except (BotoCoreError, ClientError) as e:
            logger.error("describe_voices failed: %s", e)
            raise TTSError(str(e)) from e

        voices: Dict[str, Dict[str, List[str]]] = {}
        for v in resp.get("Voices", []):
            language = v.get("LanguageName")
            if not language:
                continue
            bucket = voices.setdefault(language, {"male": [], "female": []})
            gender = (v.get("Gender") or "").lower()
            if gender in bucket:
                bucket[gender].append(v.get("Name"))
        return voices

    def synthesize(
        self,
        text: str,
        voice: Optional[str] = None,
        output_format: str = DEFAULT_FORMAT,
        sample_rate: str = DEFAULT_SAMPLE_RATE,
        engine: Optional[TtsEngine] = None,
    ) -> bytes:
        if not text or not text.strip():
            raise TTSError("Couldn't find Text in Payload.")
        voice = voice or (engine.voice_name if engine else None) or settings.DEFAULT_VOICE

        if engine and engine.base_url and (engine.model or POLLY) != POLLY:
            return self._synthesize_remote(text, voice, output_format, engine)

        try:
            resp = self.polly.synthesize_speech(
                Text=text,
                OutputFormat=output_format,
                VoiceId=voice,
                SampleRate=str(sample_rate),
            )
        except (BotoCoreError, ClientError) as e:
            logger.error("synthesize_speech failed: %s", e)
            raise TTSError(str(e)) from e

        stream = resp.get("AudioStream")
        if stream is None:
            raise TTSError("No audio stream received")
        with stream:
            return stream.read()

    def _synthesize_remote(
        self, text: str, voice: str, output_format: str, engine: TtsEngine
    ) -> bytes:
        headers = {}
        if engine.token:
            headers["Authorization"] = f"Bearer {engine.token}"
        body = {
            "model": engine.model,
            "input": text,
            "voice": voice,
            "response_format": output_format,
        }
        try:
            with httpx.Client(
                base_url=engine.base_url.rstrip("/"),
                headers=headers,
                timeout=settings.llm_timeout(),
                transport=self.transport,
            ) as client:
                r = client.post("/audio/speech", json=body)
                r.raise_for_status()
                return r.content
        except httpx.HTTPError as e:
            logger.error("remote speech synthesis failed: %s", e)
            raise TTSError(str(e)) from e
