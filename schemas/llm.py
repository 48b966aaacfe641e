# quizzer/schemas/llm.py
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from hints import HintKind
from quizbank import QuizQuestion
from speech import SpeechBubble


class ChatMessage(BaseModel):
    role: str
    content: str


class ChatRequest(BaseModel):
    model: Optional[str] = None
    messages: List[ChatMessage]


class HintRequest(BaseModel):
    type: HintKind = "question"
    question: QuizQuestion
    content: str = ""
    teacher: Optional[str] = None


class HintResponse(BaseModel):
    ok: bool
    message: str
    bubble: SpeechBubble


class TTSRequest(BaseModel):
    # field names follow the Polly request the front-end already sends
    model_config = ConfigDict(populate_by_name=True)

    text: str = Field(default="", alias="Text")
    voice_id: Optional[str] = Field(default=None, alias="VoiceId")
    output_format: str = Field(default="mp3", alias="OutputFormat")
    sample_rate: str = Field(default="22050", alias="SampleRate")
    base_url: Optional[str] = Field(default=None, alias="baseUrl")
    model: Optional[str] = None
    teacher: Optional[str] = None
