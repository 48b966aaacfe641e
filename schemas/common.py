# quizzer/schemas/common.py
from typing import Any, Optional

from pydantic import BaseModel


class Envelope(BaseModel):
    """Wrapper the legacy listing routes answer with."""

    status: int = 200
    data: Any = None
    error: Optional[str] = None
