# What the teacher avatar says and how it looks while saying it.
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


def estimate_duration(message: str) -> int:
    """Display time when no audio could be produced for the message."""
    return max(4000, len(message) * 80)


def speak_duration(message: str) -> int:
    return max(5000, len(message) * 100)


class SpeechBubble(BaseModel):
    message: str = ""
    emotion: str = "neutral"
    is_visible: bool = True
    auto_hide: bool = True
    # milliseconds; 0 means "stay until replaced"
    duration: int = 5000
    # how long to keep the bubble up when the audio never plays
    silent_duration: int = 0


def bubble(message: str, emotion: str = "neutral", duration: Optional[int] = None) -> SpeechBubble:
    return SpeechBubble(
        message=message,
        emotion=emotion,
        duration=speak_duration(message) if duration is None else duration,
        silent_duration=estimate_duration(message),
    )


def hidden() -> SpeechBubble:
    return SpeechBubble(is_visible=False, duration=0)


def greeting(teacher_name: Optional[str]) -> Optional[SpeechBubble]:
    if not teacher_name:
        return None
    return bubble(
        f"Hi, I'm {teacher_name}! Let's start this quiz. "
        "For coding questions, you can write and run your code!",
        duration=6000,
    )


def next_question() -> SpeechBubble:
    return bubble("Great! Let's move to the next question.", "happy", 3000)


def restart() -> SpeechBubble:
    return bubble(
        "Let's try again! You can do it! Remember, you can click for hints anytime.",
        "neutral",
        4000,
    )


def hint_ready(text: str) -> SpeechBubble:
    return bubble(text, "happy", 8000)


def analysis_ready(text: str) -> SpeechBubble:
    return bubble(text, "happy", 12000)


def hint_failed() -> SpeechBubble:
    return bubble(
        "Sorry, I couldn't generate a hint right now. "
        "Try thinking about what you already know about this topic!",
        "worried",
        5000,
    )


def analysis_failed() -> SpeechBubble:
    return bubble(
        "Sorry, I couldn't analyze your code right now. Please try again later.",
        "worried",
        4000,
    )


def nothing_to_analyze() -> SpeechBubble:
    return bubble(
        "There's no code to analyze yet. Start writing your solution first!", "worried", 3000
    )


def code_passed() -> SpeechBubble:
    return bubble("Great job! Your code passed all the test cases!", "excited", 4000)


def code_failed() -> SpeechBubble:
    return bubble(
        "Your code didn't pass all the test cases. Check the results and try again!",
        "worried",
        4000,
    )


def code_error() -> SpeechBubble:
    return bubble(
        "Oops! There was an error running your code. Check for syntax errors!", "surprised", 4000
    )


def results(percent: float) -> SpeechBubble:
    if percent >= 80:
        return bubble(
            f"Excellent job! You scored {percent:.1f}%! You can review your answers below.",
            "excited",
            6000,
        )
    if percent >= 60:
        return bubble(
            f"Good work! You scored {percent:.1f}%. Review your answers to see where you can improve!",
            "happy",
            6000,
        )
    return bubble(
        f"You scored {percent:.1f}%. Don't worry! Review the solutions and try again.",
        "worried",
        6000,
    )
