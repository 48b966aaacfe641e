# Provider factories, overridable through app.dependency_overrides.
from llm import LLMClient, default_client
from tts import SpeechSynth


def get_llm() -> LLMClient:
    return default_client()


def get_synth() -> SpeechSynth:
    return SpeechSynth()
