from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

import settings

logger = logging.getLogger("quizzer.llm")


class LLMError(RuntimeError):
    pass


class LLMClient:
    """Thin client for an OpenAI-compatible chat completions endpoint."""

    def __init__(
        self,
        base_url: str,
        token: str = "",
        timeout: float = 60.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.transport = transport

    def _client(self) -> httpx.Client:
        if not self.base_url:
            raise LLMError("LLM_BASE_URL not configured on server.")
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return httpx.Client(
            base_url=self.base_url,
            headers=headers,
            timeout=self.timeout,
            transport=self.transport,
        )

    def list_models(self) -> Any:
        try:
            with self._client() as client:
                r = client.get("/models")
                r.raise_for_status()
                return r.json()
        except httpx.HTTPError as e:
            logger.error("model listing failed: %s", e)
            raise LLMError(f"upstream error: {e}") from e

    def chat(self, messages: List[Dict[str, str]], model: Optional[str] = None) -> str:
        body = {"model": model or settings.llm_model(), "messages": messages}
        try:
            with self._client() as client:
                r = client.post("/chat/completions", json=body)
                r.raise_for_status()
                data = r.json()
        except httpx.HTTPError as e:
            logger.error("chat completion failed: %s", e)
            raise LLMError(f"upstream error: {e}") from e
        except ValueError as e:
            raise LLMError("upstream returned invalid JSON") from e

        try:
            return data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise LLMError("upstream response has no completion") from e


def default_client() -> LLMClient:
    return LLMClient(settings.llm_base_url(), settings.llm_token(), settings.llm_timeout())
