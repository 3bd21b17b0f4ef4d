"""Ollama LLM provider, local-first with no API keys.

Used for relevance judgments during reranking; any instruction-following
model pulled into Ollama will do.
"""

from __future__ import annotations

import logging

from docrag.errors import ServiceError
from docrag.llm.base import LLMProvider
from docrag.ollama import OllamaTransport

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "llama3.2"


class OllamaLLMProvider(LLMProvider):
    """Generate responses via a local Ollama server."""

    def __init__(
        self,
        transport: OllamaTransport | None = None,
        model: str = DEFAULT_MODEL,
        temperature: float = 0.2,
        max_tokens: int = 256,
    ):
        self.transport = transport or OllamaTransport()
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    async def generate(
        self,
        prompt: str,
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
        stop: list[str] | None = None,
    ) -> str:
        options: dict = {
            "temperature": self.temperature if temperature is None else temperature,
            "num_predict": self.max_tokens if max_tokens is None else max_tokens,
        }
        if stop:
            options["stop"] = stop

        data = await self.transport.post_json(
            "/api/generate",
            {
                "model": self.model,
                "prompt": prompt,
                "stream": False,
                "options": options,
            },
        )
        response = data.get("response")
        if not isinstance(response, str):
            raise ServiceError("Invalid response from Ollama: missing or non-string response")
        logger.debug("Ollama %s replied with %d chars", self.model, len(response))
        return response

    async def ping(self) -> bool:
        return await self.transport.ping()
