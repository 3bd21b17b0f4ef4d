"""Thin async HTTP layer over an Ollama server.

Both the embedding provider and the LLM provider talk to the same server
through this class, so error mapping and timeouts live in one place.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from docrag.errors import ServiceError, ServiceTimeoutError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:11434"
DEFAULT_TIMEOUT = 30.0
DEFAULT_PING_TIMEOUT = 5.0


class OllamaTransport:
    """POST JSON to Ollama with a per-request deadline."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        ping_timeout: float = DEFAULT_PING_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.ping_timeout = ping_timeout
        self._transport = transport

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def post_json(self, path: str, payload: dict[str, Any]) -> dict[str, Any]:
        """POST ``payload`` to ``path`` and return the decoded JSON object.

        Raises:
            ServiceTimeoutError: No response within ``timeout`` seconds.
            ServiceError: Non-2xx status, transport failure, or a body that
                is not a JSON object.
        """
        try:
            async with self._client() as client:
                resp = await client.post(path, json=payload, timeout=self.timeout)
                resp.raise_for_status()
                data = resp.json()
        except httpx.TimeoutException as exc:
            raise ServiceTimeoutError(
                f"Ollama request to {path} timed out after {self.timeout}s"
            ) from exc
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            raise ServiceError(
                f"Ollama API error on {path}: {status} {exc.response.reason_phrase}",
                status_code=status,
            ) from exc
        except httpx.HTTPError as exc:
            raise ServiceError(f"Ollama request to {path} failed: {exc}") from exc
        except ValueError as exc:
            raise ServiceError(f"Ollama returned invalid JSON from {path}") from exc

        if not isinstance(data, dict):
            raise ServiceError(f"Ollama returned a non-object body from {path}")
        return data

    async def ping(self) -> bool:
        """Return True if ``GET /api/version`` answers with a 2xx status."""
        try:
            async with self._client() as client:
                resp = await client.get("/api/version", timeout=self.ping_timeout)
        except httpx.HTTPError as exc:
            logger.debug("Ollama ping to %s failed: %s", self.base_url, exc)
            return False
        return resp.is_success

    # ------------------------------------------------------------------
    # Private
    # ------------------------------------------------------------------

    def _client(self) -> httpx.AsyncClient:
        # One client per call keeps the transport independent of any event loop.
        return httpx.AsyncClient(base_url=self.base_url, transport=self._transport)
