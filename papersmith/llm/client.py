from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import httpx

from papersmith.llm.types import LLMRequest, LLMResponse


class LLMClient(ABC):
    """A text generation backend.

    ``is_configured`` is false when the client has no credential; callers are
    expected to check it before spending a request.
    """

    api_key: str | None = None

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    @abstractmethod
    async def generate(self, req: LLMRequest) -> LLMResponse:
        raise NotImplementedError


class HTTPLLMClient(LLMClient):
    """Shared plumbing for providers reached over a JSON HTTP API."""

    key_env: str = ""

    def __init__(self, api_key: str | None, base_url: str, timeout: float) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _require_key(self) -> str:
        if not self.api_key:
            raise RuntimeError(f"{self.key_env or 'API key'} is not set")
        return self.api_key

    async def _post(self, url: str, payload: dict[str, Any], headers: dict[str, str]) -> dict[str, Any]:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            r = await client.post(url, json=payload, headers=headers)
            r.raise_for_status()
            return r.json()
