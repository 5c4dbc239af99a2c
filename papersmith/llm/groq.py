from __future__ import annotations

import os
from typing import Any

from papersmith.llm.client import HTTPLLMClient
from papersmith.llm.types import LLMRequest, LLMResponse


class GroqClient(HTTPLLMClient):
    """Groq exposes an OpenAI-compatible chat completions surface."""

    key_env = "GROQ_API_KEY"

    def __init__(self, api_key: str | None = None, base_url: str | None = None, timeout: float = 60.0) -> None:
        super().__init__(
            api_key or os.getenv("GROQ_API_KEY"),
            base_url or os.getenv("GROQ_BASE_URL") or "https://api.groq.com/openai/v1",
            timeout,
        )

    async def generate(self, req: LLMRequest) -> LLMResponse:
        key = self._require_key()

        payload: dict[str, Any] = {
            "model": req.model,
            "messages": [m.model_dump() for m in req.messages],
            "temperature": req.temperature,
            "top_p": req.top_p,
            "max_tokens": req.max_output_tokens,
        }
        if req.response_format == "json":
            payload["response_format"] = {"type": "json_object"}

        data = await self._post(f"{self.base_url}/chat/completions", payload, {"Authorization": f"Bearer {key}"})

        text = ""
        choices = data.get("choices") or []
        if choices:
            text = ((choices[0] or {}).get("message") or {}).get("content") or ""

        usage = data.get("usage") or {}
        return LLMResponse(
            text=text,
            raw=data,
            input_tokens=usage.get("prompt_tokens"),
            output_tokens=usage.get("completion_tokens"),
            total_tokens=usage.get("total_tokens"),
        )
