from __future__ import annotations

import os
from typing import Any

from papersmith.llm.client import HTTPLLMClient
from papersmith.llm.types import LLMRequest, LLMResponse

JSON_ONLY = "Respond with a single JSON object and nothing else."


class AnthropicClient(HTTPLLMClient):
    key_env = "ANTHROPIC_API_KEY"

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        version: str | None = None,
        timeout: float = 60.0,
    ) -> None:
        super().__init__(
            api_key or os.getenv("ANTHROPIC_API_KEY"),
            base_url or os.getenv("ANTHROPIC_BASE_URL") or "https://api.anthropic.com",
            timeout,
        )
        self.version = version or os.getenv("ANTHROPIC_VERSION") or "2023-06-01"

    async def generate(self, req: LLMRequest) -> LLMResponse:
        key = self._require_key()

        # No native JSON mode; the instruction goes into the system prompt.
        system = req.system_text()
        if req.response_format == "json":
            system = f"{system}\n{JSON_ONLY}".strip()

        payload: dict[str, Any] = {
            "model": req.model,
            "max_tokens": req.max_output_tokens,
            "temperature": req.temperature,
            "messages": [m.model_dump() for m in req.turns()],
        }
        if system:
            payload["system"] = system

        data = await self._post(
            f"{self.base_url}/v1/messages",
            payload,
            {"x-api-key": key, "anthropic-version": self.version},
        )

        usage = data.get("usage") or {}
        input_tokens = usage.get("input_tokens")
        output_tokens = usage.get("output_tokens")
        total_tokens = None
        if isinstance(input_tokens, int) and isinstance(output_tokens, int):
            total_tokens = input_tokens + output_tokens

        return LLMResponse(
            text="".join(c.get("text", "") for c in data.get("content") or [] if c.get("type") == "text"),
            raw=data,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            total_tokens=total_tokens,
        )
