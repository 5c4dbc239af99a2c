from __future__ import annotations

import os
from typing import Any

from papersmith.llm.client import HTTPLLMClient
from papersmith.llm.types import LLMRequest, LLMResponse


class OpenAIClient(HTTPLLMClient):
    """OpenAI Responses API client; also serves Azure OpenAI through ``base_url``."""

    key_env = "OPENAI_API_KEY"

    def __init__(self, api_key: str | None = None, base_url: str | None = None, timeout: float = 60.0) -> None:
        super().__init__(
            api_key or os.getenv("OPENAI_API_KEY"),
            base_url or os.getenv("OPENAI_BASE_URL") or "https://api.openai.com/v1",
            timeout,
        )

    async def generate(self, req: LLMRequest) -> LLMResponse:
        key = self._require_key()

        payload: dict[str, Any] = {
            "model": req.model,
            "input": [m.model_dump() for m in req.messages],
            "temperature": req.temperature,
            "top_p": req.top_p,
            "max_output_tokens": req.max_output_tokens,
        }
        if req.response_format == "json":
            payload["text"] = {"format": {"type": "json_object"}}

        data = await self._post(f"{self.base_url}/responses", payload, {"Authorization": f"Bearer {key}"})

        text = "".join(
            content.get("text", "")
            for item in data.get("output") or []
            for content in item.get("content") or []
            if content.get("type") in ("output_text", "text")
        )

        usage = data.get("usage") or {}
        return LLMResponse(
            text=text,
            raw=data,
            input_tokens=usage.get("input_tokens"),
            output_tokens=usage.get("output_tokens"),
            total_tokens=usage.get("total_tokens"),
        )
