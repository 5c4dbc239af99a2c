from __future__ import annotations

import os
from typing import Any

from papersmith.llm.client import HTTPLLMClient
from papersmith.llm.types import LLMRequest, LLMResponse

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


class GeminiClient(HTTPLLMClient):
    """Google Gemini client over the Generative Language REST API.

    JSON mode maps to ``generationConfig.responseMimeType = application/json``.
    """

    key_env = "GEMINI_API_KEY"

    def __init__(self, api_key: str | None = None, base_url: str | None = None, timeout: float = 60.0) -> None:
        super().__init__(
            api_key or os.getenv("GEMINI_API_KEY"),
            base_url or os.getenv("GEMINI_BASE_URL") or DEFAULT_BASE_URL,
            timeout,
        )

    async def generate(self, req: LLMRequest) -> LLMResponse:
        key = self._require_key()

        generation_config: dict[str, Any] = {
            "temperature": req.temperature,
            "topP": req.top_p,
            "maxOutputTokens": req.max_output_tokens,
        }
        if req.response_format == "json":
            generation_config["responseMimeType"] = "application/json"

        payload: dict[str, Any] = {
            "contents": [
                {"role": "model" if m.role == "assistant" else "user", "parts": [{"text": m.content}]}
                for m in req.turns()
            ],
            "generationConfig": generation_config,
        }
        system = req.system_text()
        if system:
            payload["systemInstruction"] = {"parts": [{"text": system}]}

        data = await self._post(
            f"{self.base_url}/models/{req.model}:generateContent",
            payload,
            {"x-goog-api-key": key},
        )

        # Only the first candidate is used.
        parts = []
        for candidate in (data.get("candidates") or [])[:1]:
            parts = (candidate.get("content") or {}).get("parts") or []

        usage = data.get("usageMetadata") or {}
        return LLMResponse(
            text="".join(p.get("text", "") for p in parts),
            raw=data,
            input_tokens=usage.get("promptTokenCount"),
            output_tokens=usage.get("candidatesTokenCount"),
            total_tokens=usage.get("totalTokenCount"),
        )
