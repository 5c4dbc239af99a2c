from __future__ import annotations

import json

from papersmith.llm.client import LLMClient
from papersmith.llm.types import LLMRequest, LLMResponse


class MockLLMClient(LLMClient):
    """Deterministic mock LLM for local development.

    Picks questions from ``metadata["source_questions"]`` in order until
    ``metadata["total_marks"]`` is reached and answers in the paper JSON shape.
    """

    api_key = "mock"

    async def generate(self, req: LLMRequest) -> LLMResponse:
        source = list(req.metadata.get("source_questions") or [])
        target = int(req.metadata.get("total_marks") or 0)

        picked: list[dict] = []
        marks = 0
        for q in source:
            if marks >= target:
                break
            picked.append(q)
            marks += int(q.get("marks") or 0)

        payload = {"questions": picked, "totalMarks": marks}
        return LLMResponse(text=json.dumps(payload, ensure_ascii=False), raw={"provider": "mock", "model": req.model})
