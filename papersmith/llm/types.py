from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field

Role = Literal["system", "user", "assistant"]


class LLMMessage(BaseModel):
    role: Role
    content: str


class LLMRequest(BaseModel):
    provider: str
    model: str
    messages: list[LLMMessage]

    temperature: float = 0.4
    top_p: float = 1.0
    max_output_tokens: int = 4096
    response_format: Literal["text", "json"] = "text"

    # Side-channel data for clients that answer locally (see MockLLMClient).
    metadata: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_prompts(cls, *, system: str, user: str, **kwargs: Any) -> "LLMRequest":
        return cls(
            messages=[LLMMessage(role="system", content=system), LLMMessage(role="user", content=user)],
            **kwargs,
        )

    def system_text(self) -> str:
        return "\n".join(m.content for m in self.messages if m.role == "system").strip()

    def turns(self) -> list[LLMMessage]:
        """Messages without the system prompt, for APIs that take it separately."""
        return [m for m in self.messages if m.role != "system"]


class LLMResponse(BaseModel):
    text: str
    raw: Optional[dict[str, Any]] = None

    input_tokens: int | None = None
    output_tokens: int | None = None
    total_tokens: int | None = None
