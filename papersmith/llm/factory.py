from __future__ import annotations

import logging

from papersmith.llm.anthropic import AnthropicClient
from papersmith.llm.client import LLMClient
from papersmith.llm.gemini import GeminiClient
from papersmith.llm.groq import GroqClient
from papersmith.llm.mock import MockLLMClient
from papersmith.llm.openai import OpenAIClient
from papersmith.settings import Settings, settings as default_settings

logger = logging.getLogger(__name__)


def get_llm_client(provider: str, settings: Settings | None = None) -> LLMClient:
    s = settings or default_settings
    timeout = s.external_attempt_timeout_s
    p = (provider or "").strip().lower()
    if p in ("mock", "dev"):
        return MockLLMClient()
    if p in ("gemini", "google"):
        return GeminiClient(api_key=s.gemini_api_key, base_url=s.gemini_base_url, timeout=timeout)
    if p in ("openai", "azure_openai"):
        # Azure OpenAI works through OPENAI_BASE_URL + key on the same client.
        return OpenAIClient(api_key=s.openai_api_key, base_url=s.openai_base_url, timeout=timeout)
    if p in ("anthropic",):
        return AnthropicClient(
            api_key=s.anthropic_api_key,
            base_url=s.anthropic_base_url,
            version=s.anthropic_version,
            timeout=timeout,
        )
    if p in ("groq",):
        return GroqClient(api_key=s.groq_api_key, base_url=s.groq_base_url, timeout=timeout)

    # Unknown providers fall back to mock to keep the system usable in dev.
    logger.warning("Unknown LLM provider %r, using mock client", provider)
    return MockLLMClient()
