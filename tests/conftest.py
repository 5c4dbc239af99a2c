"""
PaperSmith - Test Configuration and Fixtures
"""
import os
import random
from typing import Any, Callable

import pytest

# Set testing environment before papersmith.settings is imported
os.environ["STORAGE_BACKEND"] = "inmemory"
os.environ["QUESTION_SOURCE"] = "inmemory"
os.environ["LLM_PROVIDER"] = "mock"
os.environ["OBSERVABILITY_ENABLED"] = "false"
os.environ.pop("GEMINI_API_KEY", None)

from papersmith.generation.external import ExternalPaperGenerator
from papersmith.generation.service import PaperService
from papersmith.llm.client import LLMClient
from papersmith.llm.types import LLMRequest, LLMResponse
from papersmith.models import (
    BloomLevel,
    DifficultyLevel,
    GenerationConfig,
    Question,
    QuestionType,
    Unit,
)
from papersmith.questions.inmemory import InMemoryQuestionRepository
from papersmith.storage.inmemory import InMemoryBackend
from papersmith.storage.store import PaperStore

MODELS = ["model-a", "model-b", "model-c"]


class ScriptedLLMClient(LLMClient):
    """LLM client that replays scripted responses, one per call.

    Items may be response text, an exception to raise, or an async callable
    taking the request.
    """

    def __init__(self, script: list[Any], api_key: str | None = "test-key") -> None:
        self.api_key = api_key
        self.script = list(script)
        self.requests: list[LLMRequest] = []

    async def generate(self, req: LLMRequest) -> LLMResponse:
        self.requests.append(req)
        item = self.script.pop(0)
        if isinstance(item, BaseException):
            raise item
        if callable(item):
            return await item(req)
        return LLMResponse(text=item)


class FailingBackend(InMemoryBackend):
    async def save(self, name, docs):
        raise OSError("disk full")


@pytest.fixture
def units() -> list[Unit]:
    return [
        Unit(id=1, course_id=1, unit_number=1, title="Foundations", topics=["Sets", "Relations"]),
        Unit(id=2, course_id=1, unit_number=2, title="Graphs", topics=["Trees", "Paths"]),
    ]


@pytest.fixture
def pool() -> list[Question]:
    """Ten questions across units 1 and 2 worth 100 marks in total."""
    marks = [5, 10, 15, 10, 10, 5, 10, 15, 10, 10]
    return [
        Question(
            id=i + 1,
            course_id=1,
            unit_id=1 if i < 5 else 2,
            text=f"Question {i + 1}",
            marks=m,
            bloom_level=BloomLevel.remember if i % 2 == 0 else BloomLevel.understand,
            difficulty=[DifficultyLevel.easy, DifficultyLevel.medium, DifficultyLevel.hard][i % 3],
            question_type=QuestionType.short,
        )
        for i, m in enumerate(marks)
    ]


@pytest.fixture
def make_config(units) -> Callable[..., GenerationConfig]:
    def _make(**overrides) -> GenerationConfig:
        data = {
            "course_id": 1,
            "exam_type": "mid",
            "total_marks": 30,
            "units": units,
            "difficulty_distribution": {"easy": 40, "medium": 40, "hard": 20},
            "bloom_distribution": {1: 50, 2: 50},
        }
        data.update(overrides)
        return GenerationConfig(**data)

    return _make


@pytest.fixture
def config(make_config) -> GenerationConfig:
    return make_config()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(42)


@pytest.fixture
def make_generator() -> Callable[..., ExternalPaperGenerator]:
    def _make(client: LLMClient, **kwargs) -> ExternalPaperGenerator:
        kwargs.setdefault("backoff_s", 0)
        kwargs.setdefault("attempt_timeout_s", 5)
        return ExternalPaperGenerator(client, kwargs.pop("models", MODELS), provider="test", **kwargs)

    return _make


@pytest.fixture
def store() -> PaperStore:
    return PaperStore(InMemoryBackend())


@pytest.fixture
def make_service(make_generator, store, pool, units) -> Callable[..., PaperService]:
    def _make(client: LLMClient, **kwargs) -> PaperService:
        paper_store = kwargs.pop("store", store)
        repo = InMemoryQuestionRepository(questions=pool, units=units)
        return PaperService(repo, make_generator(client, **kwargs), paper_store)

    return _make
