from __future__ import annotations

from functools import lru_cache

from papersmith.generation.external import ExternalPaperGenerator
from papersmith.generation.service import PaperService
from papersmith.llm.factory import get_llm_client
from papersmith.questions.inmemory import InMemoryQuestionRepository
from papersmith.questions.mongo import MongoQuestionRepository
from papersmith.questions.repo import QuestionRepository
from papersmith.settings import settings
from papersmith.storage.backend import PersistenceBackend
from papersmith.storage.inmemory import InMemoryBackend
from papersmith.storage.jsonfile import JsonFileBackend
from papersmith.storage.mongo import MongoBackend
from papersmith.storage.store import PaperStore


@lru_cache
def get_question_repo() -> QuestionRepository:
    if (settings.question_source or "inmemory").lower() == "mongo":
        return MongoQuestionRepository(settings.mongodb_uri, settings.mongodb_db)
    return InMemoryQuestionRepository()


def _backend() -> PersistenceBackend:
    backend = (settings.storage_backend or "file").lower()
    if backend == "mongo":
        return MongoBackend(settings.mongodb_uri, settings.mongodb_db)
    if backend == "inmemory":
        return InMemoryBackend()
    return JsonFileBackend(settings.storage_dir)


@lru_cache
def get_store() -> PaperStore:
    return PaperStore(_backend(), settings.storage_collection)


@lru_cache
def get_generator() -> ExternalPaperGenerator:
    return ExternalPaperGenerator(
        get_llm_client(settings.llm_provider, settings),
        settings.external_models,
        provider=settings.llm_provider,
        pool_cap=settings.external_pool_cap,
        backoff_s=settings.external_backoff_s,
        attempt_timeout_s=settings.external_attempt_timeout_s,
        temperature=settings.llm_temperature,
        max_output_tokens=settings.llm_max_output_tokens,
    )


@lru_cache
def get_service() -> PaperService:
    return PaperService(get_question_repo(), get_generator(), get_store())
