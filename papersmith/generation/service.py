from __future__ import annotations

import asyncio
import logging
import random
import time
from typing import Optional

from papersmith.errors import ExternalGenerationExhausted, ServiceUnavailable, StoreIOFailure
from papersmith.generation.assembler import assemble_paper
from papersmith.generation.external import ExternalPaperGenerator
from papersmith.generation.fallback import build_fallback_paper
from papersmith.generation.validator import ensure_valid, validate_config
from papersmith.models import (
    FallbackReason,
    GeneratedPaper,
    GenerationConfig,
    GenerationMethod,
    PaperStatus,
    Question,
    ValidationResult,
)
from papersmith.observability import get_tracer
from papersmith.questions.repo import QuestionRepository
from papersmith.storage.store import PaperStore

logger = logging.getLogger(__name__)


def _ms_since(start: float) -> float:
    return (time.perf_counter() - start) * 1000.0


class PaperService:
    """Entry point for validating configs, generating papers and managing history."""

    def __init__(self, questions: QuestionRepository, generator: ExternalPaperGenerator, store: PaperStore) -> None:
        self.questions = questions
        self.generator = generator
        self.store = store

    def validate_config(self, config: GenerationConfig) -> ValidationResult:
        return validate_config(config)

    async def generate_paper(
        self,
        config: GenerationConfig,
        available_questions: Optional[list[Question]] = None,
        *,
        rng: Optional[random.Random] = None,
        cancel: Optional[asyncio.Event] = None,
        persist: bool = False,
    ) -> GeneratedPaper:
        """Generate a paper for ``config``.

        Raises InvalidConfiguration before any external call when the config
        is invalid. Otherwise always returns a paper: when the external
        service has no credential or every candidate model fails, the
        rule-based fallback produces it. With ``persist`` the paper is also
        saved; a StoreIOFailure then carries the generated paper.
        """
        ensure_valid(config)

        tracer = get_tracer()
        start = time.perf_counter()
        with tracer.start_as_current_span("paper.generate") as span:
            span.set_attribute("course.id", config.course_id)
            span.set_attribute("paper.exam_type", config.exam_type)
            span.set_attribute("paper.total_marks.requested", config.total_marks)

            if available_questions is None:
                available_questions = await self.questions.list_questions(course_id=config.course_id)
            pool = list(available_questions)
            span.set_attribute("paper.pool.size", len(pool))

            reason: Optional[FallbackReason] = None
            try:
                result = await self.generator.generate(config, pool, cancel=cancel)
            except ServiceUnavailable as e:
                logger.warning("External generation unavailable, using fallback: %s", e)
                reason = FallbackReason.service_unavailable
            except ExternalGenerationExhausted as e:
                logger.warning("Falling back to rule-based generation: %s", e)
                reason = FallbackReason.exhausted

            if reason is None:
                paper = assemble_paper(
                    result.questions,
                    config,
                    GenerationMethod.external,
                    status=PaperStatus.final,
                    model=result.model,
                    declared_total_marks=result.declared_total_marks,
                    reported_total_marks=result.total_marks,
                )
            else:
                paper = build_fallback_paper(config, pool, rng=rng, cancel=cancel, reason=reason)

            span.set_attribute("paper.id", paper.paper_id)
            span.set_attribute("paper.method", paper.generation_method.value)
            span.set_attribute("paper.total_marks.achieved", paper.achieved_total_marks)
            span.set_attribute("paper.latency_ms", round(_ms_since(start), 3))

        if paper.warnings:
            logger.warning(
                "Paper %s generated with warnings %s (%d/%d marks)",
                paper.paper_id,
                paper.warnings,
                paper.achieved_total_marks,
                paper.requested_total_marks,
            )

        if persist:
            try:
                paper = await self.save_paper(paper)
            except StoreIOFailure as e:
                e.paper = paper
                raise
        return paper

    async def save_paper(self, paper: GeneratedPaper) -> GeneratedPaper:
        return await self.store.add(paper)

    async def delete_paper(self, paper_id: str) -> None:
        await self.store.delete(paper_id)

    async def list_papers(self) -> list[GeneratedPaper]:
        return await self.store.list()

    async def get_paper_by_id(self, paper_id: str) -> Optional[GeneratedPaper]:
        return await self.store.get_by_id(paper_id)

    async def clear_papers(self) -> None:
        await self.store.clear()
