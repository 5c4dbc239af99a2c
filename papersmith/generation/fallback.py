"""
Rule-based paper selection used when the external service cannot produce a paper.

Shuffle the pool, take one question per selected unit, then keep adding
questions until the target marks are reached or the pool runs out. The
total may overshoot the target; it is never trimmed back.
"""

from __future__ import annotations

import asyncio
import logging
import random
from typing import Optional

from papersmith.errors import GenerationCancelled
from papersmith.generation.assembler import assemble_paper
from papersmith.models import (
    FallbackReason,
    GeneratedPaper,
    GenerationConfig,
    GenerationMethod,
    PaperQuestion,
    PaperStatus,
    Question,
)

logger = logging.getLogger(__name__)


def select_fallback_questions(
    config: GenerationConfig,
    pool: list[Question],
    rng: Optional[random.Random] = None,
    cancel: Optional[asyncio.Event] = None,
) -> list[PaperQuestion]:
    rng = rng or random.Random()
    shuffled = list(pool)
    rng.shuffle(shuffled)

    chosen: list[Question] = []
    chosen_ids: set[int] = set()
    marks = 0

    # Coverage pass: one question per selected unit where the pool has one.
    for unit in config.units:
        q = next((c for c in shuffled if c.unit_id == unit.id and c.id not in chosen_ids), None)
        if q is None:
            logger.debug("No questions available for unit %s", unit.id)
            continue
        chosen.append(q)
        chosen_ids.add(q.id)
        marks += q.marks

    if cancel is not None and cancel.is_set():
        raise GenerationCancelled("generation cancelled during fallback selection")

    # Fill pass
    for q in shuffled:
        if marks >= config.total_marks:
            break
        if q.id in chosen_ids:
            continue
        chosen.append(q)
        chosen_ids.add(q.id)
        marks += q.marks

    return [PaperQuestion.from_question(q) for q in chosen]


def build_fallback_paper(
    config: GenerationConfig,
    pool: list[Question],
    *,
    rng: Optional[random.Random] = None,
    cancel: Optional[asyncio.Event] = None,
    reason: Optional[FallbackReason] = None,
) -> GeneratedPaper:
    questions = select_fallback_questions(config, pool, rng=rng, cancel=cancel)
    paper = assemble_paper(
        questions,
        config,
        GenerationMethod.fallback,
        status=PaperStatus.final,
        fallback_reason=reason,
    )
    logger.warning(
        "Fallback selected %d questions for %d/%d marks",
        len(paper.questions),
        paper.achieved_total_marks,
        paper.requested_total_marks,
    )
    return paper
