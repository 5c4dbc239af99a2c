from __future__ import annotations

import threading
import time
from datetime import datetime, timezone
from typing import Optional

from papersmith.models import (
    FallbackReason,
    GeneratedPaper,
    GenerationConfig,
    GenerationMethod,
    PaperQuestion,
    PaperStatus,
)

WARNING_EMPTY = "empty_paper"
WARNING_UNDER_TARGET = "under_target"
WARNING_TOTAL_MISMATCH = "total_mismatch"

_id_lock = threading.Lock()
_last_id = 0


def new_paper_id() -> str:
    """Millisecond timestamp, bumped when needed so ids keep increasing."""
    global _last_id
    with _id_lock:
        candidate = int(time.time() * 1000)
        _last_id = candidate if candidate > _last_id else _last_id + 1
        return str(_last_id)


def result_warnings(
    questions: list[PaperQuestion], requested: int, reported: Optional[int] = None
) -> list[str]:
    warnings: list[str] = []
    achieved = sum(q.marks for q in questions)
    if not questions:
        warnings.append(WARNING_EMPTY)
    if achieved < requested:
        warnings.append(WARNING_UNDER_TARGET)
    if reported is not None and reported != achieved:
        warnings.append(WARNING_TOTAL_MISMATCH)
    return warnings


def assemble_paper(
    questions: list[PaperQuestion],
    config: GenerationConfig,
    method: GenerationMethod,
    *,
    status: PaperStatus = PaperStatus.final,
    model: Optional[str] = None,
    declared_total_marks: Optional[int] = None,
    reported_total_marks: Optional[int] = None,
    fallback_reason: Optional[FallbackReason] = None,
    now: Optional[datetime] = None,
) -> GeneratedPaper:
    """Build the paper record for ``questions``.

    ``reported_total_marks`` is the total the generator claimed; a paper whose
    own sum differs from it is flagged with ``total_mismatch``.
    """
    snapshot = [q.model_copy() for q in questions]
    return GeneratedPaper(
        paper_id=new_paper_id(),
        course_id=config.course_id,
        exam_type=config.exam_type,
        questions=snapshot,
        requested_total_marks=config.total_marks,
        achieved_total_marks=sum(q.marks for q in snapshot),
        declared_total_marks=declared_total_marks,
        config=config.model_copy(deep=True),
        generated_at=now or datetime.now(timezone.utc),
        status=status,
        generation_method=method,
        model=model,
        fallback_reason=fallback_reason,
        warnings=result_warnings(snapshot, config.total_marks, reported_total_marks),
    )
