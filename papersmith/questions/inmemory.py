from __future__ import annotations

from typing import Iterable, Optional

from papersmith.models import Question, Unit
from papersmith.questions.repo import QuestionRepository
from papersmith.questions.seed import SEED_QUESTIONS, SEED_UNITS


class InMemoryQuestionRepository(QuestionRepository):
    def __init__(self, questions: Optional[list[Question]] = None, units: Optional[list[Unit]] = None) -> None:
        self.questions: list[Question] = list(SEED_QUESTIONS if questions is None else questions)
        self.units: dict[int, Unit] = {u.id: u for u in (SEED_UNITS if units is None else units)}

    async def list_questions(
        self, course_id: Optional[int] = None, unit_ids: Optional[Iterable[int]] = None
    ) -> list[Question]:
        wanted = set(unit_ids) if unit_ids is not None else None
        return [
            q
            for q in self.questions
            if (course_id is None or q.course_id == course_id) and (wanted is None or q.unit_id in wanted)
        ]

    async def list_units(self, course_id: Optional[int] = None) -> list[Unit]:
        units = sorted(self.units.values(), key=lambda u: (u.course_id, u.unit_number))
        return [u for u in units if course_id is None or u.course_id == course_id]
