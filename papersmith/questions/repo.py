from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, Optional

from papersmith.models import Question, Unit


class QuestionRepository(ABC):
    """Read-only view over the question bank."""

    @abstractmethod
    async def list_questions(
        self, course_id: Optional[int] = None, unit_ids: Optional[Iterable[int]] = None
    ) -> list[Question]:
        raise NotImplementedError

    @abstractmethod
    async def list_units(self, course_id: Optional[int] = None) -> list[Unit]:
        raise NotImplementedError
