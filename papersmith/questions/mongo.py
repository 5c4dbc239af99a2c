from __future__ import annotations

from typing import Any, Iterable, Optional

from motor.motor_asyncio import AsyncIOMotorClient

from papersmith.models import Question, Unit
from papersmith.questions.repo import QuestionRepository


class MongoQuestionRepository(QuestionRepository):
    def __init__(self, mongo_uri: str, db_name: str) -> None:
        self.client = AsyncIOMotorClient(mongo_uri)
        self.db = self.client[db_name]
        self.questions = self.db["questions"]
        self.units = self.db["units"]

    async def list_questions(
        self, course_id: Optional[int] = None, unit_ids: Optional[Iterable[int]] = None
    ) -> list[Question]:
        query: dict[str, Any] = {}
        if course_id is not None:
            query["course_id"] = course_id
        if unit_ids is not None:
            query["unit_id"] = {"$in": list(unit_ids)}
        cursor = self.questions.find(query, {"_id": 0}).sort("id", 1)
        docs = await cursor.to_list(length=10_000)
        return [Question.model_validate(d) for d in docs]

    async def list_units(self, course_id: Optional[int] = None) -> list[Unit]:
        query = {} if course_id is None else {"course_id": course_id}
        cursor = self.units.find(query, {"_id": 0}).sort([("course_id", 1), ("unit_number", 1)])
        docs = await cursor.to_list(length=1_000)
        return [Unit.model_validate(d) for d in docs]
