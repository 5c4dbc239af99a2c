from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from papersmith.models import Question, Unit
from papersmith.questions.repo import QuestionRepository
from papersmith.wiring import get_question_repo

router = APIRouter(tags=["questions"])


@router.get("/questions", response_model=list[Question])
async def list_questions(
    course_id: Optional[int] = Query(None),
    unit_id: Optional[list[int]] = Query(None),
    repo: QuestionRepository = Depends(get_question_repo),
) -> list[Question]:
    return await repo.list_questions(course_id=course_id, unit_ids=unit_id)


@router.get("/units", response_model=list[Unit])
async def list_units(
    course_id: Optional[int] = Query(None),
    repo: QuestionRepository = Depends(get_question_repo),
) -> list[Unit]:
    return await repo.list_units(course_id)
