from fastapi import APIRouter

from papersmith.api.papers import router as papers_router
from papersmith.api.questions import router as questions_router

router = APIRouter()
router.include_router(papers_router)
router.include_router(questions_router)
