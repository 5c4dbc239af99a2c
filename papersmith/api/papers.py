from __future__ import annotations

import random

from fastapi import APIRouter, Depends, HTTPException

from papersmith.errors import InvalidConfiguration, StoreIOFailure
from papersmith.generation.service import PaperService
from papersmith.models import GeneratedPaper, GenerationConfig, GeneratePaperRequest, ValidationResult
from papersmith.wiring import get_service

router = APIRouter(prefix="/papers", tags=["papers"])


@router.post("/validate", response_model=ValidationResult)
async def validate(config: GenerationConfig, service: PaperService = Depends(get_service)) -> ValidationResult:
    return service.validate_config(config)


@router.post("/generate", response_model=GeneratedPaper)
async def generate(req: GeneratePaperRequest, service: PaperService = Depends(get_service)) -> GeneratedPaper:
    rng = random.Random(req.seed) if req.seed is not None else None
    try:
        return await service.generate_paper(req.config, req.questions, rng=rng, persist=req.persist)
    except InvalidConfiguration as e:
        raise HTTPException(status_code=422, detail={"errors": e.errors})
    except StoreIOFailure as e:
        detail = {"error": str(e), "paper": e.paper.model_dump(mode="json") if e.paper else None}
        raise HTTPException(status_code=503, detail=detail)


@router.post("", response_model=GeneratedPaper)
async def save(paper: GeneratedPaper, service: PaperService = Depends(get_service)) -> GeneratedPaper:
    return await service.save_paper(paper)


@router.get("", response_model=list[GeneratedPaper])
async def list_papers(service: PaperService = Depends(get_service)) -> list[GeneratedPaper]:
    return await service.list_papers()


@router.get("/{paper_id}", response_model=GeneratedPaper)
async def get_paper(paper_id: str, service: PaperService = Depends(get_service)) -> GeneratedPaper:
    paper = await service.get_paper_by_id(paper_id)
    if paper is None:
        raise HTTPException(status_code=404, detail="paper not found")
    return paper


@router.delete("/{paper_id}")
async def delete_paper(paper_id: str, service: PaperService = Depends(get_service)) -> dict[str, str]:
    await service.delete_paper(paper_id)
    return {"status": "deleted"}


@router.delete("")
async def clear_papers(service: PaperService = Depends(get_service)) -> dict[str, str]:
    await service.clear_papers()
    return {"status": "cleared"}
