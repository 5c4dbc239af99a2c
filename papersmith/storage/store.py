from __future__ import annotations

import asyncio
import logging
from typing import Optional

from pydantic import ValidationError

from papersmith.errors import StoreIOFailure
from papersmith.generation.assembler import new_paper_id
from papersmith.models import GeneratedPaper
from papersmith.storage.backend import PersistenceBackend

logger = logging.getLogger(__name__)

DEFAULT_COLLECTION = "question-paper-storage"


class PaperStore:
    """Durable, most-recent-first collection of generated papers.

    The whole collection is loaded once and written back on every mutation.
    Mutations are serialized; the in-memory view only changes after the
    backend accepted the write.
    """

    def __init__(self, backend: PersistenceBackend, name: str = DEFAULT_COLLECTION) -> None:
        self.backend = backend
        self.name = name
        self._papers: Optional[list[GeneratedPaper]] = None
        self._lock = asyncio.Lock()

    async def _ensure_loaded(self) -> list[GeneratedPaper]:
        if self._papers is None:
            try:
                docs = await self.backend.load(self.name)
            except Exception as e:
                raise StoreIOFailure(f"failed to load {self.name!r}: {e}") from e
            try:
                self._papers = [GeneratedPaper.model_validate(d) for d in docs or []]
            except ValidationError as e:
                raise StoreIOFailure(f"stored collection {self.name!r} is corrupt: {e}") from e
        return self._papers

    async def _commit(self, papers: list[GeneratedPaper]) -> None:
        try:
            await self.backend.save(self.name, [p.model_dump(mode="json") for p in papers])
        except Exception as e:
            raise StoreIOFailure(f"failed to persist {self.name!r}: {e}") from e
        self._papers = papers

    async def add(self, paper: GeneratedPaper) -> GeneratedPaper:
        async with self._lock:
            papers = await self._ensure_loaded()
            stored = paper if paper.paper_id else paper.model_copy(update={"paper_id": new_paper_id()})
            if any(p.paper_id == stored.paper_id for p in papers):
                # Re-saving keeps the paper at its original position.
                updated = [stored if p.paper_id == stored.paper_id else p for p in papers]
            else:
                updated = [stored, *papers]
            await self._commit(updated)
            logger.info("Saved paper %s (%d papers stored)", stored.paper_id, len(updated))
            return stored

    async def delete(self, paper_id: str) -> None:
        async with self._lock:
            papers = await self._ensure_loaded()
            remaining = [p for p in papers if p.paper_id != paper_id]
            if len(remaining) == len(papers):
                return
            await self._commit(remaining)
            logger.info("Deleted paper %s", paper_id)

    async def get_by_id(self, paper_id: str) -> Optional[GeneratedPaper]:
        async with self._lock:
            papers = await self._ensure_loaded()
        return next((p for p in papers if p.paper_id == paper_id), None)

    async def list(self) -> list[GeneratedPaper]:
        async with self._lock:
            return list(await self._ensure_loaded())

    async def clear(self) -> None:
        async with self._lock:
            await self._ensure_loaded()
            await self._commit([])
            logger.info("Cleared paper history")
