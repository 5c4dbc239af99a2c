from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional


class PersistenceBackend(ABC):
    """Stores a whole collection of documents under a fixed name."""

    @abstractmethod
    async def load(self, name: str) -> Optional[list[dict[str, Any]]]:
        raise NotImplementedError

    @abstractmethod
    async def save(self, name: str, docs: list[dict[str, Any]]) -> None:
        raise NotImplementedError
