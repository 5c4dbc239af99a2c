from __future__ import annotations

import copy
from typing import Any, Dict, Optional

from papersmith.storage.backend import PersistenceBackend


class InMemoryBackend(PersistenceBackend):
    def __init__(self) -> None:
        self.collections: Dict[str, list[dict[str, Any]]] = {}

    async def load(self, name: str) -> Optional[list[dict[str, Any]]]:
        docs = self.collections.get(name)
        return copy.deepcopy(docs) if docs is not None else None

    async def save(self, name: str, docs: list[dict[str, Any]]) -> None:
        self.collections[name] = copy.deepcopy(docs)
