from __future__ import annotations

import asyncio
import json
import os
import tempfile
from pathlib import Path
from typing import Any, Optional

from papersmith.storage.backend import PersistenceBackend


class JsonFileBackend(PersistenceBackend):
    """One ``<name>.json`` file per collection, replaced atomically on save."""

    def __init__(self, directory: str | os.PathLike[str]) -> None:
        self.directory = Path(directory)

    def _path(self, name: str) -> Path:
        return self.directory / f"{name}.json"

    def _read(self, name: str) -> Optional[list[dict[str, Any]]]:
        path = self._path(name)
        if not path.exists():
            return None
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, list):
            raise ValueError(f"{path} does not hold a JSON array")
        return data

    def _write(self, name: str, docs: list[dict[str, Any]]) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(prefix=f".{name}.", suffix=".tmp", dir=self.directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(docs, f, ensure_ascii=False, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, self._path(name))
        except BaseException:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise

    async def load(self, name: str) -> Optional[list[dict[str, Any]]]:
        return await asyncio.to_thread(self._read, name)

    async def save(self, name: str, docs: list[dict[str, Any]]) -> None:
        await asyncio.to_thread(self._write, name, docs)
