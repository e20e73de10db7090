import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional, Type, Union

from pydantic import BaseModel, ValidationError
from starlette.concurrency import run_in_threadpool

# Backing documents: one JSON array per store, rewritten in full on every mutation.

logger = logging.getLogger(__name__)


class JsonDocument:
    """
    A single JSON file holding a top-level list of records.

    A document that cannot be read, or holds anything other than records with
    an int `id` (validated against `model` when one is given), loads as empty.

    `lock` gives the owning store a single-writer section around its
    read-modify-write cycle. `load`/`save` run the file I/O in a worker thread,
    so the cycle yields to the event loop and the lock is what keeps
    concurrent mutations apart. It only serializes coroutines in this process.
    """

    def __init__(self, path: Union[str, Path], model: Optional[Type[BaseModel]] = None):
        self.path = Path(path)
        self.model = model
        self.lock = asyncio.Lock()

    def read(self) -> List[Dict[str, Any]]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return []
        except (OSError, ValueError) as e:
            logger.warning("Could not load %s, starting empty: %s", self.path, e)
            return []
        if not isinstance(data, list):
            logger.warning("Expected a list in %s, got %s; starting empty", self.path, type(data).__name__)
            return []
        for index, entry in enumerate(data):
            problem = self._check(entry)
            if problem:
                logger.warning("Malformed record %d in %s (%s); starting empty", index, self.path, problem)
                return []
        return data

    def _check(self, entry) -> Optional[str]:
        if not isinstance(entry, dict):
            return f"expected an object, got {type(entry).__name__}"
        ident = entry.get("id")
        if isinstance(ident, bool) or not isinstance(ident, int):
            return f"id is {ident!r}"
        if self.model is not None:
            try:
                self.model.model_validate_json(json.dumps(entry), strict=True)
            except ValidationError as e:
                return f"{e.error_count()} validation error(s)"
        return None

    def write(self, items: List[Dict[str, Any]]):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(items, f, ensure_ascii=False, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, self.path)
        except BaseException:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise
        logger.debug("Wrote %d records to %s", len(items), self.path)

    async def load(self) -> List[Dict[str, Any]]:
        return await run_in_threadpool(self.read)

    async def save(self, items: List[Dict[str, Any]]):
        await run_in_threadpool(self.write, items)
