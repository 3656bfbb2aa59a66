from __future__ import annotations

import asyncio
import json
import os
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import TypeAdapter

from reply_advisor.core.models.client import Client
from reply_advisor.core.repositories.client_repository import ClientRepository
from reply_advisor.utils.logging import get_logger

logger = get_logger(__name__)

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

_clients_adapter = TypeAdapter(list[Client])


class JsonFileClientRepository(ClientRepository):
    """Stores the roster as a single JSON array in one file.

    Clients are written with their nested messages. There is no schema version;
    a file that cannot be parsed is reported as an error rather than overwritten.
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    async def get_all(self) -> list[Client]:
        return await self._run(self._read)

    async def save_all(self, clients: Sequence[Client]) -> None:
        payload = _clients_adapter.dump_python(list(clients), mode="json")
        await self._run(lambda: self._write(payload))

    def _read(self) -> list[Client]:
        if not self._path.exists():
            return []
        raw = self._path.read_text(encoding="utf-8")
        if not raw.strip():
            return []
        return _clients_adapter.validate_json(raw)

    def _write(self, payload: list[dict[str, Any]]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        # Write next to the target and swap it in so readers never see a partial file
        fd, tmp_name = tempfile.mkstemp(prefix=".roster-", suffix=".json", dir=self._path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(payload, fh, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self._path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug("Roster saved", extra={"clients": len(payload), "path": str(self._path)})

    @staticmethod
    async def _run(func: Callable[[], Any]) -> Any:
        return await asyncio.to_thread(func)
