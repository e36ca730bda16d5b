# repository/claim_table_repository.py
import asyncio
import logging
from pathlib import Path
from typing import Optional
from pydantic import ValidationError
from model.airdrop import ClaimRecord, ClaimTable
from util.functions import normalize_address
from util.timing import timed

logger = logging.getLogger(__name__)


class LoadedClaimTable:
    """
    Immutable view over a parsed ClaimTable with keys normalized once.
    When two keys differ only by case, the first in document order wins.
    """

    def __init__(self, table: ClaimTable) -> None:
        self.root = table.root
        self.total_amount = table.totalAmount
        index: dict[str, ClaimRecord] = {}
        for address, record in table.claims.items():
            index.setdefault(normalize_address(address), record)
        self._index = index

    def __len__(self) -> int:
        return len(self._index)

    def find(self, address: str) -> Optional[ClaimRecord]:
        return self._index.get(normalize_address(address))


class ClaimTableRepository:
    """
    Flow:
    - Lazily read the Merkle claim tree from `path` on first use.
    - Cache it for the process lifetime (no TTL, no invalidation).
    - A failed load is not cached; the next call retries.
    - No lock: concurrent first loads may parse twice, the first stored value
      wins and every caller gets that same object.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._table: Optional[LoadedClaimTable] = None

    @property
    def loaded(self) -> bool:
        return self._table is not None

    async def get_or_load(self) -> Optional[LoadedClaimTable]:
        if self._table is not None:
            return self._table
        table = await self.load_table()
        if table is None:
            return None
        if self._table is None:
            self._table = table
        return self._table

    async def load_table(self) -> Optional[LoadedClaimTable]:
        """Read + validate without touching the cache. None when unavailable."""
        try:
            with timed(logger, "airdrop.table.load", path=self._path):
                raw = await asyncio.to_thread(self._path.read_text, encoding="utf-8")
                table = LoadedClaimTable(ClaimTable.model_validate_json(raw))
        except (OSError, ValidationError, ValueError) as e:
            logger.error(
                "airdrop.table.load_failed path=%s err=%s: %s",
                self._path,
                type(e).__name__,
                e,
            )
            return None
        logger.info(
            "airdrop.table.loaded path=%s claims=%d root=%s",
            self._path,
            len(table),
            table.root,
        )
        return table
