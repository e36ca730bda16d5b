# repository/claim_ledger_repository.py
import time
from typing import Optional
from redis.asyncio import Redis
from redis.exceptions import WatchError
from config.cache import get_redis
from model.airdrop import ClaimLedgerEntry
from repository.namespaces import CLAIMED_SET, CLAIMS, NONCES
from util.functions import normalize_address

_MAX_WATCH_RETRIES = 5


class AlreadyClaimed(Exception):
    pass


class NonceMismatch(Exception):
    def __init__(self, expected: int) -> None:
        super().__init__(f"expected nonce {expected}")
        self.expected = expected


class ClaimLedgerRepository:
    """
    Redis-backed bookkeeping of recorded claims and per-address nonces.

    Addresses are normalized (lowercase, 0x-prefixed) before keying. Entries
    never expire: the distribution is one-shot.

    Flow (record_claim):
    - WATCH the address's claim hash + nonce key, read both.
    - MULTI: write claim hash, add to claimed set, INCR nonce; EXEC.
    - A concurrent writer aborts EXEC (WatchError); the retry re-reads and
      sees the claim, so only one request per address ever records.
    """

    def __init__(self, client: Optional[Redis] = None) -> None:
        self._redis = client

    async def _client(self) -> Redis:
        if self._redis is None:
            self._redis = await get_redis()
        return self._redis

    @staticmethod
    def _claim_key(address: str) -> str:
        return f"{CLAIMS}:{normalize_address(address)}"

    @staticmethod
    def _nonce_key(address: str) -> str:
        return f"{NONCES}:{normalize_address(address)}"

    # ---------------- Claims ----------------

    async def has_claimed(self, address: str) -> bool:
        r = await self._client()
        return bool(await r.sismember(CLAIMED_SET, normalize_address(address)))

    async def get_claim_record(self, address: str) -> Optional[ClaimLedgerEntry]:
        r = await self._client()
        h = await r.hgetall(self._claim_key(address))
        if not h:
            return None
        try:
            return ClaimLedgerEntry(
                address=h["address"],
                txHash=h["txHash"],
                timestamp=int(h.get("timestamp") or 0),
                ip=h.get("ip") or "unknown",
            )
        except (KeyError, ValueError):
            return None

    async def record_claim(
        self, address: str, tx_hash: str, ip: str, nonce: int
    ) -> ClaimLedgerEntry:
        """
        Atomically record a first claim for `address` and bump its nonce.
        Raises AlreadyClaimed / NonceMismatch without writing anything.
        """
        entry = ClaimLedgerEntry(
            address=normalize_address(address),
            txHash=tx_hash,
            timestamp=int(time.time() * 1000),
            ip=ip,
        )
        claim_key = self._claim_key(address)
        nonce_key = self._nonce_key(address)
        r = await self._client()

        async with r.pipeline(transaction=True) as pipe:
            for _ in range(_MAX_WATCH_RETRIES):
                try:
                    await pipe.watch(claim_key, nonce_key)
                    if await pipe.exists(claim_key):
                        raise AlreadyClaimed(entry.address)
                    current = await pipe.get(nonce_key)
                    expected = int(current) if current is not None else 0
                    if nonce != expected:
                        raise NonceMismatch(expected)

                    pipe.multi()
                    pipe.hset(
                        claim_key,
                        mapping={
                            "address": entry.address,
                            "txHash": entry.txHash,
                            "timestamp": str(entry.timestamp),
                            "ip": entry.ip,
                        },
                    )
                    pipe.sadd(CLAIMED_SET, entry.address)
                    pipe.incr(nonce_key)
                    await pipe.execute()
                    return entry
                except WatchError:
                    continue
                finally:
                    await pipe.reset()
        raise WatchError(f"claim for {entry.address} kept conflicting")

    async def total_claims(self) -> int:
        r = await self._client()
        return int(await r.scard(CLAIMED_SET) or 0)

    # ---------------- Nonces ----------------

    async def get_nonce(self, address: str) -> int:
        r = await self._client()
        v = await r.get(self._nonce_key(address))
        return int(v) if v is not None else 0
