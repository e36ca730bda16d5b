import asyncio
import json
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from redis.exceptions import ConnectionError, WatchError

from controller.controller_dependencies import (
    claim_rate_limiter,
    get_claim_ledger,
    get_claim_table,
)
from main import app
from repository.claim_ledger_repository import ClaimLedgerRepository
from repository.claim_table_repository import ClaimTableRepository

ADDRESS = "0xABCDEF000000000000000000000000000000ABCD"
OTHER_ADDRESS = "0x1111111111111111111111111111111111111111"
TX_HASH = "0x" + "ab" * 32


class InMemoryRedis:
    """The slice of redis.asyncio.Redis the claim ledger uses."""

    def __init__(self) -> None:
        self.hashes: dict[str, dict[str, str]] = {}
        self.sets: dict[str, set[str]] = {}
        self.values: dict[str, str] = {}
        self.versions: dict[str, int] = {}
        self.fail_next_execute = False

    def _touch(self, key):
        self.versions[key] = self.versions.get(key, 0) + 1

    def _hset(self, key, mapping):
        self.hashes.setdefault(key, {}).update(mapping)
        self._touch(key)
        return len(mapping)

    def _sadd(self, key, *members):
        s = self.sets.setdefault(key, set())
        before = len(s)
        s.update(members)
        self._touch(key)
        return len(s) - before

    def _incr(self, key):
        n = int(self.values.get(key, "0")) + 1
        self.values[key] = str(n)
        self._touch(key)
        return n

    async def hset(self, key, mapping):
        return self._hset(key, mapping)

    async def hgetall(self, key):
        return dict(self.hashes.get(key, {}))

    async def exists(self, key):
        return int(key in self.hashes or key in self.values or key in self.sets)

    async def sadd(self, key, *members):
        return self._sadd(key, *members)

    async def sismember(self, key, member):
        return int(member in self.sets.get(key, set()))

    async def scard(self, key):
        return len(self.sets.get(key, set()))

    async def get(self, key):
        return self.values.get(key)

    async def incr(self, key):
        return self._incr(key)

    def pipeline(self, transaction=True):
        return InMemoryPipeline(self)


class InMemoryPipeline:
    """WATCH / MULTI / EXEC with optimistic version checks."""

    def __init__(self, redis: InMemoryRedis) -> None:
        self._redis = redis
        self._watched: dict[str, int] = {}
        self._queued: list = []
        self._buffering = False

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        await self.reset()

    async def watch(self, *keys):
        self._watched = {k: self._redis.versions.get(k, 0) for k in keys}

    async def exists(self, key):
        # Yield so concurrent claims interleave between read and EXEC.
        await asyncio.sleep(0)
        return await self._redis.exists(key)

    async def get(self, key):
        await asyncio.sleep(0)
        return await self._redis.get(key)

    def multi(self):
        self._buffering = True

    def hset(self, key, mapping):
        self._queued.append((self._redis._hset, (key, mapping)))
        return self

    def sadd(self, key, *members):
        self._queued.append((self._redis._sadd, (key, *members)))
        return self

    def incr(self, key):
        self._queued.append((self._redis._incr, (key,)))
        return self

    async def execute(self):
        await asyncio.sleep(0)
        if self._redis.fail_next_execute:
            self._redis.fail_next_execute = False
            raise ConnectionError("connection reset during EXEC")
        for key, version in self._watched.items():
            if self._redis.versions.get(key, 0) != version:
                raise WatchError("watched key changed")
        return [fn(*args) for fn, args in self._queued]

    async def reset(self):
        self._watched = {}
        self._queued = []
        self._buffering = False


def tree_document(claims: dict) -> dict:
    return {"root": "0xroot", "totalAmount": "1500", "claims": claims}


@pytest.fixture
def tree_path(tmp_path: Path) -> Path:
    path = tmp_path / "merkle-tree.json"
    path.write_text(
        json.dumps(
            tree_document(
                {ADDRESS: {"index": 3, "amount": "1500", "proof": ["0x11", "0x22"]}}
            )
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def redis_client() -> InMemoryRedis:
    return InMemoryRedis()


@pytest.fixture
def ledger(redis_client) -> ClaimLedgerRepository:
    return ClaimLedgerRepository(redis_client)


@pytest.fixture
def make_client(ledger):
    """Build a TestClient bound to a given claim table repository."""

    async def _no_limit():
        return None

    def _make(table: ClaimTableRepository) -> TestClient:
        app.dependency_overrides[get_claim_table] = lambda: table
        app.dependency_overrides[get_claim_ledger] = lambda: ledger
        app.dependency_overrides[claim_rate_limiter] = _no_limit
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()


@pytest.fixture
def client(make_client, tree_path) -> TestClient:
    return make_client(ClaimTableRepository(tree_path))
