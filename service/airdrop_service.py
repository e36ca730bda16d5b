# service/airdrop_service.py
import logging
import re
from typing import Optional
from redis.exceptions import RedisError
from config.settings import settings
from model.airdrop import ClaimRecord
from model.api import ClaimStatusResponse, RecordClaimRequest, RecordClaimResponse
from repository.claim_ledger_repository import (
    AlreadyClaimed,
    ClaimLedgerRepository,
    NonceMismatch,
)
from repository.claim_table_repository import ClaimTableRepository
from util.constants import TX_HASH_PATTERN
from util.enums import ErrorMessage
from util.errors import AppError
from util.functions import is_address, normalize_address

logger = logging.getLogger(__name__)

_TX_HASH_RE = re.compile(TX_HASH_PATTERN)


def _require_address(address: Optional[str]) -> str:
    if not address:
        raise AppError.of(ErrorMessage.ADDRESS_REQUIRED)
    if not is_address(address):
        raise AppError.of(ErrorMessage.INVALID_ADDRESS)
    return address


class AirdropService:
    def __init__(
        self, table: ClaimTableRepository, ledger: ClaimLedgerRepository
    ) -> None:
        self._table = table
        self._ledger = ledger

    async def lookup_claim(self, address: Optional[str]) -> ClaimRecord:
        """
        400 malformed -> 503 tree unavailable -> 404 absent -> record.
        The address is validated before the tree is touched.
        """
        address = _require_address(address)
        table = await self._table.get_or_load()
        if table is None:
            raise AppError.of(ErrorMessage.TREE_NOT_CONFIGURED)

        record = table.find(address)
        if record is None:
            logger.info("airdrop.proof.not_found address=%s", normalize_address(address))
            raise AppError.of(ErrorMessage.ADDRESS_NOT_IN_TREE)
        return record

    async def claim_status(self, address: Optional[str]) -> ClaimStatusResponse:
        address = _require_address(address)
        try:
            claimed = await self._ledger.has_claimed(address)
            nonce = await self._ledger.get_nonce(address)
        except RedisError as e:
            logger.error("airdrop.ledger.read_error err=%s", type(e).__name__)
            raise AppError.of(ErrorMessage.LEDGER_UNAVAILABLE)
        return ClaimStatusResponse(
            address=address,
            claimed=claimed,
            nonce=nonce,
            airdropAmount=settings.AIRDROP_AMOUNT,
            chainId=settings.CHAIN_ID,
            chainName=settings.CHAIN_NAME,
        )

    async def record_claim(
        self, payload: RecordClaimRequest, ip: str
    ) -> RecordClaimResponse:
        """
        Record a claim the page already submitted on-chain.
        Rejects repeats and stale nonces; bumps the nonce on success.
        """
        address = _require_address(payload.address)
        if not _TX_HASH_RE.fullmatch(payload.txHash):
            raise AppError.of(ErrorMessage.INVALID_TX_HASH)

        try:
            entry = await self._ledger.record_claim(
                address, payload.txHash, ip, payload.nonce
            )
        except AlreadyClaimed:
            raise AppError.of(ErrorMessage.ALREADY_CLAIMED)
        except NonceMismatch as e:
            raise AppError.of(ErrorMessage.INVALID_NONCE, expectedNonce=e.expected)
        except RedisError as e:
            logger.error("airdrop.ledger.write_error err=%s", type(e).__name__)
            raise AppError.of(ErrorMessage.LEDGER_UNAVAILABLE)

        logger.info("airdrop.claim.recorded address=%s tx=%s", entry.address, entry.txHash)
        return RecordClaimResponse(
            success=True,
            message="Airdrop claim recorded successfully!",
            txHash=entry.txHash,
            amount=settings.AIRDROP_AMOUNT,
            explorerUrl=f"{settings.EXPLORER_TX_URL}{entry.txHash}",
        )
