# controller/controller_dependencies.py
from fastapi import Depends
from fastapi_limiter.depends import RateLimiter
from config.settings import settings
from repository.claim_ledger_repository import ClaimLedgerRepository
from repository.claim_table_repository import ClaimTableRepository
from service.airdrop_service import AirdropService
from service.fingerprint_service import FingerprintService

# One cache per process; the tree is finalized before deploy.
_claim_table = ClaimTableRepository(settings.MERKLE_TREE_PATH)

claim_rate_limiter = RateLimiter(
    times=settings.RATE_LIMIT_TIMES, seconds=settings.RATE_LIMIT_SECONDS
)


def get_claim_table() -> ClaimTableRepository:
    return _claim_table


def get_claim_ledger() -> ClaimLedgerRepository:
    return ClaimLedgerRepository()


def get_airdrop_service(
    table: ClaimTableRepository = Depends(get_claim_table),
    ledger: ClaimLedgerRepository = Depends(get_claim_ledger),
) -> AirdropService:
    return AirdropService(table, ledger)


def get_fingerprint_service() -> FingerprintService:
    return FingerprintService()
