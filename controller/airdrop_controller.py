# controller/airdrop_controller.py
from typing import Optional
from fastapi import APIRouter, Depends, Query, Request, status
from model.api import (
    ClaimStatusResponse,
    MerkleProofResponse,
    RecordClaimRequest,
    RecordClaimResponse,
)
from service.airdrop_service import AirdropService
from util.constants import InternalURIs
from util.functions import client_ip
from controller.controller_dependencies import (
    claim_rate_limiter,
    get_airdrop_service,
)

airdrop_router = APIRouter()


# `address` is optional at the framework level so a missing value maps to 400, not 422.
@airdrop_router.get(InternalURIs.MERKLE_PROOFS, response_model=MerkleProofResponse)
async def get_merkle_proof(
    address: Optional[str] = Query(default=None),
    service: AirdropService = Depends(get_airdrop_service),
) -> MerkleProofResponse:
    record = await service.lookup_claim(address)
    return MerkleProofResponse(
        index=record.index, amount=record.amount, proof=record.proof
    )


@airdrop_router.get(InternalURIs.CLAIM, response_model=ClaimStatusResponse)
async def get_claim_status(
    address: Optional[str] = Query(default=None),
    service: AirdropService = Depends(get_airdrop_service),
) -> ClaimStatusResponse:
    return await service.claim_status(address)


@airdrop_router.post(
    InternalURIs.CLAIM,
    response_model=RecordClaimResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(claim_rate_limiter)],
)
async def record_claim(
    payload: RecordClaimRequest,
    request: Request,
    service: AirdropService = Depends(get_airdrop_service),
) -> RecordClaimResponse:
    return await service.record_claim(payload, client_ip(request))
