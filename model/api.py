# model/api.py
from pydantic import BaseModel, Field


class MerkleProofResponse(BaseModel):
    index: int
    amount: str
    proof: list[str]


class FingerprintResponse(BaseModel):
    fingerprint: str


class ClaimStatusResponse(BaseModel):
    address: str
    claimed: bool
    nonce: int
    airdropAmount: str
    chainId: int
    chainName: str


class RecordClaimRequest(BaseModel):
    address: str = Field(min_length=1)
    txHash: str = Field(min_length=1)
    nonce: int = Field(ge=0)


class RecordClaimResponse(BaseModel):
    success: bool
    message: str
    txHash: str
    amount: str
    explorerUrl: str
