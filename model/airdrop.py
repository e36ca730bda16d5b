# model/airdrop.py
from pydantic import BaseModel, Field


class ClaimRecord(BaseModel):
    """One eligible address in the Merkle distribution."""

    index: int = Field(ge=0)
    amount: str  # decimal string, avoids float precision loss
    proof: list[str]


class ClaimTable(BaseModel):
    """
    Offline-generated distribution as persisted on disk:
      {"root": "...", "totalAmount": "...", "claims": {"0x..": ClaimRecord}}
    Proofs are assumed to hash up to `root`; verification happens on-chain.
    """

    root: str
    totalAmount: str
    claims: dict[str, ClaimRecord]


class ClaimLedgerEntry(BaseModel):
    address: str
    txHash: str
    timestamp: int  # epoch millis
    ip: str
