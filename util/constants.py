from typing import Final


class InternalURIs:
    API = "/api"
    V1 = API + "/v1"
    AIRDROP = V1 + "/airdrop"
    MERKLE_PROOFS = AIRDROP + "/merkle-proofs"
    CLAIM = AIRDROP + "/claim"
    FINGERPRINT = AIRDROP + "/fingerprint"


# 20-byte hex wallet address, "0x" optional.
ADDRESS_PATTERN: Final[str] = r"^(0x)?[0-9a-fA-F]{40}$"
TX_HASH_PATTERN: Final[str] = r"^0x[0-9a-fA-F]{64}$"
