# repository/namespaces.py
from typing import Final

ROOT: Final[str] = "pinn44:airdrop"

CLAIMS: Final[str] = f"{ROOT}:claims"  # hash per claimed address
NONCES: Final[str] = f"{ROOT}:nonces"  # replay counter per address
CLAIMED_SET: Final[str] = f"{ROOT}:claimed"  # every claimed address
