# util/enums.py
from enum import Enum
from typing import NamedTuple
from fastapi import status


class Color(str, Enum):
    RESET = "\033[0m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    BOLD = "\033[1m"

    def __str__(self):
        return self.value


class Environment(str, Enum):
    DEV = "dev"
    PROD = "prod"


class ErrorInfo(NamedTuple):
    message: str
    http_status: int


class ErrorMessage(Enum):
    ADDRESS_REQUIRED = ErrorInfo(
        "Address parameter required", status.HTTP_400_BAD_REQUEST
    )
    INVALID_ADDRESS = ErrorInfo("Invalid address format", status.HTTP_400_BAD_REQUEST)
    INVALID_TX_HASH = ErrorInfo(
        "Invalid transaction hash format", status.HTTP_400_BAD_REQUEST
    )
    ALREADY_CLAIMED = ErrorInfo(
        "This address has already claimed the airdrop", status.HTTP_400_BAD_REQUEST
    )
    INVALID_NONCE = ErrorInfo(
        "Invalid nonce. Please refresh and try again.", status.HTTP_400_BAD_REQUEST
    )
    TREE_NOT_CONFIGURED = ErrorInfo(
        "Merkle tree not configured", status.HTTP_503_SERVICE_UNAVAILABLE
    )
    ADDRESS_NOT_IN_TREE = ErrorInfo(
        "Address not found in merkle tree", status.HTTP_404_NOT_FOUND
    )
    LEDGER_UNAVAILABLE = ErrorInfo(
        "Claim ledger temporarily unavailable", status.HTTP_503_SERVICE_UNAVAILABLE
    )
