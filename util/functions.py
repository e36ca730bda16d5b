# util/functions.py
import re
from typing import Optional
from fastapi import Request
from config.settings import settings
from util.constants import ADDRESS_PATTERN

_ADDRESS_RE = re.compile(ADDRESS_PATTERN)


def is_address(value: Optional[str]) -> bool:
    return bool(value) and _ADDRESS_RE.fullmatch(value) is not None


def normalize_address(address: str) -> str:
    """
    - Lowercase the hex body and force a single "0x" prefix.
    - Callers validate with is_address() first; this does not.
    """
    body = address[2:] if address[:2].lower() == "0x" else address
    return "0x" + body.lower()


def client_ip(request: Request) -> str:
    if settings.TRUST_PROXY:
        fwd = request.headers.get("x-forwarded-for")
        if fwd:
            return fwd.split(",")[0].strip()
    return request.client.host if request.client else "unknown"
