# core/fingerprint.py
"""
Device fingerprint: a best-effort, non-cryptographic identifier for soft
deduplication of airdrop claims.

Output is "<8-hex>-<8-hex>": djb2 of every signal joined with "|||", then djb2
of the canvas signal alone. Hashing runs over UTF-16 code units so results
match the browser rendition bit-for-bit.
"""
import logging
from dataclasses import dataclass
from typing import Callable, Iterator, MutableMapping, Optional, Union
from model.fingerprint import DeviceProfile

logger = logging.getLogger(__name__)

DELIMITER = "|||"
HASH_SEED = 5381
UNSUPPORTED = "unsupported"
CLAIMED_STORAGE_KEY = "pinn44_airdrop_claimed"
_CLAIMED_VALUE = "true"
_MAX_PLUGINS = 5


@dataclass(frozen=True)
class Available:
    value: str

    @property
    def text(self) -> str:
        return self.value


@dataclass(frozen=True)
class Unavailable:
    sentinel: str

    @property
    def text(self) -> str:
        return self.sentinel


Signal = Union[Available, Unavailable]
Reader = Callable[[DeviceProfile], Optional[str]]


@dataclass(frozen=True)
class Collector:
    """
    One signal dimension. `read` returns None when the reading is missing
    (-> `missing`) and may raise (-> `failed`).
    """

    name: str
    read: Reader
    missing: str = UNSUPPORTED
    failed: str = UNSUPPORTED

    def collect(self, profile: DeviceProfile) -> Signal:
        try:
            value = self.read(profile)
        except Exception as e:
            logger.debug("fingerprint.collector.failed name=%s err=%s", self.name, e)
            return Unavailable(self.failed)
        if value is None or value == "":
            return Unavailable(self.missing)
        return Available(value)


# ---------------- Readers ----------------


def _canvas(p: DeviceProfile) -> Optional[str]:
    return p.canvasDataUrl


def _js_text(value: Optional[str]) -> str:
    # Template-literal rendering of a missing GL parameter
    return "null" if value is None else value


def _webgl(p: DeviceProfile) -> Optional[str]:
    if not p.webglSupported:
        return None
    if not p.webglDebugInfo:
        return "no-debug-info"
    return f"{_js_text(p.webglVendor)}~{_js_text(p.webglRenderer)}"


def _screen(p: DeviceProfile) -> Optional[str]:
    dims = (p.screenWidth, p.screenHeight, p.colorDepth)
    if any(d is None for d in dims):
        return None
    return "x".join(str(d) for d in dims)


def _plugins(p: DeviceProfile) -> Optional[str]:
    if not p.plugins:
        return None
    return ",".join(p.plugins[:_MAX_PLUGINS])


def _count(value: Union[int, str, None]) -> Optional[str]:
    if value is None:
        return None
    n = int(value)
    if n < 0:
        raise ValueError(f"negative count {n}")
    return str(n)


# Order is part of the hash input; never reorder.
COLLECTORS: tuple[Collector, ...] = (
    Collector("canvas", _canvas, missing="no-canvas", failed="canvas-error"),
    Collector("webgl", _webgl, missing="no-webgl", failed="webgl-error"),
    Collector("screen", _screen),
    Collector("timezone", lambda p: p.timezone),
    Collector("plugins", _plugins, missing="no-plugins", failed="plugins-error"),
    Collector("userAgent", lambda p: p.userAgent),
    Collector("language", lambda p: p.language),
    Collector("hardwareConcurrency", lambda p: _count(p.hardwareConcurrency), "0", "0"),
    Collector("maxTouchPoints", lambda p: _count(p.maxTouchPoints), "0", "0"),
)


def collect_signals(
    profile: DeviceProfile, collectors: tuple[Collector, ...] = COLLECTORS
) -> list[Signal]:
    return [c.collect(profile) for c in collectors]


# ---------------- Hashing ----------------


def _utf16_units(text: str) -> Iterator[int]:
    for ch in text:
        cp = ord(ch)
        if cp > 0xFFFF:
            cp -= 0x10000
            yield 0xD800 + (cp >> 10)
            yield 0xDC00 + (cp & 0x3FF)
        else:
            yield cp


def hash_string(text: str) -> str:
    """djb2 folded to unsigned 32-bit, as 8 lowercase hex digits."""
    h = HASH_SEED
    for unit in _utf16_units(text):
        h = ((h << 5) + h + unit) & 0xFFFFFFFF
    return f"{h:08x}"


def generate_fingerprint(
    profile: DeviceProfile, collectors: tuple[Collector, ...] = COLLECTORS
) -> str:
    """
    Never raises. The canvas signal is hashed twice (inside the full hash and
    standalone) to weight rendering differences.
    """
    signals = collect_signals(profile, collectors)
    combined = DELIMITER.join(s.text for s in signals)
    canvas = signals[0].text if signals else UNSUPPORTED
    return f"{hash_string(combined)}-{hash_string(canvas)}"


# ---------------- Advisory claim marker ----------------


class ClaimMarker:
    """
    Courtesy "already claimed" flag kept in the caller's local key/value
    storage. Clearing storage resets it; the claim contract is authoritative.
    """

    def __init__(self, storage: MutableMapping[str, str]) -> None:
        self._storage = storage

    def has_claimed_before(self) -> bool:
        return self._storage.get(CLAIMED_STORAGE_KEY) == _CLAIMED_VALUE

    def mark_as_claimed(self) -> None:
        self._storage[CLAIMED_STORAGE_KEY] = _CLAIMED_VALUE
