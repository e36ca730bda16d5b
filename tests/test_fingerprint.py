"""Tests for the device fingerprint generator and advisory claim marker."""
import re

from core.fingerprint import (
    CLAIMED_STORAGE_KEY,
    COLLECTORS,
    Available,
    ClaimMarker,
    Collector,
    Unavailable,
    collect_signals,
    generate_fingerprint,
    hash_string,
)
from model.fingerprint import DeviceProfile

FINGERPRINT_RE = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{8}$")


def full_profile(**overrides) -> DeviceProfile:
    data = dict(
        canvasDataUrl="data:image/png;base64,iVBORw0KGgoAAAANSUhEUg",
        webglSupported=True,
        webglDebugInfo=True,
        webglVendor="Google Inc. (NVIDIA)",
        webglRenderer="ANGLE (NVIDIA GeForce RTX 3060)",
        screenWidth=1920,
        screenHeight=1080,
        colorDepth=24,
        timezone="Europe/Berlin",
        plugins=["PDF Viewer", "Chrome PDF Viewer", "Chromium PDF Viewer",
                 "Microsoft Edge PDF Viewer", "WebKit built-in PDF", "Extra"],
        userAgent="Mozilla/5.0 (X11; Linux x86_64)",
        language="en-US",
        hardwareConcurrency=8,
        maxTouchPoints=0,
    )
    data.update(overrides)
    return DeviceProfile(**data)


class TestHashString:
    """djb2 folded to 32 bits, zero-padded lowercase hex."""

    def test_empty_string_is_seed(self):
        assert hash_string("") == "00001505"

    def test_known_values(self):
        assert hash_string("a") == "0002b606"
        assert hash_string("abc") == "0b885c8b"

    def test_long_input_stays_eight_hex_digits(self):
        result = hash_string("x" * 10_000)
        assert re.fullmatch(r"[0-9a-f]{8}", result)

    def test_astral_characters_hash_as_surrogate_pairs(self):
        assert hash_string("\U0001F600") == hash_string("\ud83d\ude00")


class TestCollectSignals:
    def test_full_profile_in_fixed_order(self):
        texts = [s.text for s in collect_signals(full_profile())]
        assert texts == [
            "data:image/png;base64,iVBORw0KGgoAAAANSUhEUg",
            "Google Inc. (NVIDIA)~ANGLE (NVIDIA GeForce RTX 3060)",
            "1920x1080x24",
            "Europe/Berlin",
            "PDF Viewer,Chrome PDF Viewer,Chromium PDF Viewer,"
            "Microsoft Edge PDF Viewer,WebKit built-in PDF",
            "Mozilla/5.0 (X11; Linux x86_64)",
            "en-US",
            "8",
            "0",
        ]
        assert all(isinstance(s, Available) for s in collect_signals(full_profile()))

    def test_empty_profile_degrades_to_sentinels(self):
        signals = collect_signals(DeviceProfile())
        assert [s.text for s in signals] == [
            "no-canvas",
            "no-webgl",
            "unsupported",
            "unsupported",
            "no-plugins",
            "unsupported",
            "unsupported",
            "0",
            "0",
        ]
        assert all(isinstance(s, Unavailable) for s in signals)

    def test_webgl_without_debug_info(self):
        signals = collect_signals(full_profile(webglDebugInfo=False))
        assert signals[1] == Available("no-debug-info")
        bare = collect_signals(DeviceProfile(webglSupported=True))
        assert bare[1] == Available("no-debug-info")

    def test_webgl_debug_info_flag_alone_is_not_support(self):
        signals = collect_signals(DeviceProfile(webglDebugInfo=True, webglVendor="Intel"))
        assert signals[1] == Unavailable("no-webgl")

    def test_missing_gl_parameter_renders_as_null(self):
        profile = DeviceProfile(webglSupported=True, webglDebugInfo=True, webglVendor="Intel")
        assert collect_signals(profile)[1] == Available("Intel~null")

    def test_unusable_counts_degrade_to_zero(self):
        signals = collect_signals(full_profile(hardwareConcurrency="lots", maxTouchPoints=-2))
        assert signals[7] == Unavailable("0")
        assert signals[8] == Unavailable("0")
        assert collect_signals(full_profile(hardwareConcurrency="12"))[7] == Available("12")

    def test_raising_collector_only_degrades_its_dimension(self):
        def boom(_):
            raise RuntimeError("no rendering context")

        collectors = (Collector("canvas", boom, "no-canvas", "canvas-error"),) + COLLECTORS[1:]
        signals = collect_signals(full_profile(), collectors)
        assert signals[0] == Unavailable("canvas-error")
        assert all(isinstance(s, Available) for s in signals[1:])


class TestGenerateFingerprint:
    def test_deterministic(self):
        assert generate_fingerprint(full_profile()) == generate_fingerprint(full_profile())

    def test_format_and_canvas_segment(self):
        profile = full_profile()
        fp = generate_fingerprint(profile)
        assert FINGERPRINT_RE.match(fp)
        assert fp.split("-")[1] == hash_string(profile.canvasDataUrl)

    def test_full_segment_hashes_joined_signals(self):
        expected = hash_string(
            "no-canvas|||no-webgl|||unsupported|||unsupported|||no-plugins"
            "|||unsupported|||unsupported|||0|||0"
        )
        fp = generate_fingerprint(DeviceProfile())
        assert fp == f"{expected}-{hash_string('no-canvas')}"

    def test_well_formed_when_every_collector_fails(self):
        def boom(_):
            raise ValueError("unsupported api")

        collectors = tuple(Collector(c.name, boom, c.missing, c.failed) for c in COLLECTORS)
        fp = generate_fingerprint(full_profile(), collectors)
        assert FINGERPRINT_RE.match(fp)
        assert fp.split("-")[1] == hash_string("canvas-error")

    def test_differs_across_devices(self):
        a = generate_fingerprint(full_profile())
        b = generate_fingerprint(full_profile(timezone="America/New_York"))
        c = generate_fingerprint(full_profile(canvasDataUrl="data:image/png;base64,OTHER"))
        assert len({a, b, c}) == 3
        assert a.split("-")[1] == b.split("-")[1]


class TestClaimMarker:
    def test_fresh_storage_has_not_claimed(self):
        assert ClaimMarker({}).has_claimed_before() is False

    def test_mark_then_check(self):
        storage: dict[str, str] = {}
        marker = ClaimMarker(storage)
        marker.mark_as_claimed()
        assert marker.has_claimed_before() is True
        assert storage[CLAIMED_STORAGE_KEY] == "true"

    def test_only_literal_true_counts(self):
        assert ClaimMarker({CLAIMED_STORAGE_KEY: "1"}).has_claimed_before() is False
