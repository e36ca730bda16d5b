# model/fingerprint.py
from pydantic import BaseModel


class DeviceProfile(BaseModel):
    """
    Raw browser/device readings reported by the airdrop page.
    Any field may be missing; missing or unusable readings degrade to
    sentinels during collection instead of failing validation.
    """

    canvasDataUrl: str | None = None
    # WebGL: context obtained? debug-renderer extension available?
    webglSupported: bool = False
    webglDebugInfo: bool = False
    webglVendor: str | None = None
    webglRenderer: str | None = None
    screenWidth: int | None = None
    screenHeight: int | None = None
    colorDepth: int | None = None
    timezone: str | None = None
    plugins: list[str] | None = None
    userAgent: str | None = None
    language: str | None = None
    hardwareConcurrency: int | str | None = None
    maxTouchPoints: int | str | None = None
