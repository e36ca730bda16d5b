# controller/fingerprint_controller.py
from fastapi import APIRouter, Depends
from model.api import FingerprintResponse
from model.fingerprint import DeviceProfile
from service.fingerprint_service import FingerprintService
from util.constants import InternalURIs
from controller.controller_dependencies import get_fingerprint_service

fingerprint_router = APIRouter()


@fingerprint_router.post(InternalURIs.FINGERPRINT, response_model=FingerprintResponse)
async def fingerprint(
    profile: DeviceProfile,
    service: FingerprintService = Depends(get_fingerprint_service),
) -> FingerprintResponse:
    return FingerprintResponse(fingerprint=service.fingerprint(profile))
