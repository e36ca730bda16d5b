# service/fingerprint_service.py
import logging
from core.fingerprint import generate_fingerprint
from model.fingerprint import DeviceProfile

logger = logging.getLogger(__name__)


class FingerprintService:
    def fingerprint(self, profile: DeviceProfile) -> str:
        fp = generate_fingerprint(profile)
        logger.debug("fingerprint.generated fp=%s", fp)
        return fp
