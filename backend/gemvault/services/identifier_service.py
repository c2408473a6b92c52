"""Certificate identifiers: unique gemstone numbers and verification QR codes."""

import base64
import logging
import secrets
import string
import time
from dataclasses import dataclass
from io import BytesIO

import qrcode
from qrcode.constants import ERROR_CORRECT_M

from gemvault.config import settings

logger = logging.getLogger(__name__)

UNIQUE_ID_PREFIX = "GEM"
_SUFFIX_ALPHABET = string.digits + string.ascii_uppercase
_SUFFIX_LENGTH = 6


@dataclass(frozen=True)
class GemstoneIdentifiers:
    """Identifiers issued when a gemstone is registered."""

    unique_id_number: str
    verification_url: str
    qr_code_data_url: str


class IdentifierService:
    """Issues certificate numbers and renders their QR codes."""

    @staticmethod
    def generate_unique_id(now_ms: int | None = None) -> str:
        """GEM-<epoch milliseconds>-<6 upper-case base36 characters>."""
        timestamp = now_ms if now_ms is not None else int(time.time() * 1000)
        suffix = "".join(secrets.choice(_SUFFIX_ALPHABET) for _ in range(_SUFFIX_LENGTH))
        return f"{UNIQUE_ID_PREFIX}-{timestamp}-{suffix}"

    @staticmethod
    def verification_url(unique_id_number: str) -> str:
        """Public certificate page encoded in the QR code."""
        return f"{settings.client_base_url.rstrip('/')}/verify/{unique_id_number}"

    @staticmethod
    def qr_code_data_url(content: str) -> str:
        """Render content as a PNG QR code data URL."""
        qr = qrcode.QRCode(error_correction=ERROR_CORRECT_M, border=1)
        qr.add_data(content)
        qr.make(fit=True)
        image = qr.make_image(fill_color="black", back_color="white")

        buffer = BytesIO()
        image.save(buffer, format="PNG")
        encoded = base64.b64encode(buffer.getvalue()).decode()
        return f"data:image/png;base64,{encoded}"

    @classmethod
    def generate(cls) -> GemstoneIdentifiers:
        """Issue a new certificate number together with its QR code."""
        unique_id = cls.generate_unique_id()
        url = cls.verification_url(unique_id)
        logger.debug(f"Generated identifier {unique_id}")
        return GemstoneIdentifiers(
            unique_id_number=unique_id,
            verification_url=url,
            qr_code_data_url=cls.qr_code_data_url(url),
        )
