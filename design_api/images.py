import base64
import binascii
import io
import re

from loguru import logger
from PIL import Image, UnidentifiedImageError

from design_api.config import settings
from design_api.errors import InputValidationError
from design_api.models.request import ImagePayload

SUPPORTED_MIME_TYPES = ("image/png", "image/jpeg", "image/jpg", "image/webp", "image/gif")

# Pillow format name -> canonical MIME type
_PILLOW_FORMATS = {
    "PNG": "image/png",
    "JPEG": "image/jpeg",
    "WEBP": "image/webp",
    "GIF": "image/gif",
}

_DATA_URL_RE = re.compile(r"data:(image/[^;]+);base64,(.+)")


def parse_data_url(data_url: str | None) -> tuple[str, str]:
    """Split ``data:<mime>;base64,<payload>`` into (mime, payload) after envelope checks."""
    if not data_url:
        raise InputValidationError("No image provided. Please upload an image.")
    if not data_url.startswith("data:image/"):
        raise InputValidationError("Invalid image format. Please upload a valid image file.")

    match = _DATA_URL_RE.fullmatch(data_url)
    if not match:
        raise InputValidationError("Invalid image data format.")

    mime_type, payload = match.groups()
    if mime_type not in SUPPORTED_MIME_TYPES:
        logger.info("Rejected unsupported MIME type {mime}", mime=mime_type)
        raise InputValidationError("Unsupported image format. Please use PNG, JPEG, WEBP, or GIF.")
    return mime_type, payload


def decode_payload(payload: str, max_bytes: int) -> bytes:
    # Reject on the base64 length before allocating the decoded buffer
    if len(payload) * 3 // 4 > max_bytes + 2:
        raise InputValidationError("Image must be less than 50MB")
    try:
        raw = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        raise InputValidationError("Invalid image data format.") from None
    if len(raw) > max_bytes:
        raise InputValidationError("Image must be less than 50MB")
    return raw


def detect_format(raw: bytes) -> str:
    """Return the canonical MIME type of ``raw`` as sniffed by Pillow."""
    try:
        with Image.open(io.BytesIO(raw)) as img:
            fmt = img.format
            img.verify()
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError, Image.DecompressionBombError) as e:
        logger.info("Image payload failed to decode: {err}", err=e)
        raise InputValidationError("Invalid image data. The file could not be read as an image.") from None

    if fmt not in _PILLOW_FORMATS:
        logger.info("Decoded image has unsupported format {fmt}", fmt=fmt)
        raise InputValidationError("Unsupported image format. Please use PNG, JPEG, WEBP, or GIF.")
    return _PILLOW_FORMATS[fmt]


def validate_image(data_url: str | None, max_bytes: int | None = None) -> ImagePayload:
    """Run every server-side image check; raises InputValidationError on the first failure."""
    mime_type, payload = parse_data_url(data_url)
    raw = decode_payload(payload, settings.max_image_bytes if max_bytes is None else max_bytes)
    detected = detect_format(raw)

    declared = "image/jpeg" if mime_type == "image/jpg" else mime_type
    if detected != declared:
        logger.warning("Declared {declared} but payload is {detected}", declared=mime_type, detected=detected)

    logger.debug("Validated {mime} image ({size} bytes)", mime=mime_type, size=len(raw))
    return ImagePayload(
        mime_type=mime_type,
        size=len(raw),
        detected_format=detected,
        data_url=data_url,
    )
