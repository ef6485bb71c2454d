# drmtoday_callback/drmtoday/response_decoder.py
import base64
import binascii
import json

from ..base.exceptions import DecodeError
from ..base.models.drm_models import DRMSystem
from .constants import DrmtodayDefaults


def decode_license(drm_system: DRMSystem, body: bytes) -> bytes:
    """
    Extract the license payload from a DRMtoday response

    Widevine responses are a JSON envelope with a base64 ``license`` field.
    PlayReady responses already are the license document and are returned as is.

    Raises:
        DecodeError: if a Widevine envelope is malformed
    """
    if drm_system != DRMSystem.WIDEVINE:
        return body

    try:
        envelope = json.loads(body.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as e:
        raise DecodeError(f"Widevine response is not valid JSON: {e}") from e

    if not isinstance(envelope, dict):
        raise DecodeError("Widevine response is not a JSON object")

    encoded = envelope.get(DrmtodayDefaults.WIDEVINE_LICENSE_FIELD)
    if not isinstance(encoded, str):
        raise DecodeError(f"Widevine response has no '{DrmtodayDefaults.WIDEVINE_LICENSE_FIELD}' field")

    try:
        return base64.b64decode(encoded)
    except (binascii.Error, ValueError) as e:
        raise DecodeError(f"Widevine license is not valid base64: {e}") from e
