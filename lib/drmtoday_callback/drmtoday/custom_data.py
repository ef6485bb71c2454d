# drmtoday_callback/drmtoday/custom_data.py
import base64
import json

from ..base.exceptions import CustomDataEncodingError
from ..base.models.session_config import SessionConfig


def get_custom_data_json(config: SessionConfig) -> str:
    """
    Serialize the session identity into the compact DRMtoday opt-data JSON

    Raises:
        CustomDataEncodingError: if the values cannot be serialized
    """
    payload = {
        "userId": config.user_id,
        "sessionId": config.session_id,
        "merchant": config.merchant,
    }
    try:
        return json.dumps(payload, separators=(",", ":"))
    except (TypeError, ValueError) as e:
        raise CustomDataEncodingError(f"Unable to encode request data: {e}") from e


def encode_custom_data(config: SessionConfig) -> str:
    """Base64 (no line wrapping) value for the dt-custom-data header"""
    return base64.b64encode(get_custom_data_json(config).encode("utf-8")).decode("ascii")
