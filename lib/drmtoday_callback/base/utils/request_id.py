# drmtoday_callback/base/utils/request_id.py
import secrets

# Number of random bytes in a logRequestId
REQUEST_ID_SIZE = 16


def generate_request_id(size: int = REQUEST_ID_SIZE) -> str:
    """
    Create a random request id used to trace a license request on the server.

    Returns:
        ``size`` random bytes rendered as lowercase hex
    """
    return secrets.token_bytes(size).hex()
