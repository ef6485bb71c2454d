# drmtoday_callback/base/network/__init__.py
from .http_manager import (
    HTTPManager,
    HTTPManagerFactory,
    LicenseSession,
    MANUAL_REDIRECT_CODES,
    MAX_MANUAL_REDIRECTS,
)

__all__ = [
    "HTTPManager",
    "HTTPManagerFactory",
    "LicenseSession",
    "MANUAL_REDIRECT_CODES",
    "MAX_MANUAL_REDIRECTS",
]
