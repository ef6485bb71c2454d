# drmtoday_callback/base/exceptions.py
"""
Exception hierarchy for license acquisition.

Only CustomDataEncodingError is meant to escape a key request; everything else
is logged by the callback and turned into an empty license result.
"""

from typing import Mapping, Optional

from requests.structures import CaseInsensitiveDict


class DrmtodayError(Exception):
    """Base class for all callback errors"""


class ConfigurationError(DrmtodayError, ValueError):
    """A mandatory session configuration field is missing or empty"""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class TransportError(DrmtodayError):
    """Network or HTTP failure, including unresolved redirects"""

    def __init__(self, message: str, status_code: Optional[int] = None,
                 url: Optional[str] = None, headers: Optional[Mapping[str, str]] = None):
        super().__init__(message)
        self.status_code = status_code
        self.url = url
        self.headers = CaseInsensitiveDict(headers or {})


class NotFoundError(TransportError):
    """The license resource does not exist (HTTP 404)"""


class DecodeError(DrmtodayError):
    """A successful response body could not be decoded into a license"""


class CustomDataEncodingError(DrmtodayError, RuntimeError):
    """Session identity could not be serialized into the custom data header"""


__all__ = [
    'DrmtodayError',
    'ConfigurationError',
    'TransportError',
    'NotFoundError',
    'DecodeError',
    'CustomDataEncodingError',
]
