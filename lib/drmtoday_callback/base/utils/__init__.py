# drmtoday_callback/base/utils/__init__.py

from .logger import logger, BaseLogger
from .request_id import generate_request_id, REQUEST_ID_SIZE

__all__ = [
    'logger',
    'BaseLogger',
    'generate_request_id',
    'REQUEST_ID_SIZE',
]
