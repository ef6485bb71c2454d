# drmtoday_callback/drmtoday/__init__.py
from .callback import DrmtodayCallback
from .constants import DrmtodayDefaults, DrmtodayHeaders
from .custom_data import encode_custom_data
from .request_builder import LicenseRequestBuilder, build_provision_url
from .response_decoder import decode_license

__all__ = [
    'DrmtodayCallback',
    'DrmtodayDefaults',
    'DrmtodayHeaders',
    'LicenseRequestBuilder',
    'build_provision_url',
    'decode_license',
    'encode_custom_data',
]
