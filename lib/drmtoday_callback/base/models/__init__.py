# drmtoday_callback/base/models/__init__.py
from .drm_models import DRMSystem, KeyRequest, ProvisionRequest, PreparedLicenseRequest
from .session_config import SessionConfig, DrmtodayEnvironment
from .proxy_models import ProxyConfig, ProxyScope, ProxyAuth, ProxyType, RequestConfig


__all__ = [
    'DRMSystem',
    'KeyRequest',
    'ProvisionRequest',
    'PreparedLicenseRequest',
    'SessionConfig',
    'DrmtodayEnvironment',
    'ProxyConfig',
    'ProxyScope',
    'ProxyAuth',
    'ProxyType',
    'RequestConfig',
]
