# drmtoday_callback/base/__init__.py
"""
Base module for the DRMtoday callback

Models, transport, logging and the callback abstraction shared by the
licensing backend implementation.
"""

from .drm import MediaDrmCallback
from .models import DRMSystem, KeyRequest, ProvisionRequest, SessionConfig, DrmtodayEnvironment
from .network import HTTPManager, HTTPManagerFactory

__all__ = [
    "MediaDrmCallback",
    "DRMSystem",
    "KeyRequest",
    "ProvisionRequest",
    "SessionConfig",
    "DrmtodayEnvironment",
    "HTTPManager",
    "HTTPManagerFactory",
]
