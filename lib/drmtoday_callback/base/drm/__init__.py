# drmtoday_callback/base/drm/__init__.py
"""
Callback abstraction between a playback engine and a licensing backend.
"""

from .media_drm_callback import MediaDrmCallback

__all__ = [
    "MediaDrmCallback",
]
