# lib/drmtoday_callback/__init__.py

from .base.exceptions import (
    ConfigurationError,
    CustomDataEncodingError,
    DecodeError,
    DrmtodayError,
    NotFoundError,
    TransportError,
)
from .base.models import DRMSystem, DrmtodayEnvironment, KeyRequest, ProvisionRequest, SessionConfig
from .base.network import HTTPManagerFactory
from .base.utils.logger import logger
from .drmtoday import DrmtodayCallback


def get_configured_callback(env_manager=None) -> DrmtodayCallback:
    """
    Get a callback configured from Kodi settings, environment variables or config.json

    An incomplete configuration is not an error here: the callback is returned
    unconfigured and key requests fail until configure() is called.

    Args:
        env_manager: EnvironmentManager to read from (global one if omitted)

    Returns:
        DrmtodayCallback instance
    """
    callback = DrmtodayCallback(http_manager=HTTPManagerFactory.create_from_environment(env_manager))

    config = SessionConfig.from_environment(env_manager)
    try:
        callback.configure_session(config)
    except ConfigurationError as e:
        logger.warning(f"DRMtoday callback not configured yet: {e}")

    return callback


__all__ = [
    'DrmtodayCallback',
    'DRMSystem',
    'DrmtodayEnvironment',
    'KeyRequest',
    'ProvisionRequest',
    'SessionConfig',
    'DrmtodayError',
    'ConfigurationError',
    'TransportError',
    'NotFoundError',
    'DecodeError',
    'CustomDataEncodingError',
    'get_configured_callback',
]
