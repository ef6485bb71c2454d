# drmtoday_callback/drmtoday/callback.py
"""
DRMtoday implementation of the media DRM callback.

Key requests always go to the configured DRMtoday backend; the default URL
the DRM engine attaches to a key request is ignored.
"""

from typing import Optional, Union
from uuid import UUID

from ..base.drm.media_drm_callback import MediaDrmCallback
from ..base.exceptions import ConfigurationError, DecodeError, NotFoundError, TransportError
from ..base.models.drm_models import DRMSystem, KeyRequest, ProvisionRequest
from ..base.models.session_config import SessionConfig
from ..base.network.http_manager import HTTPManager
from ..base.utils.logger import logger
from .request_builder import LicenseRequestBuilder, build_provision_url
from .response_decoder import decode_license

_UNCONFIGURED = SessionConfig(drmtoday_url=None, merchant=None, user_id=None, session_id=None)


class DrmtodayCallback(MediaDrmCallback):
    """
    License callback for DRMtoday (Widevine and PlayReady).

    Create it unconfigured and call configure() before the first key request,
    or pass a SessionConfig directly. The same instance can be reconfigured
    between playback sessions; callers must not reconfigure while a request
    is in flight.
    """

    def __init__(
        self,
        http_manager: Optional[HTTPManager] = None,
        config: Optional[SessionConfig] = None,
        request_builder: Optional[LicenseRequestBuilder] = None,
    ):
        """
        Args:
            http_manager: Transport used for all requests
            config: Initial session configuration (validated)
            request_builder: Key request builder

        Raises:
            ConfigurationError: If ``config`` misses a mandatory field
        """
        self.http_manager = http_manager or HTTPManager()
        self.request_builder = request_builder or LicenseRequestBuilder()
        self._config = _UNCONFIGURED

        if config is not None:
            self.configure_session(config)

    @property
    def config(self) -> SessionConfig:
        return self._config

    def configure(
        self,
        drmtoday_url: str,
        merchant: str,
        user_id: str,
        session_id: str,
        auth_token: Optional[str] = None,
        asset_id: Optional[str] = None,
    ) -> SessionConfig:
        """
        Replace the session configuration.

        Args:
            drmtoday_url: Backend URL, one of DrmtodayEnvironment or a custom URL
            merchant: The merchant identifier (mandatory)
            user_id: The userId (mandatory)
            session_id: The sessionId (mandatory)
            auth_token: Auth token, or None if userId/sessionId callback auth is used
            asset_id: Asset id overriding the manifest key ids, for debugging

        Returns:
            The new SessionConfig

        Raises:
            ConfigurationError: If any mandatory value is missing
        """
        config = SessionConfig(
            drmtoday_url=drmtoday_url,
            merchant=merchant,
            user_id=user_id,
            session_id=session_id,
            auth_token=auth_token,
            asset_id=asset_id,
        )
        self.configure_session(config)
        return config

    def configure_session(self, config: SessionConfig) -> None:
        """
        Store ``config`` and validate it.

        The configuration is stored even when invalid, so subsequent key
        requests fail until a valid configuration is supplied.
        """
        self._config = config
        config.validate()
        logger.info(
            f"DRMtoday configured: backend={config.drmtoday_url} merchant={config.merchant} "
            f"auth_token={'yes' if config.has_auth_token else 'no'} asset_id={config.asset_id or '-'}"
        )

    def execute_provision_request(
        self, uuid: Union[str, UUID, DRMSystem], request: ProvisionRequest
    ) -> Optional[bytes]:
        """Post the provisioning payload; failures are logged and yield None"""
        url = build_provision_url(request)
        logger.log_provision_event("request", url)

        try:
            return self.http_manager.post(url, b"", operation="provisioning")
        except TransportError as e:
            logger.error(f"Provisioning request failed: {e}")
            return None

    def execute_key_request(
        self, uuid: Union[str, UUID, DRMSystem], request: KeyRequest
    ) -> Optional[bytes]:
        """Acquire a license from DRMtoday; failures are logged and yield None"""
        config = self._config
        try:
            config.validate()
        except ConfigurationError as e:
            logger.error(f"DRMtoday configuration invalid: {e}")
            return None

        drm_system = DRMSystem.resolve(uuid)
        if drm_system is None:
            logger.error(f"Unsupported DRM system: {uuid}")
            return None

        # CustomDataEncodingError is not caught here
        prepared = self.request_builder.build(config, drm_system, request.data)
        logger.log_license_event(prepared.request_id, f"{drm_system.display_name} license request", prepared.url)

        try:
            body = self.http_manager.post(prepared.url, prepared.data, prepared.headers, operation="license")
        except NotFoundError:
            logger.error(f"License not found [{prepared.request_id}]")
            return None
        except TransportError as e:
            logger.error(f"Error during license acquisition [{prepared.request_id}]: {e}", exc_info=True)
            return None

        try:
            license_data = decode_license(drm_system, body)
        except DecodeError as e:
            logger.error(f"Error while parsing {drm_system.display_name} response [{prepared.request_id}]: {e}")
            return None

        logger.log_license_event(prepared.request_id, "license acquired", f"{len(license_data)} bytes")
        return license_data

    def close(self) -> None:
        self.http_manager.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
