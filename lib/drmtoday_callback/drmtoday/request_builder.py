# drmtoday_callback/drmtoday/request_builder.py
from typing import Callable, Dict, List, Tuple
from urllib.parse import quote, urlencode, urlsplit, urlunsplit

from ..base.models.drm_models import DRMSystem, PreparedLicenseRequest, ProvisionRequest
from ..base.models.session_config import SessionConfig
from ..base.utils.request_id import generate_request_id
from .constants import DrmtodayDefaults, DrmtodayHeaders
from .custom_data import encode_custom_data


def append_path(base_url: str, path: str) -> str:
    """Append an already encoded path to a URL, keeping its query string"""
    parts = urlsplit(base_url)
    joined_path = f"{parts.path.rstrip('/')}/{path.lstrip('/')}"
    return urlunsplit((parts.scheme, parts.netloc, joined_path, parts.query, parts.fragment))


def append_query_params(url: str, params: List[Tuple[str, str]]) -> str:
    """Append query parameters to a URL; an existing query string is kept as is"""
    parts = urlsplit(url)
    query = "&".join(filter(None, (parts.query, urlencode(params))))
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


class LicenseRequestBuilder:
    """
    Builds DRMtoday key requests.

    The default license URL the DRM engine may carry is ignored; requests
    always target the configured DRMtoday backend.
    """

    def __init__(self, request_id_factory: Callable[[], str] = generate_request_id):
        self._request_id_factory = request_id_factory

    def build(self, config: SessionConfig, drm_system: DRMSystem, challenge: bytes) -> PreparedLicenseRequest:
        """
        Build URL, headers and body for a key request

        Args:
            config: Validated session configuration
            drm_system: Target DRM system
            challenge: Opaque license challenge from the DRM engine

        Returns:
            PreparedLicenseRequest
        """
        request_id = self._request_id_factory()

        url = append_path(config.drmtoday_url, DrmtodayDefaults.LICENSE_PATHS[drm_system])

        params = [(DrmtodayDefaults.LOG_REQUEST_ID_PARAM, request_id)]
        # Overrides the key ids from the DASH manifest
        if config.has_asset_id:
            params.append((DrmtodayDefaults.ASSET_ID_PARAM, config.asset_id))
        url = append_query_params(url, params)

        return PreparedLicenseRequest(
            url=url,
            data=challenge,
            request_id=request_id,
            headers=self.build_headers(config, drm_system),
        )

    @staticmethod
    def build_headers(config: SessionConfig, drm_system: DRMSystem) -> Dict[str, str]:
        """Custom data, optional auth token and scheme content headers"""
        headers = {DrmtodayDefaults.CUSTOM_DATA_HEADER: encode_custom_data(config)}

        if config.has_auth_token:
            headers[DrmtodayDefaults.AUTH_TOKEN_HEADER] = config.auth_token

        headers.update(DrmtodayHeaders.get_content_headers(drm_system))
        return headers


def build_provision_url(request: ProvisionRequest) -> str:
    """Provisioning URL with the engine payload appended as signedRequest"""
    separator = "&" if "?" in request.default_url else "?"
    signed_request = quote(request.data.decode("utf-8", errors="replace"), safe="")
    return f"{request.default_url}{separator}{DrmtodayDefaults.SIGNED_REQUEST_PARAM}={signed_request}"
