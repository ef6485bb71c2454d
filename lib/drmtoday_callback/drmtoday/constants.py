# drmtoday_callback/drmtoday/constants.py
"""
DRMtoday licensing constants and per-scheme request settings
"""

from typing import Dict

from ..base.models.drm_models import DRMSystem


class DrmtodayDefaults:
    """Default values for DRMtoday license requests"""

    # License endpoints, relative to the environment base URL
    WIDEVINE_LICENSE_PATH = 'license-proxy-widevine/cenc/'
    PLAYREADY_LICENSE_PATH = 'license-proxy-headerauth/drmtoday/RightsManager.asmx'

    # Query parameters
    LOG_REQUEST_ID_PARAM = 'logRequestId'
    ASSET_ID_PARAM = 'assetId'
    SIGNED_REQUEST_PARAM = 'signedRequest'

    # Headers
    CUSTOM_DATA_HEADER = 'dt-custom-data'
    AUTH_TOKEN_HEADER = 'x-dt-auth-token'

    PLAYREADY_SOAP_ACTION = 'http://schemas.microsoft.com/DRM/2007/03/protocols/AcquireLicense'

    # Field of the Widevine JSON response carrying the base64 license
    WIDEVINE_LICENSE_FIELD = 'license'

    LICENSE_PATHS: Dict[DRMSystem, str] = {
        DRMSystem.WIDEVINE: WIDEVINE_LICENSE_PATH,
        DRMSystem.PLAYREADY: PLAYREADY_LICENSE_PATH,
    }


class DrmtodayHeaders:
    """Scheme specific content headers"""

    @staticmethod
    def get_content_headers(drm_system: DRMSystem) -> Dict[str, str]:
        """Get Content-Type (and SOAPAction for PlayReady) for a DRM system"""
        if drm_system == DRMSystem.WIDEVINE:
            return {'Content-Type': 'application/octet-stream'}
        return {
            'Content-Type': 'text/xml',
            'SOAPAction': DrmtodayDefaults.PLAYREADY_SOAP_ACTION,
        }
