#!/usr/bin/env python3
"""
License and provisioning route handlers
"""

from bottle import request, response
from drmtoday_callback import DRMSystem, KeyRequest, ProvisionRequest
from drmtoday_callback.base.utils import logger


def setup_drm_routes(app, callback):
    """Setup license acquisition routes"""

    @app.route("/api/drm/<system>/license", method="POST")
    def acquire_license(system):
        """
        Acquire a license from DRMtoday.

        The request body is the license challenge produced by the CDM.
        ``system`` is "widevine", "playready", a DRM system value
        (e.g. "com.widevine.alpha") or a system UUID.

        Returns the license bytes (Widevine) or license XML (PlayReady).
        """
        drm_system = DRMSystem.resolve(system)
        if drm_system is None:
            response.status = 400
            return {"error": "Unsupported DRM system", "system": system}

        challenge = request.body.read()
        if not challenge:
            response.status = 400
            return {"error": "Empty license challenge", "system": drm_system.value}

        license_data = callback.execute_key_request(drm_system, KeyRequest(data=challenge))
        if license_data is None:
            response.status = 502
            return {"error": "License acquisition failed", "system": drm_system.value}

        response.content_type = (
            "application/octet-stream" if drm_system == DRMSystem.WIDEVINE else "text/xml"
        )
        return license_data

    @app.route("/api/drm/provision", method="POST")
    def provision():
        """
        Forward a provisioning request.

        Query parameters:
        - url: Provisioning URL supplied by the DRM engine

        The request body is the provisioning payload.
        """
        default_url = request.query.get("url")
        if not default_url:
            response.status = 400
            return {"error": "Missing 'url' query parameter"}

        provision_response = callback.execute_provision_request(
            DRMSystem.WIDEVINE,
            ProvisionRequest(data=request.body.read(), default_url=default_url),
        )
        if provision_response is None:
            logger.warning(f"Provisioning failed for {default_url}")
            response.status = 502
            return {"error": "Provisioning failed"}

        response.content_type = "application/octet-stream"
        return provision_response
