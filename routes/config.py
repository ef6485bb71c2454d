#!/usr/bin/env python3
"""
Session configuration route handlers
"""

from bottle import request, response
from drmtoday_callback import ConfigurationError, SessionConfig
from drmtoday_callback.base.utils import logger


def setup_config_routes(app, callback):
    """Setup configuration-related routes"""

    @app.route("/api/config", method="GET")
    def get_config():
        """Current session configuration (auth token masked)"""
        config = callback.config
        return {"configured": config.is_valid, "config": config.to_dict()}

    @app.route("/api/config", method="POST")
    def update_config():
        """
        Replace the session configuration.

        Body:
        {
            "environment": "staging",          # or "drmtoday_url": "https://..."
            "merchant": "client_dev",
            "user_id": "purchase",
            "session_id": "p0",
            "auth_token": null,                # optional
            "asset_id": null                   # optional
        }
        """
        try:
            config_data = request.json
        except ValueError:
            response.status = 400
            return {"error": "Invalid JSON format"}

        if not isinstance(config_data, dict):
            response.status = 400
            return {"error": "Configuration must be a JSON object"}

        config = SessionConfig.from_dict(config_data)
        try:
            callback.configure_session(config)
        except ConfigurationError as e:
            logger.warning(f"Rejected configuration: {e}")
            response.status = 400
            return {"error": str(e), "field": e.field}

        return {"success": True, "config": config.to_dict()}
