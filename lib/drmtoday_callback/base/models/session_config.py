# drmtoday_callback/base/models/session_config.py
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Optional

from ..exceptions import ConfigurationError


class DrmtodayEnvironment(str, Enum):
    """Base URLs of the DRMtoday licensing environments"""

    PRODUCTION = "https://lic.drmtoday.com"
    STAGING = "https://lic.staging.drmtoday.com"
    TEST = "https://lic.test.drmtoday.com"

    @classmethod
    def resolve_url(cls, value: Optional[str]) -> Optional[str]:
        """
        Map an environment name ("production", "staging", "test") to its URL.
        Any other value is treated as a custom backend URL and returned as is.
        """
        if value is None:
            return None
        if isinstance(value, DrmtodayEnvironment):
            return value.value
        try:
            return cls[str(value).strip().upper()].value
        except KeyError:
            return str(value)


# Mandatory fields in validation order, with their error messages
_MANDATORY_FIELDS = (
    ("drmtoday_url", "No valid DRMtoday backend URL specified!"),
    ("merchant", "No valid merchant specified!"),
    ("user_id", "No valid userId specified!"),
    ("session_id", "No valid sessionId specified!"),
)


@dataclass(frozen=True)
class SessionConfig:
    """
    Session identity used for DRMtoday license requests.

    Instances are immutable; reconfiguration replaces the whole object.
    """

    drmtoday_url: Optional[str]
    merchant: Optional[str]
    user_id: Optional[str]
    session_id: Optional[str]
    auth_token: Optional[str] = None
    # Overrides the key ids from the DASH manifest; debugging only
    asset_id: Optional[str] = None

    def validate(self) -> None:
        """
        Validate the mandatory configuration values

        Raises:
            ConfigurationError: naming the first missing field
        """
        for field_name, message in _MANDATORY_FIELDS:
            if not getattr(self, field_name):
                raise ConfigurationError(message, field=field_name)

    @property
    def is_valid(self) -> bool:
        try:
            self.validate()
        except ConfigurationError:
            return False
        return True

    @property
    def has_auth_token(self) -> bool:
        return bool(self.auth_token)

    @property
    def has_asset_id(self) -> bool:
        # An empty asset id is treated exactly like a missing one
        return bool(self.asset_id)

    def to_dict(self, mask_secrets: bool = True) -> Dict[str, Any]:
        """Convert to dictionary, masking the auth token by default"""
        result = asdict(self)
        if mask_secrets and self.auth_token:
            result["auth_token"] = "***"
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SessionConfig":
        """
        Create SessionConfig from a dictionary.

        Accepts either ``drmtoday_url`` or ``environment`` for the backend.
        """
        url = data.get("drmtoday_url") or data.get("environment")
        return cls(
            drmtoday_url=DrmtodayEnvironment.resolve_url(url),
            merchant=data.get("merchant"),
            user_id=data.get("user_id"),
            session_id=data.get("session_id"),
            auth_token=data.get("auth_token") or None,
            asset_id=data.get("asset_id") or None,
        )

    @classmethod
    def from_environment(cls, env_manager=None) -> "SessionConfig":
        """Create SessionConfig from the Kodi settings, environment variables or config.json"""
        if env_manager is None:
            from ..utils.environment import get_environment_manager
            env_manager = get_environment_manager()

        return cls(
            drmtoday_url=DrmtodayEnvironment.resolve_url(
                env_manager.get_config("drmtoday_environment", DrmtodayEnvironment.PRODUCTION.value)
            ),
            merchant=env_manager.get_config("merchant"),
            user_id=env_manager.get_config("user_id"),
            session_id=env_manager.get_config("session_id"),
            auth_token=env_manager.get_config("auth_token"),
            asset_id=env_manager.get_config("asset_id"),
        )
