# drmtoday_callback/base/models/drm_models.py
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Union
from uuid import UUID


class DRMSystem(str, Enum):
    WIDEVINE = "com.widevine.alpha"
    PLAYREADY = "com.microsoft.playready"

    @property
    def system_uuid(self) -> str:
        """Get the standard UUID for this DRM system"""
        uuid_mapping = {
            DRMSystem.WIDEVINE: "edef8ba9-79d6-4ace-a3c8-27dcd51d21ed",
            DRMSystem.PLAYREADY: "9a04f079-9840-4286-ab92-e65be0885f95",
        }
        return uuid_mapping[self]

    @property
    def display_name(self) -> str:
        return {DRMSystem.WIDEVINE: "Widevine", DRMSystem.PLAYREADY: "PlayReady"}[self]

    @classmethod
    def from_uuid(cls, uuid: Union[str, UUID]) -> Optional["DRMSystem"]:
        """Get DRM system from UUID"""
        uuid_lower = str(uuid).lower().replace("-", "")
        for system in cls:
            if system.system_uuid.replace("-", "") == uuid_lower:
                return system
        return None

    @classmethod
    def resolve(cls, identifier: Union[str, UUID, "DRMSystem"]) -> Optional["DRMSystem"]:
        """
        Resolve a DRM system from a member, a system value, a short name or a UUID

        Args:
            identifier: e.g. DRMSystem.WIDEVINE, "com.widevine.alpha", "widevine"
                or "edef8ba9-79d6-4ace-a3c8-27dcd51d21ed"

        Returns:
            Matching DRMSystem or None if unknown
        """
        if isinstance(identifier, DRMSystem):
            return identifier
        if isinstance(identifier, UUID):
            return cls.from_uuid(identifier)

        value = str(identifier).strip().lower()
        for system in cls:
            if value in (system.value, system.name.lower()):
                return system
        return cls.from_uuid(value)


@dataclass
class KeyRequest:
    """License challenge produced by the DRM engine"""
    data: bytes
    # Default license URL from the engine; never used for DRMtoday requests
    license_server_url: Optional[str] = None


@dataclass
class ProvisionRequest:
    """Device provisioning request produced by the DRM engine"""
    data: bytes
    default_url: str


@dataclass
class PreparedLicenseRequest:
    """A fully built key request, ready to be posted"""
    url: str
    data: bytes
    request_id: str
    headers: Dict[str, str] = field(default_factory=dict)
