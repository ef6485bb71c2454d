# drmtoday_callback/base/drm/media_drm_callback.py
from abc import ABC, abstractmethod
from typing import Optional, Union
from uuid import UUID

from ..models.drm_models import DRMSystem, KeyRequest, ProvisionRequest


class MediaDrmCallback(ABC):
    """
    Abstract base class for license callbacks invoked by a playback engine.

    Implementations perform blocking network I/O and must be called from a
    worker thread, never from a UI-bound one.
    """

    @abstractmethod
    def execute_provision_request(
        self, uuid: Union[str, UUID, DRMSystem], request: ProvisionRequest
    ) -> Optional[bytes]:
        """
        Execute a device provisioning request.

        Args:
            uuid: DRM system UUID (or DRMSystem) the request belongs to
            request: Provisioning request from the DRM engine

        Returns:
            Provisioning response bytes, or None on failure
        """
        pass

    @abstractmethod
    def execute_key_request(
        self, uuid: Union[str, UUID, DRMSystem], request: KeyRequest
    ) -> Optional[bytes]:
        """
        Execute a license (key) request.

        Args:
            uuid: DRM system UUID (or DRMSystem) the request belongs to
            request: Key request carrying the license challenge

        Returns:
            License bytes for the DRM engine, or None on failure
        """
        pass
