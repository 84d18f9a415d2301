"""
Base Device Gateway Interface

Abstract interface for the endpoint the presets are applied to.
Every call is a single attempt: implementations raise GatewayError
on failure and never retry.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional


class GatewayError(Exception):
    """A device read or write failed"""


@dataclass
class CameraPreset:
    """A stored camera position (not a room preset)"""
    id: int
    name: str


class DeviceGateway(ABC):
    """
    Abstract base class for device control.

    Covers the configuration, command and UI extension surface used
    by the room presets controller.
    """

    # Configuration

    @abstractmethod
    def get_output_roles(self) -> List[str]:
        """
        Get the monitor role of every video output connector.

        Returns:
            Roles ordered by connector id (index 0 = connector 1)
        """
        pass

    @abstractmethod
    def set_output_role(self, connector_id: int, role: str):
        """Set the monitor role of one video output connector"""
        pass

    @abstractmethod
    def get_monitors(self) -> str:
        """Get the monitor grouping configuration (Video Monitors)"""
        pass

    @abstractmethod
    def set_monitors(self, value: str):
        """Set the monitor grouping configuration"""
        pass

    @abstractmethod
    def get_speaker_track_mode(self) -> str:
        """Get the configured speaker tracking mode"""
        pass

    # Status

    @abstractmethod
    def get_active_layout(self) -> Optional[str]:
        """Get the name of the active video layout, if any"""
        pass

    # Video and camera commands

    @abstractmethod
    def set_main_video_source(self, connector_id: int):
        pass

    @abstractmethod
    def activate_speaker_track(self):
        pass

    @abstractmethod
    def deactivate_speaker_track(self):
        pass

    @abstractmethod
    def activate_speaker_track_background(self):
        pass

    @abstractmethod
    def list_camera_presets(self, camera_id: int) -> List[CameraPreset]:
        """
        List stored camera presets for one camera.

        Args:
            camera_id: Camera (input connector) the presets belong to

        Returns:
            Presets in device order
        """
        pass

    @abstractmethod
    def activate_camera_preset(self, preset_id: int):
        pass

    # UI extensions

    @abstractmethod
    def save_panel(self, panel_id: str, panel_xml: str):
        """Save or replace a UI extension panel"""
        pass

    @abstractmethod
    def set_widget_value(self, widget_id: str, value: str):
        pass
