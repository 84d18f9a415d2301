"""
State Matcher

Works out which configured preset the device is currently in by reading
the live configuration and comparing it with each preset's declared
``displays`` and ``camera`` blocks.

Matching is exact and all-or-nothing: same keys, same values, list order
significant, key order not. A preset that declares only ``outputRoles``
therefore never matches a snapshot that also carries ``monitorRole``, and
the live ``defaultSource`` is always 1. Both are known limitations kept
on purpose so the highlighted preset means the same thing it always has.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..config.settings import Preset
from ..core.session import Session
from ..device.base import DeviceGateway, GatewayError
from ..ui.controller import UIController

logger = logging.getLogger(__name__)

# Not read from the device; the room's default camera is assumed to be input 1
DEFAULT_CAMERA_SOURCE = 1


def canonicalize(value: Any) -> Any:
    """Reduce a declared or live structure to plain dicts, lists and scalars"""
    if isinstance(value, dict):
        return {str(k): canonicalize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [canonicalize(v) for v in value]
    return value


@dataclass
class ConfigurationSnapshot:
    """Live device configuration, read for a single matching pass"""
    displays: Dict[str, Any]
    camera: Optional[Dict[str, Any]] = None

    def matches(self, preset: Preset) -> bool:
        if canonicalize(preset.displays) != canonicalize(self.displays):
            return False
        if preset.camera is not None and self.camera is not None:
            if canonicalize(preset.camera) != canonicalize(self.camera):
                return False
        return True


class StateMatcher:
    """Finds the active preset from live device configuration"""

    def __init__(self, gateway: DeviceGateway, presets: List[Preset],
                 ui: UIController, session: Session, camera_control: bool = True):
        self.gateway = gateway
        self.presets = presets
        self.ui = ui
        self.session = session
        self.camera_control = camera_control

    def read_snapshot(self) -> ConfigurationSnapshot:
        """
        Read the live configuration.

        Raises:
            GatewayError: if any read fails
        """
        displays = {
            'outputRoles': self.gateway.get_output_roles(),
            'monitorRole': self.gateway.get_monitors(),
        }
        camera = None
        if self.camera_control:
            camera = {
                'defaultSource': DEFAULT_CAMERA_SOURCE,
                'speakerTrack': self.gateway.get_speaker_track_mode(),
            }
        return ConfigurationSnapshot(displays=displays, camera=camera)

    def find_match(self, snapshot: ConfigurationSnapshot) -> Optional[int]:
        """Index of the first preset matching the snapshot, or None"""
        for i, preset in enumerate(self.presets):
            if snapshot.matches(preset):
                return i
        return None

    def identify_state(self) -> Optional[int]:
        """
        Identify the active preset and reflect it in the UI and session.

        Returns:
            Index of the matching preset, or None
        """
        logger.info("Syncing UI with device state")
        try:
            snapshot = self.read_snapshot()
        except GatewayError as e:
            logger.error(f"Could not read device configuration: {e}")
            return None

        index = self.find_match(snapshot)
        if index is None:
            logger.info("No configured preset matches the device")
            self.session.clear()
        else:
            logger.info(f"Preset '{self.presets[index].name}' is configured, updating UI")
            self.session.activate(index)

        self.ui.set_widget_active(index)
        return index
