"""
Preset Applier

Moves the device into a preset's configuration. Every device write is
attempted once; failures are logged and never roll back earlier steps.
"""
import logging
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import List, Optional

from ..config.settings import CameraSettings, Preset
from ..device.base import DeviceGateway, GatewayError

logger = logging.getLogger(__name__)


class PresetApplier:
    """
    Applies output roles and camera behaviour for a preset.

    Output role writes are independent of one another and are issued in
    parallel; the camera sequence runs on the calling thread.
    """

    def __init__(self, gateway: DeviceGateway, camera_control: bool = True,
                 executor: Optional[ThreadPoolExecutor] = None):
        """
        Initialize the applier.

        Args:
            gateway: Device to write to
            camera_control: Apply camera blocks (rooms with speaker tracking)
            executor: Pool for output role writes (one is created if omitted)
        """
        self.gateway = gateway
        self.camera_control = camera_control
        self._executor = executor or ThreadPoolExecutor(max_workers=4,
                                                        thread_name_prefix="output-role")

    def apply_preset(self, preset: Preset):
        """Apply output roles, monitor grouping and camera settings"""
        logger.info(f"Display preset [{preset.name}] selected")
        pending = self._submit_output_roles(preset.output_roles)

        if preset.monitor_role is not None:
            self._write_monitors(preset.monitor_role)

        camera = preset.camera_settings
        if self.camera_control and camera is not None:
            self.apply_camera(camera)

        self._settle(pending)

    def apply_output_roles(self, preset: Preset):
        """Write the preset's output roles and wait for every write to settle"""
        self._settle(self._submit_output_roles(preset.output_roles))

    def _submit_output_roles(self, roles: List[str]) -> List[Future]:
        return [
            self._executor.submit(self._write_output_role, index + 1, role)
            for index, role in enumerate(roles)
        ]

    def _settle(self, pending: List[Future]):
        # Device errors are handled per write; anything else surfaces here
        wait(pending)
        for future in pending:
            future.result()

    def _write_output_role(self, connector_id: int, role: str):
        logger.info(f"Setting Video Output [{connector_id}] Role to: {role}")
        try:
            self.gateway.set_output_role(connector_id, role)
        except GatewayError as e:
            logger.error(f"Could not set Output [{connector_id}] to {role}: {e}")

    def _write_monitors(self, value: str):
        logger.info(f"Setting Video Monitors to: {value}")
        try:
            self.gateway.set_monitors(value)
        except GatewayError as e:
            logger.error(f"Could not set Video Monitors to {value}: {e}")

    def apply_camera(self, camera: CameraSettings):
        """
        Select the main camera and switch speaker tracking.

        Speaker tracking is turned off before a camera preset is recalled,
        otherwise tracking reframes straight away.
        """
        logger.info(f"Setting Main Video Source to: {camera.input_source}")

        if camera.speaker_track_background == 'Activate':
            logger.info("Setting SpeakerTrack BackgroundMode to: [Activate]")
            try:
                self.gateway.set_main_video_source(camera.input_source)
            except GatewayError as e:
                logger.error(f"Error Setting MainVideoSource: {e}")
                return
            try:
                self.gateway.activate_speaker_track()
            except GatewayError as e:
                logger.error(f"Error Activating SpeakerTrack: {e}")
            try:
                self.gateway.activate_speaker_track_background()
            except GatewayError as e:
                logger.error(f"Error Activating SpeakerTrack BackgroundMode: {e}")

        elif camera.speaker_track_background == 'Deactivate':
            logger.info("Setting SpeakerTrack BackgroundMode to: [Deactivate]")
            try:
                self.gateway.deactivate_speaker_track()
            except GatewayError as e:
                logger.error(f"Error Deactivating SpeakerTrack: {e}")
                return
            try:
                self.gateway.set_main_video_source(camera.input_source)
            except GatewayError as e:
                logger.error(f"Error Setting MainVideoSource: {e}")
            if camera.default_preset:
                self.activate_camera_preset(camera.default_preset)

    def activate_camera_preset(self, preset_id: int):
        logger.info(f"Activating Camera Preset [{preset_id}]")
        try:
            self.gateway.activate_camera_preset(preset_id)
        except GatewayError as e:
            logger.error(f"Could not activate Camera Preset [{preset_id}]: {e}")

    def shutdown(self):
        self._executor.shutdown(wait=True)
