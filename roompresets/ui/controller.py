"""
UI Controller

Builds the room presets panel, saves it to the device and keeps the
preset buttons' active/inactive highlight in step with the session.
"""
import logging
from typing import List, Optional

from ..config.settings import Settings
from ..device.base import DeviceGateway, GatewayError
from .panel import Page, Panel, Row, Value, Widget

logger = logging.getLogger(__name__)

PANEL_ID = 'room-presets'
PRESET_WIDGET_PREFIX = 'room-preset'
GUIDE_WIDGET_PREFIX = 'room-guide'
CAMERA_PRESETS_WIDGET = 'room-camera-presets'

WIDGET_ACTIVE = 'active'
WIDGET_INACTIVE = 'inactive'


class UIController:
    """Renders the panel and reflects the active preset on the device"""

    def __init__(self, gateway: DeviceGateway, settings: Settings):
        self.gateway = gateway
        self.settings = settings

    def build_panel(self, active_index: Optional[int] = None) -> Panel:
        """
        Build the panel description.

        Args:
            active_index: Preset whose camera presets may be offered, if any

        Returns:
            Panel ready for serialization
        """
        rows: List[Row] = []

        if self.settings.foot_note:
            rows.append(Row([
                Widget('room-banner-presets', 'Text', 'Preset', 'size=2;fontSize=normal;align=center'),
                Widget('room-banner-displays', 'Text', 'Displays', 'size=1;fontSize=normal;align=center'),
            ]))

        for i, preset in enumerate(self.settings.presets):
            widgets = [Widget(f'{PRESET_WIDGET_PREFIX}{i}', 'Button', preset.name, 'size=2')]
            if preset.guide:
                widgets.append(Widget(f'{GUIDE_WIDGET_PREFIX}{i}', 'Text', preset.guide,
                                      'size=1;fontSize=normal;align=center'))
            rows.append(Row(widgets))

        if self.settings.foot_note:
            rows.append(Row([
                Widget('room-footNote', 'Text', self.settings.foot_note,
                       'size=4;fontSize=small;align=center'),
            ]))

        camera_row = self._build_camera_presets_row(active_index)
        if camera_row is not None:
            rows.append(camera_row)

        name = self.settings.button_name
        return Panel(name=name, page=Page(name=name, rows=rows))

    def _build_camera_presets_row(self, active_index: Optional[int]) -> Optional[Row]:
        if not self.settings.camera_control or active_index is None:
            return None
        preset = self.settings.get_preset(active_index)
        camera = preset.camera_settings if preset else None
        if camera is None or not camera.show_presets:
            return None

        try:
            camera_presets = self.gateway.list_camera_presets(camera.input_source)
        except GatewayError as e:
            logger.error(f"Could not list camera presets for camera {camera.input_source}: {e}")
            return None
        if not camera_presets:
            return None

        values = [Value(key=str(p.id), name=p.name) for p in camera_presets]
        return Row([Widget(CAMERA_PRESETS_WIDGET, 'GroupButton', options='size=3', values=values)])

    def render_panel(self, active_index: Optional[int] = None):
        """Build the panel and replace the device's copy of it"""
        logger.info(f"Rendering panel, active preset = {active_index}")
        panel = self.build_panel(active_index)
        try:
            self.gateway.save_panel(PANEL_ID, panel.to_xml())
            logger.info(f"Panel '{PANEL_ID}' saved")
        except GatewayError as e:
            logger.error(f"Could not save panel '{PANEL_ID}': {e}")

    def set_widget_active(self, active_index: Optional[int]):
        """Mark one preset button active and every other one inactive"""
        for i in range(len(self.settings.presets)):
            widget_id = f'{PRESET_WIDGET_PREFIX}{i}'
            value = WIDGET_ACTIVE if i == active_index else WIDGET_INACTIVE
            try:
                self.gateway.set_widget_value(widget_id, value)
            except GatewayError as e:
                logger.error(f"Could not set widget {widget_id} to {value}: {e}")
