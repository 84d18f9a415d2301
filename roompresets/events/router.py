"""
Event Router

Dispatches device feedback (widget actions and layout changes) to the
applier and UI controller. Unrecognised events are ignored.
"""
import logging
from typing import List

from ..config.settings import Preset
from ..core.session import Session
from ..device.events import LayoutNotification, WidgetAction
from ..presets.applier import PresetApplier
from ..ui.controller import CAMERA_PRESETS_WIDGET, PRESET_WIDGET_PREFIX, UIController

logger = logging.getLogger(__name__)


class EventRouter:
    """Routes feedback events; owns no state beyond the shared session"""

    def __init__(self, presets: List[Preset], session: Session, applier: PresetApplier,
                 ui: UIController, camera_control: bool = True):
        self.presets = presets
        self.session = session
        self.applier = applier
        self.ui = ui
        self.camera_control = camera_control

    def handle_widget_action(self, event: WidgetAction):
        if event.widget_id.startswith(PRESET_WIDGET_PREFIX):
            if event.type != 'clicked':
                return
            self._select_preset(event.widget_id)
        elif event.widget_id == CAMERA_PRESETS_WIDGET and self.camera_control:
            if event.type != 'pressed':
                return
            logger.info(f"Camera Presets Pressed, id [{event.value}]")
            try:
                preset_id = int(event.value)
            except ValueError:
                logger.warning(f"Ignoring camera preset value {event.value!r}")
                return
            self.applier.activate_camera_preset(preset_id)

    def _select_preset(self, widget_id: str):
        suffix = widget_id[-1:]
        if not suffix.isdigit():
            logger.debug(f"Ignoring widget {widget_id}")
            return
        index = int(suffix)
        if index >= len(self.presets):
            logger.warning(f"Widget {widget_id} has no matching preset")
            return

        self.session.activate(index)
        self.ui.set_widget_active(index)
        self.applier.apply_preset(self.presets[index])
        self.ui.render_panel(index)
        # Saving the panel resets widget values
        self.ui.set_widget_active(index)

    def handle_layout_change(self, event: LayoutNotification):
        if event.ghost or not event.layout_name:
            return
        if not self.session.observe_layout(event.layout_name):
            return

        index = self.session.active_index
        if index is None:
            return
        logger.info(f"Layout {event.layout_name} reported again, "
                    f"re-applying output roles of '{self.presets[index].name}'")
        self.applier.apply_output_roles(self.presets[index])
