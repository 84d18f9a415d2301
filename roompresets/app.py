"""
RoomPresets application root

Owns the session and wires the gateway, matcher, applier, UI controller
and event router together. Startup is delayed so the device connection
can settle before the panel is pushed.
"""
import logging
from typing import Optional

from PyQt6.QtCore import QObject, QTimer

from .config.settings import Settings
from .core.session import Session
from .device.base import DeviceGateway, GatewayError
from .device.feedback import FeedbackClient
from .events.router import EventRouter
from .presets.applier import PresetApplier
from .presets.matcher import StateMatcher
from .ui.controller import UIController

logger = logging.getLogger(__name__)


class RoomPresetsApp(QObject):
    """Room presets controller for one endpoint"""

    def __init__(self, settings: Settings, gateway: DeviceGateway,
                 feedback: Optional[FeedbackClient] = None, parent: Optional[QObject] = None):
        super().__init__(parent)
        self.settings = settings
        self.gateway = gateway
        self.feedback = feedback
        self.session = Session()

        self.ui = UIController(gateway, settings)
        self.applier = PresetApplier(gateway, camera_control=settings.camera_control)
        self.matcher = StateMatcher(gateway, settings.presets, self.ui, self.session,
                                    camera_control=settings.camera_control)
        self.router = EventRouter(settings.presets, self.session, self.applier, self.ui,
                                  camera_control=settings.camera_control)

    def schedule_start(self):
        """Start once the configured startup delay has passed"""
        logger.info(f"Starting in {self.settings.startup_delay_ms} ms")
        QTimer.singleShot(self.settings.startup_delay_ms, self.start)

    def start(self):
        self.ui.render_panel()

        if self.feedback is not None:
            self.feedback.widget_action.connect(self.router.handle_widget_action)
            self.feedback.layout_changed.connect(self.router.handle_layout_change)
            self.feedback.start()

        try:
            self.session.set_layout(self.gateway.get_active_layout())
        except GatewayError as e:
            logger.warning(f"Could not read active layout: {e}")

        index = self.matcher.identify_state()
        if index is not None:
            self.ui.render_panel(index)
            self.ui.set_widget_active(index)

    def shutdown(self):
        logger.info("Shutting down")
        if self.feedback is not None:
            self.feedback.stop()
        self.applier.shutdown()
