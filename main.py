#!/usr/bin/env python3
"""
RoomPresets - Room preset controller for Cisco RoomOS endpoints

Switches an endpoint between named room presets (monitor output roles
plus camera and speaker tracking behaviour) from a touch panel button,
and keeps the panel highlight in sync with the device.

Usage: main.py [path/to/settings.yaml]
"""
import sys
import logging
from pathlib import Path

# Set up logging first
from roompresets.core.logging_config import setup_logging
setup_logging()
logger = logging.getLogger(__name__)

from PyQt6.QtCore import QCoreApplication

from roompresets.app import RoomPresetsApp
from roompresets.config.settings import Settings
from roompresets.device.feedback import FeedbackClient
from roompresets.device.roomos import RoomOSGateway


def main():
    """Main entry point"""
    try:
        logger.info("Starting RoomPresets")

        app = QCoreApplication(sys.argv)
        app.setApplicationName("RoomPresets")
        app.setApplicationVersion("1.0.0")

        config_path = Path(sys.argv[1]) if len(sys.argv) > 1 else None
        settings = Settings.load(config_path)
        setup_logging(log_dir=settings.logs.get_log_dir(),
                      log_level=settings.logs.level,
                      console_level=settings.logs.console_level,
                      device_log=settings.logs.device_log)
        if not settings.config_path.exists():
            settings.save()
            logger.warning(f"Wrote starter configuration to {settings.config_path}")

        if not settings.device.host:
            logger.error(f"No device host configured in {settings.config_path}")
            sys.exit(1)

        gateway = RoomOSGateway(settings.device)
        feedback = FeedbackClient(settings.device)
        presets_app = RoomPresetsApp(settings, gateway, feedback)
        app.aboutToQuit.connect(presets_app.shutdown)
        presets_app.schedule_start()

        sys.exit(app.exec())
    except Exception:
        logger.exception("Fatal error starting application")
        raise


if __name__ == "__main__":
    main()
