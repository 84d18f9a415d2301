from .controller import (
    CAMERA_PRESETS_WIDGET,
    PANEL_ID,
    PRESET_WIDGET_PREFIX,
    UIController,
)
from .panel import Page, Panel, Row, Value, Widget

__all__ = [
    'CAMERA_PRESETS_WIDGET',
    'PANEL_ID',
    'PRESET_WIDGET_PREFIX',
    'UIController',
    'Page',
    'Panel',
    'Row',
    'Value',
    'Widget',
]
