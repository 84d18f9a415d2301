# Device module
from .base import CameraPreset, DeviceGateway, GatewayError
from .events import LayoutNotification, WidgetAction, parse_feedback
from .roomos import RoomOSGateway

__all__ = [
    'CameraPreset',
    'DeviceGateway',
    'GatewayError',
    'LayoutNotification',
    'WidgetAction',
    'parse_feedback',
    'RoomOSGateway',
]
