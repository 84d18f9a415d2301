"""
Feedback events

Plain event types for device feedback and the parser that pulls them out
of RoomOS JSON-RPC notification frames.
"""
import json
import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Union

logger = logging.getLogger(__name__)

WIDGET_ACTION_QUERY = ['Event', 'UserInterface', 'Extensions', 'Widget', 'Action']
AVAILABLE_LAYOUTS_QUERY = ['Status', 'Video', 'Layout', 'CurrentLayouts', 'AvailableLayouts']


@dataclass
class WidgetAction:
    """A UI extension widget was used"""
    widget_id: str
    type: str
    value: str = ""


@dataclass
class LayoutNotification:
    """An AvailableLayouts entry changed"""
    layout_name: Optional[str]
    ghost: bool = False


FeedbackEvent = Union[WidgetAction, LayoutNotification]


def _walk(data: Any, path: List[str]) -> Any:
    for key in path:
        if not isinstance(data, dict) or key not in data:
            return None
        data = data[key]
    return data


def _is_true(value: Any) -> bool:
    return value is True or str(value).lower() == 'true'


def parse_feedback(message: str) -> List[FeedbackEvent]:
    """
    Extract widget actions and layout notifications from a JSON-RPC frame.

    Args:
        message: Raw text frame received on the WebSocket

    Returns:
        Events in the frame; empty for replies and anything unrecognised
    """
    try:
        payload = json.loads(message)
    except ValueError:
        logger.warning(f"Ignoring unparseable feedback frame: {message[:200]!r}")
        return []

    if not isinstance(payload, dict):
        return []
    if 'error' in payload:
        logger.warning(f"Feedback request {payload.get('id')} failed: {payload['error']}")
        return []
    if payload.get('method') != 'xFeedback/Event':
        return []

    params = payload.get('params') or {}
    events: List[FeedbackEvent] = []

    action = _walk(params, WIDGET_ACTION_QUERY)
    if isinstance(action, dict) and 'WidgetId' in action:
        events.append(WidgetAction(
            widget_id=str(action['WidgetId']),
            type=str(action.get('Type', '')),
            value=str(action.get('Value', '')),
        ))

    layouts = _walk(params, AVAILABLE_LAYOUTS_QUERY)
    if isinstance(layouts, dict):
        layouts = [layouts]
    if isinstance(layouts, list):
        for layout in layouts:
            if isinstance(layout, dict):
                events.append(LayoutNotification(
                    layout_name=layout.get('LayoutName'),
                    ghost=_is_true(layout.get('ghost', False)),
                ))

    return events
