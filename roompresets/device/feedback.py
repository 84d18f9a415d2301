"""
RoomOS Feedback Client

Subscribes to device events over the endpoint's JSON-RPC WebSocket (/ws)
and re-emits them as Qt signals on the main thread, so each event is
handled to completion before the next one.
"""
import base64
import json
import logging
from typing import Optional

from PyQt6.QtCore import QObject, QTimer, QUrl, pyqtSignal
from PyQt6.QtNetwork import QAbstractSocket, QNetworkRequest
from PyQt6.QtWebSockets import QWebSocket

from ..config.settings import DeviceConfig
from .events import AVAILABLE_LAYOUTS_QUERY, WIDGET_ACTION_QUERY, WidgetAction, parse_feedback

logger = logging.getLogger(__name__)


class FeedbackClient(QObject):
    """
    JSON-RPC feedback subscription over QWebSocket.

    Reconnects with exponential backoff and resubscribes after every
    reconnect.
    """

    widget_action = pyqtSignal(object)
    layout_changed = pyqtSignal(object)

    QUERIES = [WIDGET_ACTION_QUERY, AVAILABLE_LAYOUTS_QUERY]

    def __init__(self, config: DeviceConfig, parent: Optional[QObject] = None):
        super().__init__(parent)
        self.url = config.get_websocket_url()
        self._credentials = base64.b64encode(
            f"{config.username}:{config.password}".encode('utf-8'))
        self._verify_ssl = config.verify_ssl
        self._running = False
        self._reconnect_pending = False
        self._request_id = 0
        # Exponential backoff for failed connections
        self._connection_failures = 0
        self._max_backoff = 30

        self._socket = QWebSocket()
        self._socket.connected.connect(self._on_connected)
        self._socket.stateChanged.connect(self._on_state_changed)
        self._socket.textMessageReceived.connect(self._on_text_message)
        self._socket.sslErrors.connect(self._on_ssl_errors)

    def start(self):
        """Open the WebSocket and subscribe once connected"""
        self._running = True
        self._open()

    def stop(self):
        self._running = False
        self._socket.close()

    def _open(self):
        self._reconnect_pending = False
        if not self._running:
            return
        logger.info(f"Connecting feedback WebSocket to {self.url}")
        request = QNetworkRequest(QUrl(self.url))
        request.setRawHeader(b"Authorization", b"Basic " + self._credentials)
        self._socket.open(request)

    def _calculate_backoff_delay(self) -> int:
        """Backoff in seconds: 2, 4, 8, 16, 30, 30..."""
        return min(2 ** self._connection_failures, self._max_backoff)

    def _on_connected(self):
        self._connection_failures = 0
        logger.info("Feedback WebSocket connected")
        for query in self.QUERIES:
            self._request_id += 1
            self._socket.sendTextMessage(json.dumps({
                'jsonrpc': '2.0',
                'id': self._request_id,
                'method': 'xFeedback/Subscribe',
                'params': {'Query': query, 'NotifyCurrentValue': False},
            }))

    def _on_state_changed(self, state):
        # Covers both a dropped connection and a failed connection attempt
        if state != QAbstractSocket.SocketState.UnconnectedState:
            return
        if not self._running or self._reconnect_pending:
            return
        self._connection_failures += 1
        delay = self._calculate_backoff_delay()
        logger.warning(f"Feedback WebSocket closed ({self._socket.errorString()}), "
                       f"reconnecting in {delay}s")
        self._reconnect_pending = True
        QTimer.singleShot(delay * 1000, self._open)

    def _on_ssl_errors(self, errors):
        if self._verify_ssl:
            logger.error(f"TLS errors on feedback WebSocket: {[e.errorString() for e in errors]}")
            return
        self._socket.ignoreSslErrors()

    def _on_text_message(self, message: str):
        for event in parse_feedback(message):
            if isinstance(event, WidgetAction):
                self.widget_action.emit(event)
            else:
                self.layout_changed.emit(event)
