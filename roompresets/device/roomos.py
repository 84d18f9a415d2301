"""
RoomOS Device Gateway

Implements the DeviceGateway interface against a Cisco RoomOS endpoint
using its HTTP XML API:
- POST /putxml (commands and configuration writes)
- GET  /getxml?location=... (configuration and status reads)
"""
import logging
import xml.etree.ElementTree as ET
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

import requests
import urllib3

from ..config.settings import DeviceConfig
from .base import CameraPreset, DeviceGateway, GatewayError

logger = logging.getLogger(__name__)

# A path segment is a tag name, or (tag, item) for indexed nodes such as Connector[2]
PathSegment = Union[str, Tuple[str, int]]


def build_xml(path: Sequence[PathSegment], params: Optional[Dict[str, Any]] = None,
              text: Optional[str] = None) -> str:
    """
    Build a putxml document.

    Args:
        path: Element path from the document root, e.g. ["Command", "Video", ...]
        params: Child elements added under the last path element
        text: Text of the last path element (configuration writes)

    Returns:
        Serialized XML document
    """
    root = None
    parent = None
    for segment in path:
        if isinstance(segment, tuple):
            tag, item = segment
            attrs = {'item': str(item)}
        else:
            tag, attrs = segment, {}
        element = ET.Element(tag, attrs) if parent is None else ET.SubElement(parent, tag, attrs)
        if root is None:
            root = element
        parent = element

    if text is not None:
        parent.text = text
    for key, value in (params or {}).items():
        ET.SubElement(parent, key).text = str(value)

    return ET.tostring(root, encoding='unicode')


def parse_response(content: bytes, target: str) -> ET.Element:
    """
    Parse an XML API response and surface device-reported errors.

    Raises:
        GatewayError: if the body is not XML or reports an error
    """
    try:
        root = ET.fromstring(content)
    except ET.ParseError as e:
        raise GatewayError(f"{target}: malformed response ({e})") from e

    for element in root.iter():
        if element.get('status') == 'Error' or element.tag == 'Error':
            reason = element.findtext('.//Reason') or (element.text or '').strip() or 'unknown error'
            raise GatewayError(f"{target}: {reason}")

    return root


class RoomOSGateway(DeviceGateway):
    """
    RoomOS endpoint reached over HTTP(S) with basic auth.

    Endpoints commonly ship self-signed certificates, so verification
    follows DeviceConfig.verify_ssl.
    """

    def __init__(self, config: DeviceConfig):
        """
        Initialize RoomOS gateway.

        Args:
            config: Connection settings for the endpoint
        """
        self.base_url = config.get_base_url()
        self.auth = (config.username, config.password)
        self.verify = config.verify_ssl
        self.timeout = config.timeout

        if not self.verify:
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    def _check_status(self, response: requests.Response, target: str) -> ET.Element:
        if response.status_code != 200:
            raise GatewayError(f"{target}: HTTP {response.status_code}")
        return parse_response(response.content, target)

    def _post(self, xml: str, target: str) -> ET.Element:
        """
        Send a putxml document.

        Args:
            xml: Document built with build_xml
            target: Human readable name of what is written, used in errors
        """
        logger.debug(f"putxml {target}")
        try:
            response = requests.post(
                f"{self.base_url}/putxml",
                data=xml.encode('utf-8'),
                headers={'Content-Type': 'text/xml'},
                auth=self.auth,
                verify=self.verify,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise GatewayError(f"{target}: {e}") from e
        return self._check_status(response, target)

    def _get(self, location: str) -> ET.Element:
        try:
            response = requests.get(
                f"{self.base_url}/getxml",
                params={'location': location},
                auth=self.auth,
                verify=self.verify,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise GatewayError(f"{location}: {e}") from e
        return self._check_status(response, location)

    def _get_value(self, location: str, relative: str) -> str:
        value = self._get(location).findtext(relative)
        if value is None:
            raise GatewayError(f"{location}: value missing from response")
        return value.strip()

    def _command(self, path: Sequence[str], params: Optional[Dict[str, Any]] = None) -> ET.Element:
        full_path = ['Command', *path]
        return self._post(build_xml(full_path, params), ' '.join(full_path))

    # Configuration

    def get_output_roles(self) -> List[str]:
        root = self._get('/Configuration/Video/Output')
        connectors = sorted(root.findall('./Video/Output/Connector'),
                            key=lambda c: int(c.get('item', 0)))
        return [(c.findtext('MonitorRole') or '').strip() for c in connectors]

    def set_output_role(self, connector_id: int, role: str):
        xml = build_xml(
            ['Configuration', 'Video', 'Output', ('Connector', connector_id), 'MonitorRole'],
            text=role,
        )
        self._post(xml, f"Video Output Connector {connector_id} MonitorRole")

    def get_monitors(self) -> str:
        return self._get_value('/Configuration/Video/Monitors', './Video/Monitors')

    def set_monitors(self, value: str):
        self._post(build_xml(['Configuration', 'Video', 'Monitors'], text=value), "Video Monitors")

    def get_speaker_track_mode(self) -> str:
        return self._get_value('/Configuration/Cameras/SpeakerTrack/Mode', './Cameras/SpeakerTrack/Mode')

    # Status

    def get_active_layout(self) -> Optional[str]:
        root = self._get('/Status/Video/Layout/CurrentLayouts/ActiveLayout')
        value = root.findtext('./Video/Layout/CurrentLayouts/ActiveLayout')
        return value.strip() if value and value.strip() else None

    # Video and camera commands

    def set_main_video_source(self, connector_id: int):
        self._command(['Video', 'Input', 'SetMainVideoSource'], {'ConnectorId': connector_id})

    def activate_speaker_track(self):
        self._command(['Cameras', 'SpeakerTrack', 'Activate'])

    def deactivate_speaker_track(self):
        self._command(['Cameras', 'SpeakerTrack', 'Deactivate'])

    def activate_speaker_track_background(self):
        self._command(['Cameras', 'SpeakerTrack', 'BackgroundMode', 'Activate'])

    def list_camera_presets(self, camera_id: int) -> List[CameraPreset]:
        root = self._command(['Camera', 'Preset', 'List'], {'CameraId': camera_id})
        presets = []
        for element in root.iter('Preset'):
            preset_id = element.findtext('PresetId') or element.get('item')
            if preset_id is None:
                continue
            presets.append(CameraPreset(
                id=int(preset_id),
                name=(element.findtext('Name') or '').strip(),
            ))
        return presets

    def activate_camera_preset(self, preset_id: int):
        self._command(['Camera', 'Preset', 'Activate'], {'PresetId': preset_id})

    # UI extensions

    def save_panel(self, panel_id: str, panel_xml: str):
        # The panel document travels escaped inside <body>
        self._command(['UserInterface', 'Extensions', 'Panel', 'Save'],
                      {'PanelId': panel_id, 'body': panel_xml})

    def set_widget_value(self, widget_id: str, value: str):
        self._command(['UserInterface', 'Extensions', 'Widget', 'SetValue'],
                      {'WidgetId': widget_id, 'Value': value})
