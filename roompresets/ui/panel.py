"""
Panel description

Typed tree for a RoomOS UI extension panel, serialized to the
extension XML only when it is handed to the device.
"""
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import List


@dataclass
class Value:
    """One entry of a GroupButton value space"""
    key: str
    name: str


@dataclass
class Widget:
    widget_id: str
    type: str
    name: str = ""
    options: str = ""
    values: List[Value] = field(default_factory=list)

    def to_element(self) -> ET.Element:
        element = ET.Element('Widget')
        ET.SubElement(element, 'WidgetId').text = self.widget_id
        if self.name:
            ET.SubElement(element, 'Name').text = self.name
        ET.SubElement(element, 'Type').text = self.type
        if self.options:
            ET.SubElement(element, 'Options').text = self.options
        if self.values:
            value_space = ET.SubElement(element, 'ValueSpace')
            for value in self.values:
                value_element = ET.SubElement(value_space, 'Value')
                ET.SubElement(value_element, 'Key').text = value.key
                ET.SubElement(value_element, 'Name').text = value.name
        return element


@dataclass
class Row:
    widgets: List[Widget] = field(default_factory=list)

    def to_element(self) -> ET.Element:
        element = ET.Element('Row')
        for widget in self.widgets:
            element.append(widget.to_element())
        return element


@dataclass
class Page:
    name: str
    rows: List[Row] = field(default_factory=list)
    options: str = "hideRowNames=1"

    def to_element(self) -> ET.Element:
        element = ET.Element('Page')
        ET.SubElement(element, 'Name').text = self.name
        for row in self.rows:
            element.append(row.to_element())
        if self.options:
            ET.SubElement(element, 'Options').text = self.options
        return element


@dataclass
class Panel:
    """A statusbar panel with a single page"""
    name: str
    page: Page
    type: str = "Statusbar"
    location: str = "HomeScreenAndCallControls"
    icon: str = "Tv"
    activity_type: str = "Custom"

    def to_xml(self) -> str:
        """Serialize as an <Extensions> document for Panel Save"""
        extensions = ET.Element('Extensions')
        panel = ET.SubElement(extensions, 'Panel')
        ET.SubElement(panel, 'Type').text = self.type
        ET.SubElement(panel, 'Location').text = self.location
        ET.SubElement(panel, 'Icon').text = self.icon
        ET.SubElement(panel, 'Name').text = self.name
        ET.SubElement(panel, 'ActivityType').text = self.activity_type
        panel.append(self.page.to_element())
        return ET.tostring(extensions, encoding='unicode')

    def find_widget(self, widget_id: str):
        """Look up a widget by id, or None"""
        for row in self.page.rows:
            for widget in row.widgets:
                if widget.widget_id == widget_id:
                    return widget
        return None
