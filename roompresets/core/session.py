"""
Session state

Process-local state shared by the event router, the state matcher and the
application root. Nothing here survives a restart.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class Session:
    """Active preset and last known video layout for this process"""
    active_index: Optional[int] = None
    current_layout: Optional[str] = None

    def activate(self, index: int):
        """Mark the preset at index as active"""
        self.active_index = index

    def clear(self):
        """Forget the active preset"""
        self.active_index = None

    def set_layout(self, layout_name: Optional[str]):
        """Remember the layout read from the device at startup"""
        self.current_layout = layout_name or None

    def observe_layout(self, layout_name: str) -> bool:
        """
        Record a layout notification.

        Args:
            layout_name: Layout name reported by the device

        Returns:
            True if the name matches the layout remembered before this call
        """
        matched = self.current_layout is not None and layout_name == self.current_layout
        self.current_layout = layout_name
        return matched
