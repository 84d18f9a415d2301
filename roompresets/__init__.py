"""RoomPresets - room preset controller for Cisco RoomOS endpoints"""

__version__ = "1.0.0"
