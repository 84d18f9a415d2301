# Presets module
from .applier import PresetApplier
from .matcher import ConfigurationSnapshot, StateMatcher, canonicalize

__all__ = ['PresetApplier', 'ConfigurationSnapshot', 'StateMatcher', 'canonicalize']
