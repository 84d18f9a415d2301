# Core module
from .logging_config import setup_logging
from .session import Session

__all__ = ['setup_logging', 'Session']
