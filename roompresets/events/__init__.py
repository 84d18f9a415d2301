from .router import EventRouter

__all__ = ['EventRouter']
