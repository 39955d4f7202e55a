from .session import SessionState

__all__ = ["SessionState"]
