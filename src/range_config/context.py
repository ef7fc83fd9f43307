"""
Editing-session context using ContextVar so log lines carry the session id.
"""

from contextvars import ContextVar
from typing import Optional

current_session: ContextVar[Optional[str]] = ContextVar('current_session', default=None)


def set_current_session(session_id: str) -> None:
    """Set the current editing session in the context."""
    current_session.set(session_id)


def get_current_session() -> Optional[str]:
    """Get the current editing session from the context."""
    return current_session.get()


def clear_current_session() -> None:
    """Clear the current editing session from the context."""
    current_session.set(None)
