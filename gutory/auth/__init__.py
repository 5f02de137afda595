"""
Gutory Authentication Module
"""

from .session import Session, SessionProvider, require_session

__all__ = ["Session", "SessionProvider", "require_session"]
