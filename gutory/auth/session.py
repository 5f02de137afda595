"""
Gutory Session
Identity of the signed-in user, as handed over by the auth provider
"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from gutory.utils.errors import AuthenticationError
from gutory.utils.logger import get_logger

logger = get_logger(__name__)


class Session(BaseModel):
    """Signed-in user"""

    user_id: UUID
    access_token: Optional[str] = None
    email: Optional[str] = None


class SessionProvider:
    """Holds the current session; empty when nobody is signed in"""

    def __init__(self, session: Optional[Session] = None):
        self._session = session

    def current(self) -> Optional[Session]:
        return self._session

    def sign_in(self, session: Session) -> None:
        self._session = session
        logger.info("Session started")

    def sign_out(self) -> None:
        self._session = None
        logger.info("Session ended")


def require_session(provider: SessionProvider) -> Session:
    """
    Get the current session or fail

    Raises:
        AuthenticationError: If nobody is signed in
    """
    session = provider.current()
    if session is None:
        raise AuthenticationError()
    return session
