"""
Cookie-identified session storage.

Sessions are looked up by an id carried in a cookie. The in-memory storage
keeps session data in the process, which is enough for a single worker or
for tests; swap in another storage with the same interface for anything
shared.
"""

import logging
import secrets
from typing import Any, Dict, Optional

from webutils.http.cookie import get_cookie_value, serialize_cookie

logger = logging.getLogger(__name__)


class Session:
    """
    Mutable key/value data belonging to one session id.
    """

    def __init__(self, id: str, data: Optional[Dict[str, Any]] = None):
        self.id = id
        self._data: Dict[str, Any] = dict(data or {})

    @property
    def data(self) -> Dict[str, Any]:
        return dict(self._data)

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def has(self, key: str) -> bool:
        return key in self._data

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value

    def unset(self, key: str) -> None:
        self._data.pop(key, None)


class InMemorySessionStorage:
    """
    Session storage backed by a process-local dict.
    """

    def __init__(
        self,
        cookie_name: str = "__session",
        path: str = "/",
        same_site: str = "Lax",
        secure: bool = False,
        max_age: Optional[int] = None,
    ):
        """
        Initialize InMemorySessionStorage.

        Args:
            cookie_name: Name of the cookie holding the session id
            path: Cookie path
            same_site: Cookie SameSite attribute
            secure: Mark the cookie Secure
            max_age: Cookie lifetime in seconds (None for a browser session)
        """
        self.cookie_name = cookie_name
        self._path = path
        self._same_site = same_site
        self._secure = secure
        self._max_age = max_age
        self._sessions: Dict[str, Dict[str, Any]] = {}

    @staticmethod
    def generate_id(length: int = 16) -> str:
        """
        Generate a random session id.

        Args:
            length: Number of random bytes (output is hex, so 2x length)

        Returns:
            Hex-encoded random string
        """
        return secrets.token_hex(length)

    async def get_session(self, cookie_header: Optional[str] = None) -> Session:
        """
        Load the session referenced by a Cookie header.

        Args:
            cookie_header: Raw Cookie request header

        Returns:
            The stored session, or a new empty one when the header carries
            no known session id
        """
        session_id = get_cookie_value(cookie_header, self.cookie_name)
        if session_id and session_id in self._sessions:
            return Session(session_id, self._sessions[session_id])
        return Session(self.generate_id())

    async def commit_session(self, session: Session) -> str:
        """
        Persist a session.

        Args:
            session: Session to store

        Returns:
            Set-Cookie header value carrying the session id
        """
        is_new = session.id not in self._sessions
        self._sessions[session.id] = session.data
        if is_new:
            logger.info(f"Created session {session.id[:8]}")

        return serialize_cookie(
            self.cookie_name,
            session.id,
            path=self._path,
            same_site=self._same_site,
            secure=self._secure,
            http_only=True,
            max_age=self._max_age,
        )

    async def destroy_session(self, session: Session) -> str:
        """
        Remove a session.

        Args:
            session: Session to remove

        Returns:
            Set-Cookie header value that expires the session cookie
        """
        if self._sessions.pop(session.id, None) is not None:
            logger.info(f"Destroyed session {session.id[:8]}")

        return serialize_cookie(
            self.cookie_name,
            "",
            path=self._path,
            same_site=self._same_site,
            secure=self._secure,
            http_only=True,
            max_age=0,
        )
