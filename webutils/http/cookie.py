"""
Cookie helpers.

Builds Set-Cookie header values, reads single values out of a Cookie
request header, and provides LanguageCookie, a signed JSON cookie used to
remember the user's language between requests.

Example:
    from webutils.http import LanguageCookie

    cookie = LanguageCookie("lng", secrets=["s3cret"])

    response.headers["Set-Cookie"] = await cookie.serialize("de")
    language = await cookie.parse(request.headers.get("Cookie"))
"""

import base64
import hashlib
import hmac
import json
import logging
from datetime import datetime, timezone
from typing import Any, Optional, Sequence
from urllib.parse import quote, unquote

from webutils.utils.exceptions import CookieDecodeError

logger = logging.getLogger(__name__)


def serialize_cookie(
    name: str,
    value: str,
    expires: Optional[datetime] = None,
    max_age: Optional[int] = None,
    path: Optional[str] = None,
    same_site: Optional[str] = None,
    secure: bool = False,
    http_only: bool = False,
    domain: Optional[str] = None,
) -> str:
    """
    Build a Set-Cookie header value.

    Args:
        name: Cookie name
        value: Cookie value (percent-encoded in the output)
        expires: Absolute expiry; naive datetimes are taken as UTC
        max_age: Lifetime in seconds
        path: Cookie path
        same_site: "Strict", "Lax" or "None"
        secure: Add the Secure flag
        http_only: Add the HttpOnly flag
        domain: Cookie domain

    Returns:
        Header value, e.g. "lng=de; Path=/; SameSite=Lax"
    """
    cookie = f"{quote(name, safe='')}={quote(value, safe='')}"

    if expires is not None:
        if expires.tzinfo is None:
            expires = expires.replace(tzinfo=timezone.utc)
        expires_utc = expires.astimezone(timezone.utc)
        cookie += f"; Expires={expires_utc.strftime('%a, %d %b %Y %H:%M:%S GMT')}"

    if max_age is not None:
        cookie += f"; Max-Age={max_age}"

    if path:
        cookie += f"; Path={path}"

    if same_site:
        cookie += f"; SameSite={same_site}"

    if secure:
        cookie += "; Secure"

    if http_only:
        cookie += "; HttpOnly"

    if domain:
        cookie += f"; Domain={domain}"

    return cookie


def get_cookie_value(cookie_header: Optional[str], name: str) -> Optional[str]:
    """
    Get a cookie value by name from a Cookie request header.

    Args:
        cookie_header: Raw Cookie header, e.g. "a=1; lng=de"
        name: Name of the cookie to get

    Returns:
        The decoded value, or None if the cookie is missing or empty
    """
    if not cookie_header:
        return None

    for pair in cookie_header.split(";"):
        key, sep, value = pair.strip().partition("=")
        if not sep or unquote(key.strip()) != name:
            continue
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] == '"':
            value = value[1:-1]
        return unquote(value) if value else None

    return None


def _b64encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def _b64decode(data: str) -> bytes:
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


class LanguageCookie:
    """
    Cookie holding a JSON value, optionally HMAC signed.

    The first secret signs new cookies; every secret is accepted when
    parsing so secrets can be rotated.
    """

    def __init__(
        self,
        name: str = "lng",
        secrets: Sequence[str] = (),
        path: str = "/",
        same_site: str = "Lax",
        secure: bool = False,
        http_only: bool = True,
        max_age: Optional[int] = None,
    ):
        self.name = name
        self._secrets = tuple(secrets)
        self._path = path
        self._same_site = same_site
        self._secure = secure
        self._http_only = http_only
        self._max_age = max_age

    @property
    def is_signed(self) -> bool:
        return bool(self._secrets)

    async def parse(self, cookie_header: Optional[str]) -> Any:
        """
        Read this cookie's value from a Cookie request header.

        Args:
            cookie_header: Raw Cookie request header

        Returns:
            The decoded JSON value, or None if the cookie is absent or its
            signature does not match

        Raises:
            CookieDecodeError: If the payload is not valid base64 JSON
        """
        raw = get_cookie_value(cookie_header, self.name)
        if raw is None:
            return None

        payload = raw
        if self._secrets:
            payload = self._unsign(raw)
            if payload is None:
                logger.debug(f"Rejected cookie '{self.name}' with a bad signature")
                return None

        try:
            return json.loads(_b64decode(payload).decode("utf-8"))
        except ValueError as e:
            raise CookieDecodeError(f"Cookie '{self.name}' is malformed: {e}") from e

    async def serialize(self, value: Any, max_age: Optional[int] = None) -> str:
        """
        Build the Set-Cookie header value storing `value`.

        Args:
            value: JSON-serializable value
            max_age: Overrides the configured lifetime

        Returns:
            Set-Cookie header value
        """
        payload = _b64encode(json.dumps(value).encode("utf-8"))
        if self._secrets:
            payload = f"{payload}.{self._sign(payload, self._secrets[0])}"

        return serialize_cookie(
            self.name,
            payload,
            max_age=max_age if max_age is not None else self._max_age,
            path=self._path,
            same_site=self._same_site,
            secure=self._secure,
            http_only=self._http_only,
        )

    @staticmethod
    def _sign(payload: str, secret: str) -> str:
        digest = hmac.new(secret.encode("utf-8"), payload.encode("utf-8"), hashlib.sha256)
        return _b64encode(digest.digest())

    def _unsign(self, raw: str) -> Optional[str]:
        payload, sep, signature = raw.rpartition(".")
        if not sep:
            return None
        for secret in self._secrets:
            expected = self._sign(payload, secret).encode("ascii")
            if hmac.compare_digest(expected, signature.encode("utf-8", "surrogateescape")):
                return payload
        return None
