"""
HTTP helpers - Cookies and request URL utilities.
"""

from webutils.http.cookie import LanguageCookie, serialize_cookie, get_cookie_value
from webutils.http.request_helpers import (
    get_clean_url,
    create_domain,
    is_route_active,
    check_if_route_is_active,
)

__all__ = [
    "LanguageCookie",
    "serialize_cookie",
    "get_cookie_value",
    "get_clean_url",
    "create_domain",
    "is_route_active",
    "check_if_route_is_active",
]
