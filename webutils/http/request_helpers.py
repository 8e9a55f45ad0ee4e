"""
Helpers for reading URLs and routes off a request.
"""

from typing import Any, Callable, Union
from urllib.parse import urlsplit, urlunsplit

RouteEnd = Union[bool, Callable[[str], bool]]


def get_clean_url(request: Any) -> str:
    """Return the request URL without its query string."""
    parts = urlsplit(str(request.url))
    return urlunsplit((parts.scheme, parts.netloc, parts.path, "", parts.fragment))


def create_domain(request: Any) -> str:
    """
    Build the public origin ("scheme://host") of a request.

    Honours the X-Forwarded-Proto header set by reverse proxies, and the Host
    header when present.

    Args:
        request: Object exposing `url` and `headers`

    Returns:
        Origin such as "https://example.com"
    """
    url = urlsplit(str(request.url))
    headers = request.headers

    scheme = headers.get("X-Forwarded-Proto") or url.scheme
    scheme = scheme.split(",")[0].strip()
    host = headers.get("Host") or url.netloc

    return f"{scheme}://{host}"


def is_route_active(route: str, current: str, end: RouteEnd = True) -> bool:
    """
    Check whether `route` matches the current path.

    Args:
        route: Route to test, e.g. "/account"
        current: Current path
        end: True for an exact match, False to also match nested paths. A
            callable receives `current` and decides whether to match exactly.

    Returns:
        True if the route is active
    """
    exact = end(current) if callable(end) else end

    if exact or route == "/":
        return route == current

    return current == route or current.startswith(route.rstrip("/") + "/")


def check_if_route_is_active(route: str, current: str, depth: int = 1) -> bool:
    """
    Check whether the current path is `route` or nested under it.

    The query string of `current` is ignored.

    Args:
        route: Route to test, e.g. "/account"
        current: Current path, may include a query string
        depth: How many levels the current path may span, counting the
            route's own level. With depth=1 only the route itself matches,
            depth=2 also matches its direct children, and so on.

    Returns:
        True if the route is active

    Examples:
        check_if_route_is_active("/account", "/account/settings")     # False
        check_if_route_is_active("/account", "/account/settings", 2)  # True
    """
    path = current.split("?", 1)[0]

    if route == "/":
        return path == "/"

    route_segments = [segment for segment in route.split("/") if segment]
    path_segments = [segment for segment in path.split("/") if segment]

    if path_segments[: len(route_segments)] != route_segments:
        return False

    return len(path_segments) - len(route_segments) < depth
