"""
Assertion helpers for conditions that must hold at runtime.

`invariant` is for programming errors; `invariant_response` is for request
handlers, where a failed check should become an HTTP error response.

Example:
    from webutils.utils import invariant_response

    @app.get("/posts/{slug}")
    async def get_post(slug: str):
        post = posts.get(slug)
        invariant_response(post, "Post not found", status_code=404)
        return post
"""

from typing import Any, Callable, Dict, Optional, Union

from webutils.utils.exceptions import APIException, BadRequestException, InvariantError

Message = Union[str, Callable[[], str]]


def _resolve_message(message: Message) -> str:
    return message() if callable(message) else message


def invariant(condition: Any, message: Message) -> None:
    """
    Raise InvariantError when condition is falsy.

    Args:
        condition: Value checked for truthiness
        message: Error message, or a callable producing it. The callable is
            only invoked when the check fails.

    Raises:
        InvariantError: If condition is falsy
    """
    if condition:
        return
    raise InvariantError(_resolve_message(message))


def invariant_response(
    condition: Any,
    message: Message,
    status_code: int = 400,
    headers: Optional[Dict[str, str]] = None,
    code: str = "INVARIANT_FAILED",
) -> None:
    """
    Raise an HTTP error when condition is falsy.

    Args:
        condition: Value checked for truthiness
        message: Response message, or a callable producing it
        status_code: HTTP status of the raised error (default 400)
        headers: Extra response headers
        code: Machine-readable error code

    Raises:
        APIException: If condition is falsy
    """
    if condition:
        return

    text = _resolve_message(message)
    if status_code == 400:
        raise BadRequestException(text, code=code, headers=headers)
    raise APIException(status_code, text, code=code, headers=headers)
