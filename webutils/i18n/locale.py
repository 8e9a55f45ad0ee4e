"""
Locale helpers.

Pure functions for BCP 47 locale handling:
- Accept-Language style parsing with quality-value (q=) support
- Locale tag shape validation and case normalisation
- Client locale lookup from request headers
"""

import math
import re
from typing import Callable, List, Mapping, Optional, Tuple, Union

LocaleValidator = Callable[[str], Optional[str]]

# language[-script][-region][-variant...]
_LOCALE_PATTERN = re.compile(
    r"^(?P<language>[A-Za-z]{2,3})"
    r"(?:-(?P<script>[A-Za-z]{4}))?"
    r"(?:-(?P<region>[A-Za-z]{2}|\d{3}))?"
    r"(?P<variants>(?:-(?:[A-Za-z0-9]{5,8}|\d[A-Za-z0-9]{3}))*)$"
)


def _parse_quality(params: List[str]) -> float:
    """Read the q= parameter of a language range. Malformed or out-of-range values rank as 0."""
    for param in params:
        name, _, value = param.partition("=")
        if name.strip().lower() != "q":
            continue
        try:
            quality = float(value.strip())
        except ValueError:
            return 0.0
        if math.isnan(quality) or not 0.0 <= quality <= 1.0:
            return 0.0
        return quality
    return 1.0


def parse_accept_language(
    header: Optional[str],
    ignore_wildcard: bool = True,
    validate: Optional[LocaleValidator] = None,
) -> List[str]:
    """
    Parse an Accept-Language style value into tags ordered by preference.

    Entries are sorted by quality, highest first. Entries with equal quality
    keep their original order.

    Args:
        header: Header value, e.g. "de-CH,de;q=0.9,en;q=0.8"
        ignore_wildcard: Drop the "*" range
        validate: Optional callable receiving each tag. A falsy return drops
            the tag, any other return value replaces it.

    Returns:
        List of tags, possibly empty
    """
    if not header:
        return []

    weighted: List[Tuple[float, str]] = []
    for part in header.split(","):
        part = part.strip()
        if not part:
            continue

        tag, *params = [piece.strip() for piece in part.split(";")]
        if not tag:
            continue
        if tag == "*" and ignore_wildcard:
            continue

        if validate is not None:
            validated = validate(tag)
            if not validated:
                continue
            tag = validated

        weighted.append((_parse_quality(params), tag))

    weighted.sort(key=lambda item: item[0], reverse=True)
    return [tag for _, tag in weighted]


def is_valid_locale(tag: str) -> bool:
    """Return True when tag has the shape of a BCP 47 language tag."""
    return bool(tag) and _LOCALE_PATTERN.match(tag) is not None


def canonicalize_locale(tag: str) -> Optional[str]:
    """
    Normalise the case of a locale tag ("EN-us" -> "en-US").

    Returns:
        The canonical tag, or None if the tag is not a valid locale
    """
    match = _LOCALE_PATTERN.match(tag) if tag else None
    if match is None:
        return None

    parts = [match.group("language").lower()]
    if match.group("script"):
        parts.append(match.group("script").title())
    if match.group("region"):
        parts.append(match.group("region").upper())
    variants = match.group("variants")
    if variants:
        parts.extend(v.lower() for v in variants.split("-") if v)
    return "-".join(parts)


def get_client_locales(
    request_or_headers: Union[object, Mapping[str, str]],
) -> Union[str, List[str], None]:
    """
    Get the client's locales from the Accept-Language header.

    Args:
        request_or_headers: A request exposing `.headers`, or the headers
            mapping itself

    Returns:
        None if the header is missing or holds no valid locale, the locale
        itself if there is exactly one, otherwise the locales sorted by
        quality
    """
    headers = getattr(request_or_headers, "headers", request_or_headers)
    accept_language = headers.get("Accept-Language")
    if not accept_language:
        return None

    locales = parse_accept_language(accept_language, validate=canonicalize_locale)
    if not locales:
        return None
    if len(locales) == 1:
        return locales[0]
    return locales
