"""
Text helpers: typographic quotes, splitting, truncation and small parsers.
"""

import re
from typing import Dict, List, NamedTuple, Optional, TypedDict, Union


class QuoteStyle(NamedTuple):
    """Opening/closing characters for double (primary) and single quotes."""

    open: str
    close: str
    open_single: str
    close_single: str


# https://en.wikipedia.org/wiki/Quotation_mark#Summary_table
QUOTE_STYLES: Dict[str, QuoteStyle] = {
    "cs": QuoteStyle("„", "”", "‚", "’"),
    "da": QuoteStyle("»", "«", "›", "‹"),
    "de": QuoteStyle("„", "”", "‚", "’"),
    "de-ch": QuoteStyle("«", "»", "‹", "›"),
    "en": QuoteStyle("“", "”", "‘", "’"),
    "es": QuoteStyle("«", "»", "“", "”"),
    "fi": QuoteStyle("”", "”", "’", "’"),
    # French quotes carry a space on the inside
    "fr": QuoteStyle("« ", " »", "‹ ", " ›"),
    "hu": QuoteStyle("„", "”", "‚", "’"),
    "it": QuoteStyle("«", "»", "“", "”"),
    "ja": QuoteStyle("「", "」", "『", "』"),
    "nl": QuoteStyle("‘", "’", "‘", "’"),
    "no": QuoteStyle("»", "«", "›", "‹"),
    "pl": QuoteStyle("„", "”", "‚", "’"),
    "pt": QuoteStyle("«", "»", "“", "”"),
    "ru": QuoteStyle("«", "»", "‚", "’"),
    "sv": QuoteStyle("”", "”", "’", "’"),
    "zh": QuoteStyle("「", "」", "『", "』"),
}

_DOUBLE_QUOTED = re.compile(r'"([^"]*)"')
_SINGLE_QUOTED = re.compile(r"'([^']*)'")
_SENTENCE_BREAK = re.compile(r"(?<=[.!?])\s+")
_WHITESPACE = re.compile(r"\s+")
_AUTHOR = re.compile(r"^(.*?)\s*(?:<([^>]+)>)?\s*(?:\(([^)]+)\))?$")


def get_quote_style(locale: str) -> QuoteStyle:
    """
    Get the quote style for a locale.

    Tries the exact locale, then its base language ("de" for "de-DE"), then
    falls back to English.
    """
    normalized = locale.lower()
    if normalized in QUOTE_STYLES:
        return QUOTE_STYLES[normalized]

    base = normalized.split("-")[0]
    return QUOTE_STYLES.get(base, QUOTE_STYLES["en"])


def typographic_quotes(text: str, locale: str) -> str:
    """
    Replace straight quotes with the typographic quotes of a locale.

    Only quote pairs are replaced, so apostrophes in contractions stay.

    Examples:
        typographic_quotes('"Hello"', "de")  # '„Hello”'
        typographic_quotes('"Hello"', "fr")  # '« Hello »'
    """
    style = get_quote_style(locale)

    result = _DOUBLE_QUOTED.sub(lambda m: f"{style.open}{m.group(1)}{style.close}", text)
    return _SINGLE_QUOTED.sub(
        lambda m: f"{style.open_single}{m.group(1)}{style.close_single}", result
    )


def to_boolean(value: Union[str, bool, None]) -> bool:
    """Interpret "true"/"1" (and True) as True, anything else as False."""
    if isinstance(value, bool):
        return value
    return value in ("true", "1")


def replace_shy(text: str) -> str:
    """Replace the &shy; HTML entity with a Unicode soft hyphen."""
    return text.replace("&shy;", "\u00ad")


def split_into_sentences(text: str) -> List[str]:
    return _SENTENCE_BREAK.split(text)


def split_into_words(text: str) -> List[str]:
    return _WHITESPACE.split(text)


def truncate_text(text: str, max_length: int, suffix: str = "...") -> str:
    """Truncate text to max_length characters, suffix included."""
    if len(text) <= max_length:
        return text
    return text[: max_length - len(suffix)] + suffix


class AuthorInfo(TypedDict, total=False):
    name: str
    email: str
    url: str


def parse_author_string(text: str) -> AuthorInfo:
    """
    Parse an author string in the format "Name <email> (url)".

    Every part is optional; missing parts are left out of the result.
    """
    match = _AUTHOR.match(text)
    if not match:
        return {}

    name, email, url = match.groups()
    result: AuthorInfo = {}

    if email:
        result["email"] = email

    trimmed: Optional[str] = name.strip() if name else None
    if trimmed:
        result["name"] = trimmed

    if url:
        result["url"] = url

    return result
