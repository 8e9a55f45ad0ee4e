"""
Text module - Typography and string helpers.
"""

from webutils.text.text import (
    AuthorInfo,
    typographic_quotes,
    to_boolean,
    replace_shy,
    split_into_sentences,
    split_into_words,
    truncate_text,
    parse_author_string,
)

__all__ = [
    "AuthorInfo",
    "typographic_quotes",
    "to_boolean",
    "replace_shy",
    "split_into_sentences",
    "split_into_words",
    "truncate_text",
    "parse_author_string",
]
