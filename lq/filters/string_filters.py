"""
String filters.
"""

from __future__ import annotations

import html
import json
import re
from typing import Any, List
from urllib.parse import quote_plus, unquote_plus

from ..values import is_sequence, to_liquid

_HTML_BLOCKS = re.compile(r"<script.*?</script>|<style.*?</style>|<!--.*?-->", re.DOTALL | re.IGNORECASE)
_HTML_TAGS = re.compile(r"<.*?>", re.DOTALL)


def append(text: str, suffix: str) -> str:
    return text + suffix


def prepend(text: str, prefix: str) -> str:
    return prefix + text


def capitalize(text: str) -> str:
    """Upper-cases the first character only."""
    return text[:1].upper() + text[1:]


def downcase(text: str) -> str:
    return text.lower()


def upcase(text: str) -> str:
    return text.upper()


def escape(text: str) -> str:
    """HTML-escapes &, <, >, " and '."""
    return html.escape(text, quote=True).replace("&#x27;", "&#39;")


def escape_once(text: str) -> str:
    """Escapes without double-escaping existing entities."""
    return escape(html.unescape(text))


def newline_to_br(text: str) -> str:
    return text.replace("\n", "<br />")


def remove(text: str, old: str) -> str:
    return text.replace(old, "")


def remove_first(text: str, old: str) -> str:
    return text.replace(old, "", 1)


def replace(text: str, old: str, new: str = "") -> str:
    return text.replace(old, new)


def replace_first(text: str, old: str, new: str = "") -> str:
    return text.replace(old, new, 1)


def slice_value(value: Any, start: int, length: int = 1) -> Any:
    """
    Substring or sub-list of length items from start; a negative start
    counts from the end.
    """
    value = to_liquid(value)
    if not (isinstance(value, str) or is_sequence(value)):
        value = "" if value is None else str(value)
    if start < 0:
        start = max(len(value) + start, 0)
    return value[start:start + max(length, 0)]


def split(text: str, separator: str) -> List[str]:
    """
    Splits on separator. A single space splits on runs of whitespace;
    trailing empty strings are dropped.
    """
    if separator == " ":
        return text.split()
    if separator == "":
        return list(text)
    parts = text.split(separator)
    while parts and parts[-1] == "":
        parts.pop()
    return parts


def strip(text: str) -> str:
    return text.strip()


def lstrip(text: str) -> str:
    return text.lstrip()


def rstrip(text: str) -> str:
    return text.rstrip()


def strip_html(text: str) -> str:
    return _HTML_TAGS.sub("", _HTML_BLOCKS.sub("", text))


def strip_newlines(text: str) -> str:
    return text.replace("\r\n", "").replace("\n", "")


def truncate(text: str, length: int = 50, ellipsis: str = "...") -> str:
    """
    Shortens text to length characters, ellipsis included.
    """
    if len(text) <= length:
        return text
    return text[:max(length - len(ellipsis), 0)] + ellipsis


def truncatewords(text: str, words: int = 15, ellipsis: str = "...") -> str:
    """Keeps the first words words; text with no more words is unchanged."""
    parts = text.split()
    words = max(words, 1)
    if len(parts) <= words:
        return text
    return " ".join(parts[:words]) + ellipsis


def url_encode(text: str) -> str:
    return quote_plus(text)


def url_decode(text: str) -> str:
    return unquote_plus(text)


def _json_default(value: Any) -> Any:
    if isinstance(value, range):
        return list(value)
    return str(value)


def inspect_value(value: Any) -> str:
    """Compact JSON form, for debugging templates."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=_json_default)


def type_name(value: Any) -> str:
    return type(value).__name__


__all__ = [
    "append",
    "prepend",
    "capitalize",
    "downcase",
    "upcase",
    "escape",
    "escape_once",
    "newline_to_br",
    "remove",
    "remove_first",
    "replace",
    "replace_first",
    "slice_value",
    "split",
    "strip",
    "lstrip",
    "rstrip",
    "strip_html",
    "strip_newlines",
    "truncate",
    "truncatewords",
    "url_encode",
    "url_decode",
    "inspect_value",
    "type_name",
]
