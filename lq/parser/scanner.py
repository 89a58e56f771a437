"""
Lexical scanner for template source.

Splits raw template text into TEXT, TAG and OBJECT tokens using a
configurable delimiter set. The scanner is context-free: it records
whitespace-control flags on tokens but does not apply them, and it
knows nothing about which tags exist.
"""

from __future__ import annotations

import re
from typing import Iterator, List, Optional, Sequence, Tuple

from .tokens import SourceLoc, Token, TokenType

# object-left, object-right, tag-left, tag-right
DEFAULT_DELIMS: Tuple[str, str, str, str] = ("{{", "}}", "{%", "%}")

TRIM_MARKER = "-"


def resolve_delims(delims: Optional[Sequence[str]]) -> Tuple[str, str, str, str]:
    """
    Validates a delimiter override.

    Args:
        delims: None/empty for defaults, or exactly four non-empty strings
                [object_left, object_right, tag_left, tag_right]

    Returns:
        Tuple of four delimiter strings

    Raises:
        ValueError: For a list of the wrong size, empty markers or
                    identical left markers
    """
    if not delims:
        return DEFAULT_DELIMS
    if len(delims) != 4:
        raise ValueError(f"Expected 4 delimiters, got {len(delims)}: {list(delims)!r}")
    if any(not d for d in delims):
        raise ValueError(f"Delimiters must be non-empty strings: {list(delims)!r}")
    object_left, object_right, tag_left, tag_right = delims
    if object_left == tag_left:
        raise ValueError(f"Object and tag delimiters must differ: {object_left!r}")
    return object_left, object_right, tag_left, tag_right


class Scanner:
    """
    Single-pass template scanner.

    Finds the nearest opening marker, emits the preceding text as a TEXT
    token and the delimited region as a TAG or OBJECT token. An opening
    marker without a matching closing marker turns the rest of the input
    into literal text.

    Not restartable: iter_tokens() consumes the scanner.
    """

    def __init__(self, source: str, loc: Optional[SourceLoc] = None, delims: Optional[Sequence[str]] = None):
        self.source = source
        self.loc = loc if loc is not None else SourceLoc()
        self.position = 0
        self.line = self.loc.line_no if self.loc.line_no > 0 else 1
        self.length = len(source)

        self.object_left, self.object_right, self.tag_left, self.tag_right = resolve_delims(delims)

        # Longer marker wins when both start at the same position
        markers = sorted({self.object_left, self.tag_left}, key=len, reverse=True)
        self._open_pattern = re.compile("|".join(re.escape(m) for m in markers))

    def iter_tokens(self) -> Iterator[Token]:
        """
        Lazily yields tokens in source order.
        """
        while self.position < self.length:
            match = self._open_pattern.search(self.source, self.position)
            if match is None:
                yield self._text_token(self.length)
                return

            opener = match.group(0)
            closer = self.object_right if opener == self.object_left else self.tag_right
            close_at = self.source.find(closer, match.end())
            if close_at < 0:
                # Unterminated markup is kept as literal text
                yield self._text_token(self.length)
                return

            if match.start() > self.position:
                yield self._text_token(match.start())
            yield self._markup_token(opener, match.end(), close_at, closer)

    def tokenize(self) -> List[Token]:
        """Scans the whole source and returns the token list."""
        return list(self.iter_tokens())

    def _text_token(self, stop: int) -> Token:
        token = Token(
            type=TokenType.TEXT,
            loc=self._current_loc(),
            source=self.source[self.position:stop],
        )
        self._advance(stop)
        return token

    def _markup_token(self, opener: str, inner_start: int, close_at: int, closer: str) -> Token:
        interior = self.source[inner_start:close_at]

        trim_left = interior.startswith(TRIM_MARKER)
        if trim_left:
            interior = interior[len(TRIM_MARKER):]
        trim_right = interior.endswith(TRIM_MARKER)
        if trim_right:
            interior = interior[:-len(TRIM_MARKER)]

        stop = close_at + len(closer)
        loc = self._current_loc()
        source = self.source[self.position:stop]

        if opener == self.object_left:
            token = Token(
                type=TokenType.OBJECT,
                loc=loc,
                args=interior.strip(),
                source=source,
                trim_left=trim_left,
                trim_right=trim_right,
            )
        else:
            parts = interior.split(None, 1)
            token = Token(
                type=TokenType.TAG,
                loc=loc,
                name=parts[0] if parts else "",
                args=parts[1].strip() if len(parts) > 1 else "",
                source=source,
                trim_left=trim_left,
                trim_right=trim_right,
            )

        self._advance(stop)
        return token

    def _current_loc(self) -> SourceLoc:
        return SourceLoc(pathname=self.loc.pathname, line_no=self.line)

    def _advance(self, stop: int) -> None:
        """Moves to stop, counting consumed newlines."""
        self.line += self.source.count("\n", self.position, stop)
        self.position = stop


def scan(source: str, loc: Optional[SourceLoc] = None, delims: Optional[Sequence[str]] = None) -> List[Token]:
    """
    Convenience function for scanning a template.

    Args:
        source: Template source text
        loc: Starting location (path and first line number)
        delims: Optional [object_left, object_right, tag_left, tag_right]

    Returns:
        Token list in source order
    """
    return Scanner(source, loc, delims).tokenize()


__all__ = ["DEFAULT_DELIMS", "Scanner", "scan", "resolve_delims"]
