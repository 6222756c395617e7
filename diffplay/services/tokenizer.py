"""
Tokenizer - Split file contents into lines and lines into tokens
"""

from __future__ import annotations

import re
import string

from diffplay.models.diff import Line, Token, TokenKind

# Word runs are unicode-aware; anything else that is not whitespace
# (punctuation, symbols, emoji) becomes a single-character token.
_TOKEN_RE = re.compile(r"\w+|\s+|[^\w\s]", re.UNICODE)
_PUNCTUATION = frozenset(string.punctuation) - {"_"}


def split_lines(text: str) -> list[Line]:
    """
    Split text on `\\n`, dropping a preceding `\\r`.

    A final terminator leaves an empty last line so the lines always
    join back to the original text. Empty input yields one empty line.
    """
    parts = text.split("\n")
    return [
        Line(index=i, text=part[:-1] if part.endswith("\r") else part)
        for i, part in enumerate(parts)
    ]


def classify_token(text: str) -> TokenKind:
    if text.isspace():
        return TokenKind.WHITESPACE
    if text in _PUNCTUATION:
        return TokenKind.PUNCTUATION
    # Letters, digits, underscores and non-ASCII symbols such as emoji
    return TokenKind.WORD


def split_tokens(line_text: str) -> list[Token]:
    """Tokenize one line into word, whitespace and punctuation tokens"""
    return [
        Token(text=match.group(0), kind=classify_token(match.group(0)))
        for match in _TOKEN_RE.finditer(line_text)
    ]
