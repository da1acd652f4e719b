"""
Literal-aware substitution of the logical table prefix placeholder.

The scanner alternates between two states. Outside a string literal every
placeholder occurrence is replaced; inside a single-quoted literal the text
is copied verbatim until the closing quote. A quote preceded by an odd run
of backslashes is escaped and does not close the literal. An unterminated
literal ends the rewrite and the remainder is passed through untouched.
"""

from __future__ import annotations

from enum import Enum

DEFAULT_PLACEHOLDER = "#__"
QUOTE_CHAR = "'"
ESCAPE_CHAR = "\\"


class ScanState(Enum):
    OUTSIDE = "outside"
    LITERAL = "literal"


def is_escaped(sql: str, position: int, escape: str = ESCAPE_CHAR) -> bool:
    """
    Return True when the character at ``position`` follows an odd run of escapes.
    """

    escaped = False
    index = position - 1
    while index >= 0 and sql[index] == escape:
        escaped = not escaped
        index -= 1
    return escaped


def find_closing_quote(sql: str, start: int, quote: str = QUOTE_CHAR) -> int:
    """
    Index of the first unescaped ``quote`` at or after ``start``, or -1.
    """

    position = start
    while True:
        candidate = sql.find(quote, position)
        if candidate == -1:
            return -1
        if not is_escaped(sql, candidate):
            return candidate
        position = candidate + 1


def replace_prefix(sql: str, prefix: str, placeholder: str = DEFAULT_PLACEHOLDER) -> str:
    """
    Replace ``placeholder`` with ``prefix`` everywhere outside single-quoted literals.
    """

    if not placeholder or placeholder not in sql:
        return sql

    length = len(sql)
    pieces: list[str] = []
    cursor = 0
    state = ScanState.OUTSIDE
    next_placeholder = sql.find(placeholder)

    while cursor < length:
        if state is ScanState.OUTSIDE:
            if next_placeholder != -1 and next_placeholder < cursor:
                next_placeholder = sql.find(placeholder, cursor)
            if next_placeholder == -1:
                break

            opening = sql.find(QUOTE_CHAR, cursor)
            if opening == -1:
                opening = length
            pieces.append(sql[cursor:opening].replace(placeholder, prefix))
            cursor = opening
            if cursor + 1 >= length:
                break
            state = ScanState.LITERAL
        else:
            closing = find_closing_quote(sql, cursor + 1)
            if closing == -1:
                break
            pieces.append(sql[cursor : closing + 1])
            cursor = closing + 1
            state = ScanState.OUTSIDE

    pieces.append(sql[cursor:])
    return "".join(pieces)
