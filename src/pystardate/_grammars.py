"""Lark grammars for the textual date formats.

Each grammar accepts exactly one format, so no token is valid syntax for
two formats. Parsers are LALR with the contextual lexer and are built once
at import time.
"""

from __future__ import annotations

from functools import cache

from lark import Lark, Tree
from lark.exceptions import UnexpectedInput

STARDATE_GRAMMAR = r"""
start: "[" [MINUS] DIGITS "]" DIGITS [fraction]
fraction: "." [DIGITS]

MINUS: "-"
DIGITS: /[0-9]+/
"""

# The date part commits a token to a calendar; anything after the day is
# handed to TIME_OF_DAY_GRAMMAR as REST.
_CALENDAR_GRAMMAR_TEMPLATE = r"""
start: DIGITS _SEP DIGITS _SEP DIGITS [REST]

_SEP: "{separator}"
DIGITS: /[0-9]+/
REST: /.+/s
"""

TIME_OF_DAY_GRAMMAR = r"""
start: _T DIGITS _COLON DIGITS [_COLON DIGITS]

_T: "T"i
_COLON: ":"
DIGITS: /[0-9]+/
"""

UNIX_GRAMMAR = r"""
start: _U [MINUS] (HEX | DECIMAL)

_U: "U"i
MINUS: "-"
HEX.2: /0[xX][0-9a-fA-F]+/
DECIMAL: /[0-9]+/
"""


def _build(grammar: str) -> Lark:
    return Lark(grammar, parser="lalr", maybe_placeholders=True)


stardate_parser = _build(STARDATE_GRAMMAR)
time_of_day_parser = _build(TIME_OF_DAY_GRAMMAR)
unix_parser = _build(UNIX_GRAMMAR)


@cache
def calendar_parser(separator: str) -> Lark:
    """Parser for ``YYYY<sep>MM<sep>DD`` followed by an optional tail."""
    return _build(_CALENDAR_GRAMMAR_TEMPLATE.format(separator=separator))


def try_parse(parser: Lark, text: str) -> Tree | None:
    """Parse ``text``, returning None when it does not fit the grammar."""
    try:
        return parser.parse(text)
    except UnexpectedInput:
        return None
