"""Literal escaping, bracket tags, and the token model shared by the compilers.

A compiled format code is a flat run of grammar elements. The date/time
compiler keeps those elements as ``Token`` values so that the preview can
substitute them by kind instead of re-reading the string. In particular
``m``/``mm`` mean month or minute depending on context; the token kind
records which one was intended when the token was produced.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

# Characters the grammar displays as-is without quoting.
SAFE_LITERAL_CHARS = frozenset("$-+/():!^'~{}<>= ")

_QUOTED_RUN = re.compile(r'"((?:[^"\\]|\\.)*)"')
_ESCAPED_CHAR = re.compile(r"\\(.)")


class TokenKind(str, Enum):
    """Discriminates what a piece of a compiled code stands for."""

    LITERAL = "literal"
    LOCALE = "locale"
    COLOR = "color"
    CONDITION = "condition"
    SECTION = "section"
    YEAR = "year"
    MONTH = "month"
    DAY = "day"
    HOUR = "hour"
    MINUTE = "minute"
    SECOND = "second"
    ELAPSED_HOUR = "elapsed_hour"
    ELAPSED_MINUTE = "elapsed_minute"
    ELAPSED_SECOND = "elapsed_second"
    AM_PM = "am_pm"


DECORATION_KINDS = frozenset({TokenKind.LOCALE, TokenKind.COLOR, TokenKind.CONDITION})


@dataclass(frozen=True)
class Token:
    """One element of a compiled code.

    ``code`` is the exact text emitted into the format string. ``text`` is
    the display value for literals (quotes and escapes removed).
    """

    kind: TokenKind
    code: str
    text: str = ""

    @property
    def is_double(self) -> bool:
        """True for zero-padded forms such as ``hh``, ``mm``, ``[ss]``."""
        return len(self.code.split(".")[0].strip("[]")) >= 2

    @property
    def has_hundredths(self) -> bool:
        return self.code.endswith(".00")


def quote_text(text: str) -> str:
    """Quote ``text`` as a literal run, escaping embedded quotes.

    Empty text produces nothing rather than an empty ``""`` pair.
    """
    if not text:
        return ""
    return '"' + text.replace('"', '\\"') + '"'


def literal_text(text: str) -> str:
    """Emit ``text`` with the least escaping the grammar needs.

    Runs made only of characters the host displays verbatim stay bare, so
    ``:`` between hours and minutes reads ``[h]:mm`` rather than ``[h]":"mm``.
    """
    if not text:
        return ""
    if all(ch in SAFE_LITERAL_CHARS for ch in text):
        return text
    return quote_text(text)


def literal_token(text: str) -> Token:
    return Token(TokenKind.LITERAL, literal_text(text), text)


def unquote(code: str) -> str:
    """Remove quote marks around literal runs and unescape backslash escapes."""
    code = _QUOTED_RUN.sub(lambda m: m.group(1).replace('\\"', "\x00"), code)
    code = _ESCAPED_CHAR.sub(r"\1", code)
    return code.replace("\x00", '"')


def strip_literals(code: str) -> str:
    """Blank out quoted runs and escaped characters, keeping offsets intact."""
    code = _QUOTED_RUN.sub(lambda m: " " * len(m.group(0)), code)
    return _ESCAPED_CHAR.sub(lambda m: " " * len(m.group(0)), code)


def color_tag(color) -> str:
    """``[Red]`` for a color, nothing for ``None``."""
    if color is None:
        return ""
    return f"[{getattr(color, 'value', color)}]"


def locale_tag(code: str | None) -> str:
    """Normalize a locale code to a ``[$-xx-XX]`` tag.

    Accepts ``[$-en-US]``, ``$-en-US`` or ``en-US``. Blank input gives nothing.
    """
    code = (code or "").strip().lstrip("[").rstrip("]").strip()
    if not code:
        return ""
    if not code.startswith("$"):
        code = "$-" + code
    return f"[{code}]"


def elapsed_tag(unit: str, hundredths: bool = False) -> str:
    """Accumulating unit tag: ``[h]``, ``[m]``, ``[s]``, or ``[ss].00``."""
    if hundredths:
        return "[ss].00"
    return f"[{unit}]"


def format_threshold(value: float) -> str:
    """Render a numeric threshold without exponent or redundant ``.0``."""
    if float(value).is_integer():
        return str(int(value))
    return format(Decimal(repr(float(value))), "f")


def condition_tag(operator, value: float) -> str:
    return f"[{getattr(operator, 'value', operator)}{format_threshold(value)}]"


def render_code(tokens) -> str:
    """Join token codes into the final format string."""
    return "".join(t.code for t in tokens)
