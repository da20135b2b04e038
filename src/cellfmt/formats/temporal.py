"""Date, time-of-day, and elapsed-time format codes and their preview.

Compilation happens in two steps. ``resolve_plan`` applies the option
hierarchy (smart presets, leading duration unit, the date/duration
conflict) and produces a ``DateTimePlan``: the single legal token sequence
for those settings. ``compile_datetime_format`` renders the plan's codes and
``preview_datetime`` renders its tokens against a sample value.

Duration rules:
  - Only the leading unit accumulates and is bracketed (``[h]``, ``[m]``,
    ``[s]``); smaller units show their remainder.
  - Units larger than the leading unit are never shown.
  - Calendar dates are only combined with a plain ``[h]`` lead.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from cellfmt.formats.settings import (
    DateOrder,
    DateSeparator,
    DateTimeSettings,
    DurationUnit,
    HourFormat,
    MinuteFormat,
    SecondFormat,
    SmartDuration,
    TimeMode,
)
from cellfmt.formats.tokens import (
    DECORATION_KINDS,
    Token,
    TokenKind,
    elapsed_tag,
    literal_token,
    locale_tag,
    quote_text,
    render_code,
    unquote,
)

logger = logging.getLogger(__name__)

# One hour expressed in days, the unit the host compares durations in.
AUTO_SCALE_THRESHOLD = "0.0416667"
ONE_HOUR_SECONDS = 3600

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

SPACE = Token(TokenKind.LITERAL, " ", " ")
COLON = Token(TokenKind.LITERAL, ":", ":")
_THRESHOLD = Token(TokenKind.CONDITION, f"[<{AUTO_SCALE_THRESHOLD}]")
_BLUE = Token(TokenKind.COLOR, "[Blue]")
_TOTAL_HOURS = Token(TokenKind.ELAPSED_HOUR, elapsed_tag("h"))
_TOTAL_MINUTES = Token(TokenKind.ELAPSED_MINUTE, elapsed_tag("m"))
_MM = Token(TokenKind.MINUTE, "mm")
_SS = Token(TokenKind.SECOND, "ss")


def _lit(code: str) -> Token:
    return Token(TokenKind.LITERAL, code, unquote(code))


PRESET_SECTIONS: dict[SmartDuration, tuple[tuple[Token, ...], ...]] = {
    # [<0.0416667][Blue][m] "mins";[h] "hours"
    SmartDuration.AUTO_SCALE: (
        (_THRESHOLD, _BLUE, _TOTAL_MINUTES, _lit(' "mins"')),
        (_TOTAL_HOURS, _lit(' "hours"')),
    ),
    # [h]"h "mm"m "ss"s"
    SmartDuration.COMPOSITE_TEXT: (
        (
            _TOTAL_HOURS, _lit('"h "'),
            _MM, _lit('"m "'),
            _SS, _lit('"s"'),
        ),
    ),
    # [<0.0416667][Blue]mm:ss;[h]:mm:ss
    SmartDuration.TIMER: (
        (_THRESHOLD, _BLUE, _MM, COLON, _SS),
        (_TOTAL_HOURS, COLON, _MM, COLON, _SS),
    ),
}

# Shown for the leading unit when its granularity was left at "none"
_LEADING_DEFAULTS = {
    DurationUnit.HOURS: HourFormat.HH,
    DurationUnit.MINUTES: MinuteFormat.MM,
    DurationUnit.SECONDS: SecondFormat.SS,
}

_PLAIN_KINDS = {
    DurationUnit.HOURS: TokenKind.HOUR,
    DurationUnit.MINUTES: TokenKind.MINUTE,
    DurationUnit.SECONDS: TokenKind.SECOND,
}


@dataclass(frozen=True)
class DateTimePlan:
    """The resolved, legal form of a set of date/time settings."""

    mode: TimeMode
    preset: SmartDuration
    sections: tuple[tuple[Token, ...], ...]
    use_12_hour: bool = False

    @property
    def is_preset(self) -> bool:
        return self.preset != SmartDuration.NONE

    @property
    def tokens(self) -> tuple[Token, ...]:
        out: list[Token] = []
        for i, section in enumerate(self.sections):
            if i:
                out.append(Token(TokenKind.SECTION, ";"))
            out.extend(section)
        return tuple(out)

    @property
    def code(self) -> str:
        return render_code(self.tokens)


def _separator_token(settings: DateTimeSettings) -> Token | None:
    if settings.date_separator == DateSeparator.CUSTOM:
        text = settings.custom_date_separator
        return Token(TokenKind.LITERAL, quote_text(text), text) if text else None
    return literal_token(settings.date_separator.value)


def _date_segment(settings: DateTimeSettings) -> list[Token]:
    day = Token(TokenKind.DAY, settings.day_format.value)
    month = Token(TokenKind.MONTH, settings.month_format.value)
    year = Token(TokenKind.YEAR, settings.year_format.value)

    if settings.date_order == DateOrder.DMY:
        ordered = (day, month, year)
    elif settings.date_order == DateOrder.MDY:
        ordered = (month, day, year)
    else:
        ordered = (year, month, day)

    sep = _separator_token(settings)
    tokens: list[Token] = []
    for i, tok in enumerate(ordered):
        if i and sep is not None:
            tokens.append(sep)
        tokens.append(tok)
    return tokens


def _unit_formats(settings: DateTimeSettings):
    return (
        (DurationUnit.HOURS, settings.hour_format, settings.hour_suffix),
        (DurationUnit.MINUTES, settings.minute_format, settings.minute_suffix),
        (DurationUnit.SECONDS, settings.second_format, settings.second_suffix),
    )


def _with_suffix(token: Token, suffix: str) -> list[Token]:
    return [token, literal_token(suffix)] if suffix else [token]


def _elapsed_token(unit: DurationUnit, fmt) -> Token:
    if unit == DurationUnit.HOURS:
        return _TOTAL_HOURS
    if unit == DurationUnit.MINUTES:
        return _TOTAL_MINUTES
    return Token(TokenKind.ELAPSED_SECOND, elapsed_tag("s", fmt == SecondFormat.SS_HUNDREDTHS))


def _clock_segment(settings: DateTimeSettings) -> list[Token]:
    tokens: list[Token] = []
    for unit, fmt, suffix in _unit_formats(settings):
        if fmt.value != "none":
            tokens.extend(_with_suffix(Token(_PLAIN_KINDS[unit], fmt.value), suffix))
    if tokens and settings.use_12_hour:
        tokens.extend((SPACE, Token(TokenKind.AM_PM, settings.am_pm_format.value)))
    return tokens


def _duration_segment(settings: DateTimeSettings) -> list[Token]:
    leading = settings.leading_unit
    tokens: list[Token] = []
    for unit, fmt, suffix in _unit_formats(settings):
        if unit.rank < leading.rank:
            continue
        if unit == leading:
            if fmt.value == "none":
                fmt = _LEADING_DEFAULTS[unit]
            token = _elapsed_token(unit, fmt)
        elif fmt.value == "none":
            continue
        else:
            token = Token(_PLAIN_KINDS[unit], fmt.value)
        tokens.extend(_with_suffix(token, suffix))
    return tokens


def resolve_plan(settings: DateTimeSettings) -> DateTimePlan:
    """Apply presets and the duration hierarchy to produce the legal token plan."""
    if settings.is_duration and settings.smart_duration != SmartDuration.NONE:
        return DateTimePlan(
            mode=settings.mode,
            preset=settings.smart_duration,
            sections=PRESET_SECTIONS[settings.smart_duration],
        )

    segments: list[list[Token]] = []
    if settings.use_date and settings.date_allowed:
        segments.append(_date_segment(settings))
    if settings.use_time:
        if settings.is_duration:
            time_tokens = _duration_segment(settings)
        else:
            time_tokens = _clock_segment(settings)
        if time_tokens:
            segments.append(time_tokens)

    tokens: list[Token] = []
    tag = locale_tag(settings.locale_code)
    if tag:
        tokens.append(Token(TokenKind.LOCALE, tag))
    for i, segment in enumerate(segments):
        if i:
            tokens.append(SPACE)
        tokens.extend(segment)

    return DateTimePlan(
        mode=settings.mode,
        preset=SmartDuration.NONE,
        sections=(tuple(tokens),),
        use_12_hour=settings.use_12_hour and not settings.is_duration,
    )


def compile_datetime_format(settings: DateTimeSettings) -> str:
    """Compile date/time/duration settings into a format code."""
    code = resolve_plan(settings).code
    logger.debug("Compiled date/time format: %s", code)
    return code


# ── Preview ──


def _pad(value: int, token: Token) -> str:
    return f"{value:02d}" if token.is_double else str(value)


def _hundredths(value: int) -> str:
    return f".{value:02d}"


class _Sample:
    """Values a plan's tokens draw on for one preview."""

    def __init__(self, plan: DateTimePlan, sample_date: datetime | None, duration_seconds: float):
        self.plan = plan
        self.date = sample_date
        value = float(duration_seconds or 0)
        if not math.isfinite(value) or value < 0:
            value = 0.0
        # Exact decimal digits, so 0.57 gives 57 hundredths
        seconds = Decimal(repr(value))
        self.total_seconds = int(seconds)
        self.hundredths = int((seconds - self.total_seconds) * 100)
        self.total_minutes = self.total_seconds // 60
        self.total_hours = self.total_minutes // 60

    @property
    def is_duration(self) -> bool:
        return self.plan.mode == TimeMode.DURATION

    def render(self, token: Token) -> str:
        kind = token.kind
        if kind == TokenKind.LITERAL:
            return token.text
        if kind in DECORATION_KINDS or kind == TokenKind.SECTION:
            return ""
        if kind == TokenKind.ELAPSED_HOUR:
            return _pad(self.total_hours, token)
        if kind == TokenKind.ELAPSED_MINUTE:
            return _pad(self.total_minutes, token)
        if kind == TokenKind.ELAPSED_SECOND:
            out = _pad(self.total_seconds, token)
            return out + _hundredths(self.hundredths) if token.has_hundredths else out
        if kind in (TokenKind.HOUR, TokenKind.MINUTE, TokenKind.SECOND) and self.is_duration:
            return self._render_remainder(token)
        return self._render_calendar(token)

    def _render_remainder(self, token: Token) -> str:
        if token.kind == TokenKind.HOUR:
            return _pad(self.total_hours % 24, token)
        if token.kind == TokenKind.MINUTE:
            return _pad(self.total_minutes % 60, token)
        out = _pad(self.total_seconds % 60, token)
        return out + _hundredths(self.hundredths) if token.has_hundredths else out

    def _render_calendar(self, token: Token) -> str:
        d = self.date
        code = token.code
        if token.kind == TokenKind.YEAR:
            return f"{d.year % 100:02d}" if code == "yy" else str(d.year)
        if token.kind == TokenKind.MONTH:
            name = MONTH_NAMES[d.month - 1]
            if code == "mmmmm":
                return name[0]
            if code == "mmmm":
                return name
            if code == "mmm":
                return name[:3]
            return _pad(d.month, token)
        if token.kind == TokenKind.DAY:
            name = WEEKDAY_NAMES[d.weekday()]
            if code == "dddd":
                return name
            if code == "ddd":
                return name[:3]
            return _pad(d.day, token)
        if token.kind == TokenKind.HOUR:
            hour = d.hour
            if self.plan.use_12_hour:
                hour = hour % 12 or 12
            return _pad(hour, token)
        if token.kind == TokenKind.MINUTE:
            return _pad(d.minute, token)
        if token.kind == TokenKind.SECOND:
            out = _pad(d.second, token)
            return out + f".{d.microsecond // 10000:02d}" if token.has_hundredths else out
        if token.kind == TokenKind.AM_PM:
            marker = "PM" if d.hour >= 12 else "AM"
            if code == "am/pm":
                return marker.lower()
            if code == "A/P":
                return marker[0]
            if code == "a/p":
                return marker[0].lower()
            return marker
        return token.code


def preview_datetime(
    settings: DateTimeSettings,
    sample_date: datetime | None = None,
    duration_seconds: float = 0,
) -> str:
    """Approximate how the host displays a sample under these settings.

    ``sample_date`` feeds calendar and clock tokens; ``duration_seconds``
    feeds elapsed-time tokens. Callers must pass a valid ``sample_date``
    whenever the plan contains calendar or clock tokens.
    """
    plan = resolve_plan(settings)
    sample = _Sample(plan, sample_date, duration_seconds)

    section = plan.sections[0]
    if plan.is_preset and len(plan.sections) > 1 and sample.total_seconds >= ONE_HOUR_SECONDS:
        section = plan.sections[1]

    return "".join(sample.render(t) for t in section)
