"""Four-zone numeric format codes and their preview.

A numeric code has four ``;``-separated zones: positive, negative, zero,
text. Scaling relies on the host's trailing-comma convention: every comma
after the last digit placeholder divides the displayed value by 1000.
"""

from __future__ import annotations

import logging
import math
from decimal import ROUND_HALF_UP, Decimal, localcontext

from cellfmt.formats.settings import (
    Color,
    CurrencyPosition,
    GlobalNumberSettings,
    NegativeMode,
    NumberFormat,
    ScaleMode,
    ZeroMode,
)
from cellfmt.formats.tokens import color_tag, quote_text

logger = logging.getLogger(__name__)

ALIGNMENT_SPACER = "_)"
TEXT_PLACEHOLDER = "@"

_SCALE_CODES: dict[ScaleMode, str] = {
    ScaleMode.NONE: "",
    ScaleMode.THOUSANDS: ', "K"',
    ScaleMode.MILLIONS: ',, "M"',
}

# Preview suffix and divisor for each scale
_SCALE_PREVIEW: dict[ScaleMode, tuple[str, int]] = {
    ScaleMode.NONE: ("", 1),
    ScaleMode.THOUSANDS: (" K", 1_000),
    ScaleMode.MILLIONS: (" M", 1_000_000),
}


def _base_pattern(
    decimals: int,
    separator: bool,
    scale: ScaleMode,
    integer_padding: int,
    percentage: bool,
) -> str:
    zeros = "0" * max(1, integer_padding)
    fmt = f"#,##{zeros}" if separator else zeros
    if decimals > 0:
        fmt += "." + "0" * decimals
    if percentage:
        fmt += "%"
    return fmt + _SCALE_CODES[scale]


def _apply_currency(fmt: str, g: GlobalNumberSettings) -> str:
    if not g.currency_symbol:
        return fmt
    symbol = quote_text(g.currency_symbol)
    if g.currency_position == CurrencyPosition.PREFIX:
        return f"{symbol} {fmt}"
    return f"{fmt} {symbol}"


def compile_number_format(fmt: NumberFormat) -> str:
    """Compile number settings into a ``positive;negative;zero;text`` code.

    Nothing is rejected: currency symbols and zone text are quoted, so any
    settings value yields a four-zone code.
    """
    g = fmt.global_
    base = _apply_currency(
        _base_pattern(g.decimals, g.separator, g.scale, g.integer_padding, g.percentage), g
    )

    positive = color_tag(fmt.positive.color) + base
    if fmt.positive.padding:
        positive += ALIGNMENT_SPACER

    neg = fmt.negative
    if neg.mode == NegativeMode.MINUS:
        negative = color_tag(neg.color) + "-" + base
    elif neg.mode == NegativeMode.COLOR:
        # The negative zone already implies the sign
        negative = color_tag(neg.color or Color.RED) + base
    elif neg.mode == NegativeMode.PAREN:
        negative = color_tag(neg.color) + f"({base})"
    else:
        negative = color_tag(neg.color or Color.RED) + f"({base})"

    zero_mode = fmt.zero.mode
    if zero_mode == ZeroMode.NUMBER:
        zero = _apply_currency(
            _base_pattern(g.decimals, False, ScaleMode.NONE, g.integer_padding, g.percentage), g
        )
    elif zero_mode == ZeroMode.DASH:
        zero = quote_text("-")
    elif zero_mode == ZeroMode.HIDE:
        zero = ""
    else:
        zero = quote_text(fmt.zero.custom_text)

    text = quote_text(fmt.text.prefix) + TEXT_PLACEHOLDER + quote_text(fmt.text.suffix)

    code = ";".join((positive, negative, zero, text))
    logger.debug("Compiled number format: %s", code)
    return code


# ── Preview ──


def _group_thousands(digits: str) -> str:
    head = len(digits) % 3 or 3
    groups = [digits[:head]] + [digits[i:i + 3] for i in range(head, len(digits), 3)]
    return ",".join(groups)


def _format_magnitude(value: Decimal, g: GlobalNumberSettings) -> str:
    quantum = Decimal(1).scaleb(-g.decimals)
    with localcontext() as ctx:
        ctx.prec = 400
        rounded = value.quantize(quantum, rounding=ROUND_HALF_UP)
    whole, _, frac = f"{rounded:f}".partition(".")
    whole = whole.zfill(g.integer_padding)
    if g.separator:
        whole = _group_thousands(whole)
    return f"{whole}.{frac}" if frac else whole


def preview_number(fmt: NumberFormat, value: float) -> str:
    """Approximate how the host displays ``value`` under these settings.

    Works from the settings directly rather than the compiled code. Zero
    follows the zero zone; negatives follow the negative mode.
    """
    g = fmt.global_

    if not math.isfinite(value):
        return str(value)

    if value == 0:
        if fmt.zero.mode == ZeroMode.TEXT:
            return fmt.zero.custom_text
        if fmt.zero.mode == ZeroMode.DASH:
            return "-"
        if fmt.zero.mode == ZeroMode.HIDE:
            return ""

    suffix, divisor = _SCALE_PREVIEW[g.scale]
    magnitude = abs(Decimal(repr(float(value)))) / divisor
    if g.percentage:
        magnitude *= 100
        suffix += "%"

    s = _format_magnitude(magnitude, g) + suffix

    if g.currency_symbol:
        if g.currency_position == CurrencyPosition.PREFIX:
            s = f"{g.currency_symbol} {s}"
        else:
            s = f"{s} {g.currency_symbol}"

    if value < 0:
        if fmt.negative.mode in (NegativeMode.PAREN, NegativeMode.PAREN_COLOR):
            s = f"({s})"
        elif fmt.negative.mode == NegativeMode.MINUS:
            s = f"-{s}"

    if value > 0 and fmt.positive.padding:
        s += " "

    return s


def preview_text(fmt: NumberFormat, text: str) -> str:
    """Render a text sample through the text zone."""
    return f"{fmt.text.prefix}{text}{fmt.text.suffix}"


def zone_color(fmt: NumberFormat, value: float) -> Color | None:
    """The color tag the host would apply to ``value``, if any."""
    if value > 0:
        return fmt.positive.color
    if value < 0:
        if fmt.negative.mode in (NegativeMode.COLOR, NegativeMode.PAREN_COLOR):
            return fmt.negative.color or Color.RED
        return fmt.negative.color
    return None
