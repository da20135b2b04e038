"""Settings models consumed by the format compilers.

These Pydantic models are immutable value objects: the caller builds a new
one for every change and hands it to a compiler, preview, or validator.
Out-of-range numbers are clamped rather than rejected so that any settings
value compiles to some format code.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

MAX_DECIMALS = 10
MAX_CONDITIONAL_SECTIONS = 3


class Color(str, Enum):
    """The eight named colors the host accepts in a bracket tag."""

    BLACK = "Black"
    BLUE = "Blue"
    CYAN = "Cyan"
    GREEN = "Green"
    MAGENTA = "Magenta"
    RED = "Red"
    WHITE = "White"
    YELLOW = "Yellow"


class ScaleMode(str, Enum):
    NONE = "none"
    THOUSANDS = "thousands"  # one trailing comma, ÷1000
    MILLIONS = "millions"  # two trailing commas, ÷1,000,000


class CurrencyPosition(str, Enum):
    PREFIX = "prefix"
    SUFFIX = "suffix"


class NegativeMode(str, Enum):
    MINUS = "minus"
    COLOR = "color"
    PAREN = "paren"
    PAREN_COLOR = "paren_color"


class ZeroMode(str, Enum):
    NUMBER = "number"
    DASH = "dash"
    HIDE = "hide"
    TEXT = "text"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, use_enum_values=False)


# ── Number format ──


class GlobalNumberSettings(_Frozen):
    """Settings shared by every numeric zone."""

    decimals: int = 2
    separator: bool = True
    scale: ScaleMode = ScaleMode.NONE
    integer_padding: int = 1  # minimum integer digits
    currency_symbol: str = "$"
    currency_position: CurrencyPosition = CurrencyPosition.PREFIX
    percentage: bool = False

    @field_validator("decimals")
    @classmethod
    def clamp_decimals(cls, v: int) -> int:
        return min(max(v, 0), MAX_DECIMALS)

    @field_validator("integer_padding")
    @classmethod
    def clamp_padding(cls, v: int) -> int:
        return max(v, 1)


class PositiveZone(_Frozen):
    color: Color | None = None
    padding: bool = True  # reserve width with _) to line up with (negatives)


class NegativeZone(_Frozen):
    color: Color | None = Color.RED
    mode: NegativeMode = NegativeMode.PAREN


class ZeroZone(_Frozen):
    mode: ZeroMode = ZeroMode.DASH
    custom_text: str = "Free"  # only used when mode is TEXT


class TextZone(_Frozen):
    prefix: str = ""
    suffix: str = ""


class NumberFormat(_Frozen):
    """Global settings plus the four zones of a numeric format."""

    global_: GlobalNumberSettings = Field(default_factory=GlobalNumberSettings, alias="global")
    positive: PositiveZone = Field(default_factory=PositiveZone)
    negative: NegativeZone = Field(default_factory=NegativeZone)
    zero: ZeroZone = Field(default_factory=ZeroZone)
    text: TextZone = Field(default_factory=TextZone)

    model_config = ConfigDict(frozen=True, populate_by_name=True)


# ── Date / time / duration ──


class TimeMode(str, Enum):
    CLOCK = "clock"
    DURATION = "duration"


class DateOrder(str, Enum):
    DMY = "DMY"
    MDY = "MDY"
    YMD = "YMD"


class DateSeparator(str, Enum):
    SLASH = "/"
    DASH = "-"
    DOT = "."
    SPACE = " "
    COMMA = ", "
    CUSTOM = "custom"


class DayFormat(str, Enum):
    D = "d"
    DD = "dd"
    DDD = "ddd"
    DDDD = "dddd"


class MonthFormat(str, Enum):
    M = "m"
    MM = "mm"
    MMM = "mmm"
    MMMM = "mmmm"
    MMMMM = "mmmmm"


class YearFormat(str, Enum):
    YY = "yy"
    YYYY = "yyyy"


class DurationUnit(str, Enum):
    """Duration units, largest first."""

    HOURS = "hours"
    MINUTES = "minutes"
    SECONDS = "seconds"

    @property
    def rank(self) -> int:
        return _UNIT_RANK[self]


_UNIT_RANK = {DurationUnit.HOURS: 0, DurationUnit.MINUTES: 1, DurationUnit.SECONDS: 2}


class SmartDuration(str, Enum):
    NONE = "none"
    AUTO_SCALE = "auto_scale"
    COMPOSITE_TEXT = "composite_text"
    TIMER = "timer"


class HourFormat(str, Enum):
    NONE = "none"
    H = "h"
    HH = "hh"


class MinuteFormat(str, Enum):
    NONE = "none"
    M = "m"
    MM = "mm"


class SecondFormat(str, Enum):
    NONE = "none"
    S = "s"
    SS = "ss"
    SS_HUNDREDTHS = "ss.00"


class AmPmFormat(str, Enum):
    UPPER = "AM/PM"
    LOWER = "am/pm"
    UPPER_SHORT = "A/P"
    LOWER_SHORT = "a/p"


class DateTimeSettings(_Frozen):
    """Settings for a date, time-of-day, or elapsed-time format."""

    mode: TimeMode = TimeMode.CLOCK
    use_date: bool = True
    use_time: bool = True
    locale_code: str = ""

    date_order: DateOrder = DateOrder.DMY
    date_separator: DateSeparator = DateSeparator.SLASH
    custom_date_separator: str = "-"
    day_format: DayFormat = DayFormat.DD
    month_format: MonthFormat = MonthFormat.MM
    year_format: YearFormat = YearFormat.YYYY

    leading_unit: DurationUnit = DurationUnit.HOURS
    smart_duration: SmartDuration = SmartDuration.NONE

    hour_format: HourFormat = HourFormat.HH
    minute_format: MinuteFormat = MinuteFormat.MM
    second_format: SecondFormat = SecondFormat.NONE

    hour_suffix: str = ":"
    minute_suffix: str = ""
    second_suffix: str = ""

    use_12_hour: bool = False  # clock mode only
    am_pm_format: AmPmFormat = AmPmFormat.UPPER

    @property
    def is_duration(self) -> bool:
        return self.mode == TimeMode.DURATION

    @property
    def date_allowed(self) -> bool:
        """Calendar dates mix with durations only under a plain ``[h]`` lead."""
        if not self.is_duration:
            return True
        return self.smart_duration == SmartDuration.NONE and self.leading_unit == DurationUnit.HOURS


# ── Conditional ──


class ConditionOperator(str, Enum):
    GT = ">"
    GE = ">="
    LT = "<"
    LE = "<="
    EQ = "="
    NE = "<>"


class Condition(_Frozen):
    operator: ConditionOperator
    value: float


class ConditionalRule(_Frozen):
    """One section of a conditional format. No condition means "else"."""

    condition: Condition | None = None
    color: Color | None = None
    format: str = ""

    @property
    def is_else(self) -> bool:
        return self.condition is None


class ConditionalFormat(_Frozen):
    rules: tuple[ConditionalRule, ...] = ()
