"""Tests for the settings models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from cellfmt.formats.settings import (
    MAX_DECIMALS,
    Condition,
    ConditionalRule,
    DateTimeSettings,
    DurationUnit,
    GlobalNumberSettings,
    NegativeMode,
    NumberFormat,
    SmartDuration,
    TimeMode,
)


class TestGlobalNumberSettings:
    def test_defaults(self):
        g = GlobalNumberSettings()
        assert g.decimals == 2
        assert g.separator is True
        assert g.currency_symbol == "$"
        assert g.integer_padding == 1

    @pytest.mark.parametrize("given, expected", [(-1, 0), (0, 0), (4, 4), (MAX_DECIMALS + 5, MAX_DECIMALS)])
    def test_decimals_clamped(self, given, expected):
        assert GlobalNumberSettings(decimals=given).decimals == expected

    def test_padding_clamped(self):
        assert GlobalNumberSettings(integer_padding=-2).integer_padding == 1

    def test_frozen(self):
        g = GlobalNumberSettings()
        with pytest.raises(ValidationError):
            g.decimals = 3


class TestNumberFormat:
    def test_global_alias(self):
        fmt = NumberFormat.model_validate({"global": {"decimals": 0}})
        assert fmt.global_.decimals == 0

    def test_field_name_accepted(self):
        fmt = NumberFormat(global_=GlobalNumberSettings(decimals=4))
        assert fmt.global_.decimals == 4

    def test_dump_uses_alias(self):
        assert "global" in NumberFormat().model_dump(by_alias=True)

    def test_enum_values_parsed(self):
        fmt = NumberFormat.model_validate({"negative": {"mode": "minus", "color": None}})
        assert fmt.negative.mode == NegativeMode.MINUS
        assert fmt.negative.color is None

    def test_unknown_color_rejected(self):
        with pytest.raises(ValidationError):
            NumberFormat.model_validate({"positive": {"color": "Purple"}})


class TestDateTimeSettings:
    def test_clock_always_allows_date(self):
        assert DateTimeSettings(leading_unit=DurationUnit.SECONDS).date_allowed

    def test_duration_hours_allows_date(self):
        assert DateTimeSettings(mode=TimeMode.DURATION).date_allowed

    @pytest.mark.parametrize(
        "overrides",
        [{"leading_unit": DurationUnit.MINUTES}, {"smart_duration": SmartDuration.TIMER}],
    )
    def test_duration_conflicts_disallow_date(self, overrides):
        assert not DateTimeSettings(mode=TimeMode.DURATION, **overrides).date_allowed

    def test_unit_rank(self):
        assert DurationUnit.HOURS.rank < DurationUnit.MINUTES.rank < DurationUnit.SECONDS.rank


class TestConditionalRule:
    def test_else_rule(self):
        assert ConditionalRule(format="0").is_else
        assert not ConditionalRule(condition=Condition(operator=">", value=1)).is_else

    def test_bad_operator(self):
        with pytest.raises(ValidationError):
            Condition(operator="=>", value=1)
