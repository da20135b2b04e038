"""Shared test fixtures for cellfmt tests."""

from __future__ import annotations

import os
from datetime import datetime

import pytest

from cellfmt.formats.settings import (
    Color,
    CurrencyPosition,
    DateTimeSettings,
    GlobalNumberSettings,
    HourFormat,
    MinuteFormat,
    NegativeMode,
    NegativeZone,
    NumberFormat,
    PositiveZone,
    ScaleMode,
    SecondFormat,
    TextZone,
    TimeMode,
    ZeroMode,
    ZeroZone,
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep CELLFMT_* variables from the developer's shell out of tests."""
    for key in list(os.environ):
        if key.startswith("CELLFMT_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def accounting_format() -> NumberFormat:
    """Two decimals, $ prefix, aligned positives, red parentheses, dash for zero."""
    return NumberFormat(
        global_=GlobalNumberSettings(
            decimals=2,
            separator=True,
            scale=ScaleMode.NONE,
            currency_symbol="$",
            currency_position=CurrencyPosition.PREFIX,
            integer_padding=1,
            percentage=False,
        ),
        positive=PositiveZone(color=None, padding=True),
        negative=NegativeZone(color=Color.RED, mode=NegativeMode.PAREN),
        zero=ZeroZone(mode=ZeroMode.DASH),
        text=TextZone(prefix="", suffix=""),
    )


@pytest.fixture
def elapsed_hours() -> DateTimeSettings:
    """[h]:mm duration without a date."""
    return DateTimeSettings(
        mode=TimeMode.DURATION,
        use_date=False,
        hour_format=HourFormat.HH,
        minute_format=MinuteFormat.MM,
        second_format=SecondFormat.NONE,
        hour_suffix=":",
        minute_suffix="",
    )


@pytest.fixture
def sample_date() -> datetime:
    return datetime(2025, 10, 25, 14, 30)
