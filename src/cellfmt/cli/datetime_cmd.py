"""cellfmt datetime: Build a date, time, or elapsed-time format code."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from cellfmt.cli.common import (
    VALID_OUTPUT_FORMATS,
    console,
    issues_payload,
    load_settings_file,
    print_code,
    print_issues,
)
from cellfmt.config import get_settings
from cellfmt.exceptions import CellFmtError
from cellfmt.formats.settings import (
    AmPmFormat,
    DateOrder,
    DateSeparator,
    DateTimeSettings,
    DayFormat,
    DurationUnit,
    HourFormat,
    MinuteFormat,
    MonthFormat,
    SecondFormat,
    SmartDuration,
    TimeMode,
    YearFormat,
)
from cellfmt.formats.temporal import compile_datetime_format, preview_datetime
from cellfmt.formats.validator import validate


def datetime_format(
    mode: Annotated[TimeMode, typer.Option("--mode", help="clock (time of day) or duration (elapsed)")] = TimeMode.CLOCK,
    use_date: Annotated[bool, typer.Option("--date/--no-date", help="Include calendar date tokens")] = True,
    use_time: Annotated[bool, typer.Option("--time/--no-time", help="Include time tokens")] = True,
    locale: Annotated[str, typer.Option("--locale", help="Locale code, e.g. en-US or [$-fr-FR]")] = "",
    order: Annotated[DateOrder, typer.Option("--order", help="Date component order")] = DateOrder.DMY,
    separator: Annotated[DateSeparator, typer.Option("--separator", help="Date separator")] = DateSeparator.SLASH,
    custom_separator: Annotated[str, typer.Option("--custom-separator", help="Separator when --separator custom")] = "-",
    day: Annotated[DayFormat, typer.Option("--day", help="Day token")] = DayFormat.DD,
    month: Annotated[MonthFormat, typer.Option("--month", help="Month token")] = MonthFormat.MM,
    year: Annotated[YearFormat, typer.Option("--year", help="Year token")] = YearFormat.YYYY,
    leading: Annotated[
        DurationUnit, typer.Option("--leading", help="Accumulating unit in duration mode")
    ] = DurationUnit.HOURS,
    smart: Annotated[SmartDuration, typer.Option("--smart", help="Smart duration preset")] = SmartDuration.NONE,
    hour: Annotated[HourFormat, typer.Option("--hour", help="Hour token")] = HourFormat.HH,
    minute: Annotated[MinuteFormat, typer.Option("--minute", help="Minute token")] = MinuteFormat.MM,
    second: Annotated[SecondFormat, typer.Option("--second", help="Second token")] = SecondFormat.NONE,
    hour_suffix: Annotated[str, typer.Option("--hour-suffix", help="Literal after hours")] = ":",
    minute_suffix: Annotated[str, typer.Option("--minute-suffix", help="Literal after minutes")] = "",
    second_suffix: Annotated[str, typer.Option("--second-suffix", help="Literal after seconds")] = "",
    twelve_hour: Annotated[bool, typer.Option("--twelve-hour/--no-twelve-hour", help="12-hour clock with AM/PM")] = False,
    am_pm: Annotated[AmPmFormat, typer.Option("--am-pm", help="AM/PM token variant")] = AmPmFormat.UPPER,
    sample_date: Annotated[
        datetime | None, typer.Option("--sample-date", help="Sample timestamp (ISO)")
    ] = None,
    seconds: Annotated[float | None, typer.Option("--seconds", help="Sample duration in seconds")] = None,
    from_file: Annotated[Path | None, typer.Option("--from-file", "-f", help="Date/time settings YAML file")] = None,
    output_format: Annotated[str, typer.Option("--format", help="Output: summary or json")] = "summary",
) -> None:
    """Compile date/time settings and preview a sample value."""
    try:
        if output_format not in VALID_OUTPUT_FORMATS:
            console.print(f"[red]Invalid format '{output_format}'. Choose from: {', '.join(VALID_OUTPUT_FORMATS)}[/red]")
            raise typer.Exit(1)

        if from_file:
            dt_settings = load_settings_file(from_file, DateTimeSettings)
        else:
            dt_settings = DateTimeSettings(
                mode=mode,
                use_date=use_date,
                use_time=use_time,
                locale_code=locale,
                date_order=order,
                date_separator=separator,
                custom_date_separator=custom_separator,
                day_format=day,
                month_format=month,
                year_format=year,
                leading_unit=leading,
                smart_duration=smart,
                hour_format=hour,
                minute_format=minute,
                second_format=second,
                hour_suffix=hour_suffix,
                minute_suffix=minute_suffix,
                second_suffix=second_suffix,
                use_12_hour=twelve_hour,
                am_pm_format=am_pm,
            )

        settings = get_settings()
        when = sample_date or settings.sample_date
        elapsed = seconds if seconds is not None else settings.sample_duration_seconds

        code = compile_datetime_format(dt_settings)
        issues = validate(code)
        result = preview_datetime(dt_settings, when, elapsed)
        sample_label = f"{elapsed:g} s" if dt_settings.is_duration else when.isoformat(sep=" ")

        if output_format == "json":
            payload = {
                "code": code,
                "sample": sample_label,
                "preview": result,
                "issues": issues_payload(issues),
            }
            console.print_json(json.dumps(payload))
            return

        print_code(code)

        table = Table(title="Live Preview")
        table.add_column("Sample Input", style="dim")
        table.add_column("Preview Result", justify="right", style="bold")
        table.add_row(sample_label, Text(result))
        console.print(table)

        if dt_settings.use_date and not dt_settings.date_allowed:
            console.print(
                "[yellow]Calendar dates are disabled: they only combine with an \\[h] "
                "leading unit and no smart preset.[/yellow]"
            )

        print_issues(issues)

    except CellFmtError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e
