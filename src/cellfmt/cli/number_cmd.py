"""cellfmt number: Build a four-zone numeric format code."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from cellfmt.cli.common import (
    VALID_OUTPUT_FORMATS,
    color_style,
    console,
    issues_payload,
    load_settings_file,
    print_code,
    print_issues,
)
from cellfmt.config import get_settings
from cellfmt.exceptions import CellFmtError
from cellfmt.formats.number import compile_number_format, preview_number, preview_text, zone_color
from cellfmt.formats.settings import (
    Color,
    CurrencyPosition,
    GlobalNumberSettings,
    NegativeMode,
    NegativeZone,
    NumberFormat,
    PositiveZone,
    ScaleMode,
    TextZone,
    ZeroMode,
    ZeroZone,
)
from cellfmt.formats.validator import validate


def number(
    decimals: Annotated[int, typer.Option("--decimals", "-d", help="Decimal places (0-10)")] = 2,
    separator: Annotated[bool, typer.Option("--separator/--no-separator", help="Thousands separator")] = True,
    scale: Annotated[ScaleMode, typer.Option("--scale", help="Display scale")] = ScaleMode.NONE,
    padding: Annotated[int, typer.Option("--padding", help="Minimum integer digits")] = 1,
    currency: Annotated[str, typer.Option("--currency", help="Currency symbol (empty for none)")] = "$",
    currency_position: Annotated[
        CurrencyPosition, typer.Option("--currency-position", help="Currency placement")
    ] = CurrencyPosition.PREFIX,
    percent: Annotated[bool, typer.Option("--percent/--no-percent", help="Format as percentage")] = False,
    positive_color: Annotated[
        Color | None, typer.Option("--positive-color", case_sensitive=False, help="Positive zone color")
    ] = None,
    align: Annotated[bool, typer.Option("--align/--no-align", help="Reserve width for ( on positives")] = True,
    negative_color: Annotated[
        Color | None, typer.Option("--negative-color", case_sensitive=False, help="Negative zone color")
    ] = None,
    negative_mode: Annotated[
        NegativeMode, typer.Option("--negative-mode", help="Negative presentation")
    ] = NegativeMode.PAREN_COLOR,
    zero_mode: Annotated[ZeroMode, typer.Option("--zero-mode", help="Zero presentation")] = ZeroMode.DASH,
    zero_text: Annotated[str, typer.Option("--zero-text", help="Text shown for zero in text mode")] = "Free",
    text_prefix: Annotated[str, typer.Option("--text-prefix", help="Literal before text input")] = "",
    text_suffix: Annotated[str, typer.Option("--text-suffix", help="Literal after text input")] = "",
    value: Annotated[
        list[float] | None, typer.Option("--value", help="Extra sample values to preview")
    ] = None,
    from_file: Annotated[Path | None, typer.Option("--from-file", "-f", help="Number settings YAML file")] = None,
    output_format: Annotated[str, typer.Option("--format", help="Output: summary or json")] = "summary",
) -> None:
    """Compile number settings and preview sample values.

    Settings come from the options, or from a YAML document when
    --from-file is given.
    """
    try:
        if output_format not in VALID_OUTPUT_FORMATS:
            console.print(f"[red]Invalid format '{output_format}'. Choose from: {', '.join(VALID_OUTPUT_FORMATS)}[/red]")
            raise typer.Exit(1)

        if from_file:
            fmt = load_settings_file(from_file, NumberFormat)
        else:
            fmt = NumberFormat(
                global_=GlobalNumberSettings(
                    decimals=decimals,
                    separator=separator,
                    scale=scale,
                    integer_padding=padding,
                    currency_symbol=currency,
                    currency_position=currency_position,
                    percentage=percent,
                ),
                positive=PositiveZone(color=positive_color, padding=align),
                negative=NegativeZone(color=negative_color, mode=negative_mode),
                zero=ZeroZone(mode=zero_mode, custom_text=zero_text),
                text=TextZone(prefix=text_prefix, suffix=text_suffix),
            )

        settings = get_settings()
        code = compile_number_format(fmt)
        issues = validate(code)

        samples = [
            ("Positive", settings.sample_positive),
            ("Negative", settings.sample_negative),
            ("Zero", 0.0),
        ]
        samples.extend(("Sample", v) for v in value or [])

        if output_format == "json":
            payload = {
                "code": code,
                "preview": [
                    {"zone": zone, "sample": sample, "result": preview_number(fmt, sample)}
                    for zone, sample in samples
                ]
                + [{"zone": "Text", "sample": settings.sample_text,
                    "result": preview_text(fmt, settings.sample_text)}],
                "issues": issues_payload(issues),
            }
            console.print_json(json.dumps(payload))
            return

        print_code(code)

        table = Table(title="Live Preview")
        table.add_column("Zone", style="bold")
        table.add_column("Sample", justify="right", style="dim")
        table.add_column("Result", justify="right")
        for zone, sample in samples:
            result = Text(preview_number(fmt, sample), style=color_style(zone_color(fmt, sample)))
            table.add_row(zone, f"{sample:g}", result)
        table.add_row("Text", settings.sample_text, Text(preview_text(fmt, settings.sample_text)))
        console.print(table)

        print_issues(issues)

    except CellFmtError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e
