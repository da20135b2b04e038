"""cellfmt conditional: Build a rule-based (conditional) format code."""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from cellfmt.cli.common import (
    VALID_OUTPUT_FORMATS,
    console,
    issues_payload,
    load_settings_file,
    print_code,
    print_issues,
)
from cellfmt.exceptions import CellFmtError, RuleParseError
from cellfmt.formats.conditional import compile_conditional_format
from cellfmt.formats.settings import Color, Condition, ConditionalFormat, ConditionalRule
from cellfmt.formats.validator import validate, validate_rules

_CONDITION = re.compile(r"^(<>|>=|<=|>|<|=)\s*(-?\d+(?:\.\d+)?)$")
_COLORS = {c.value.lower(): c for c in Color}


def parse_rule(text: str) -> ConditionalRule:
    """Parse ``CONDITION|COLOR|FORMAT`` into a rule.

    CONDITION (e.g. ``>=100``) and COLOR may be empty; an empty condition
    makes the else rule. FORMAT is everything after the second ``|``.
    """
    parts = text.split("|", 2)
    if len(parts) != 3:
        raise RuleParseError(text, "expected CONDITION|COLOR|FORMAT")
    cond_text, color_text, fragment = (p.strip() for p in parts)

    condition = None
    if cond_text:
        m = _CONDITION.match(cond_text)
        if not m:
            raise RuleParseError(text, f"invalid condition '{cond_text}'")
        condition = Condition(operator=m.group(1), value=float(m.group(2)))

    color = None
    if color_text:
        color = _COLORS.get(color_text.lower())
        if color is None:
            raise RuleParseError(text, f"unknown color '{color_text}'")

    return ConditionalRule(condition=condition, color=color, format=fragment)


def conditional(
    rule: Annotated[
        list[str] | None,
        typer.Option("--rule", "-r", help='Rule as CONDITION|COLOR|FORMAT, e.g. ">=100|Green|0.0"'),
    ] = None,
    from_file: Annotated[Path | None, typer.Option("--from-file", "-f", help="Conditional settings YAML file")] = None,
    output_format: Annotated[str, typer.Option("--format", help="Output: summary or json")] = "summary",
) -> None:
    """Compile up to three conditional rules into one format code.

    The host evaluates conditional codes itself, so there is no preview;
    paste the code into the custom format dialog to check it.
    """
    try:
        if output_format not in VALID_OUTPUT_FORMATS:
            console.print(f"[red]Invalid format '{output_format}'. Choose from: {', '.join(VALID_OUTPUT_FORMATS)}[/red]")
            raise typer.Exit(1)

        if from_file:
            fmt = load_settings_file(from_file, ConditionalFormat)
        elif rule:
            fmt = ConditionalFormat(rules=tuple(parse_rule(r) for r in rule))
        else:
            console.print("[yellow]Specify --rule or --from-file[/yellow]")
            raise typer.Exit(1)

        code = compile_conditional_format(fmt)
        issues = validate_rules(fmt) + validate(code)

        if output_format == "json":
            console.print_json(json.dumps({"code": code, "issues": issues_payload(issues)}))
            return

        print_code(code)
        print_issues(issues)

    except CellFmtError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e
