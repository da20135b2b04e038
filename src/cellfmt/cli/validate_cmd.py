"""cellfmt validate: Check an existing format code for unsupported constructs."""

from __future__ import annotations

import json
from typing import Annotated

import typer

from cellfmt.cli.common import VALID_OUTPUT_FORMATS, console, issues_payload, print_issues
from cellfmt.formats.validator import validate


def validate_code(
    code: Annotated[str, typer.Argument(help="Format code to check")],
    strict: Annotated[bool, typer.Option("--strict", help="Exit with status 1 when issues are found")] = False,
    output_format: Annotated[str, typer.Option("--format", help="Output: summary or json")] = "summary",
) -> None:
    """Report tags and operators the host will not accept."""
    if output_format not in VALID_OUTPUT_FORMATS:
        console.print(f"[red]Invalid format '{output_format}'. Choose from: {', '.join(VALID_OUTPUT_FORMATS)}[/red]")
        raise typer.Exit(1)

    issues = validate(code)

    if output_format == "json":
        console.print_json(json.dumps({"code": code, "issues": issues_payload(issues)}))
    elif issues:
        print_issues(issues)
    else:
        console.print("[green]No issues found.[/green]")

    if strict and issues:
        raise typer.Exit(1)
