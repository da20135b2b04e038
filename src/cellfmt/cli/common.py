"""Output and file helpers shared by the CLI commands."""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from cellfmt.exceptions import SettingsFileError
from cellfmt.formats.serializer import FormatSerializer, SettingsModel
from cellfmt.formats.settings import Color
from cellfmt.formats.validator import ValidationIssue

console = Console()

VALID_OUTPUT_FORMATS = ("summary", "json")


def load_settings_file(path: Path, expected: type) -> SettingsModel:
    """Read a YAML settings document and check it holds ``expected`` settings."""
    if not path.exists():
        raise SettingsFileError("File not found", str(path))
    model = FormatSerializer.from_yaml(path.read_text(encoding="utf-8"), source=str(path))
    if not isinstance(model, expected):
        raise SettingsFileError(
            f"Expected {expected.__name__} settings, got {FormatSerializer.kind_of(model)}",
            str(path),
        )
    return model


def color_style(color: Color | None) -> str:
    return color.value.lower() if color else ""


def print_code(code: str) -> None:
    body = Text(code) if code else Text("(empty)", style="dim")
    console.print(Panel(body, title="Format Code", expand=False))


def print_issues(issues: list[ValidationIssue], title: str = "Potential Errors Detected") -> None:
    if not issues:
        return
    console.print(f"\n[bold red]{title}[/bold red]")
    for issue in issues:
        console.print(f"  - {issue.message}", markup=False)


def issues_payload(issues: list[ValidationIssue]) -> list[dict]:
    return [issue.model_dump(mode="json") for issue in issues]
