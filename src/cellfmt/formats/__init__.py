"""Format-code compilers, previews, and validation."""

from cellfmt.formats.conditional import compile_conditional_format
from cellfmt.formats.number import compile_number_format, preview_number, preview_text, zone_color
from cellfmt.formats.temporal import compile_datetime_format, preview_datetime, resolve_plan
from cellfmt.formats.validator import ValidationIssue, validate, validate_rules

__all__ = [
    "ValidationIssue",
    "compile_conditional_format",
    "compile_datetime_format",
    "compile_number_format",
    "preview_datetime",
    "preview_number",
    "preview_text",
    "resolve_plan",
    "validate",
    "validate_rules",
    "zone_color",
]
