"""Advisory checks on compiled format codes.

Flags bracket tags the host will reject and constructs custom formats
cannot express (concatenation, arithmetic). Issues never alter or block
the code; callers decide whether to show them.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict

from cellfmt.formats.settings import MAX_CONDITIONAL_SECTIONS, Color, ConditionalFormat, ConditionalRule
from cellfmt.formats.tokens import strip_literals

logger = logging.getLogger(__name__)

KNOWN_COLORS = frozenset(c.value.lower() for c in Color)
TIME_UNIT_TAGS = frozenset({"h", "hh", "m", "mm", "s", "ss", "d"})

_TAG = re.compile(r"\[([^\[\]]*)\]")
_CONDITION_TAG = re.compile(r"^(<>|>=|<=|>|<|=)\s*-?\d+(\.\d+)?$")
_ARITHMETIC = re.compile(r"[0-9]\*24")


class ValidationIssue(BaseModel):
    """A single advisory finding, with the offending span when known."""

    model_config = ConfigDict(frozen=True)

    message: str
    tag: str | None = None
    span: tuple[int, int] | None = None


def _is_known_tag(content: str) -> bool:
    lowered = content.strip().lower()
    if lowered in KNOWN_COLORS or lowered in TIME_UNIT_TAGS:
        return True
    # Structural tags: conditions and locale/currency codes
    return bool(_CONDITION_TAG.match(content.strip())) or content.startswith("$")


def validate(compiled: str) -> list[ValidationIssue]:
    """Scan a compiled code for tags and operators the host does not support."""
    issues: list[ValidationIssue] = []
    bare = strip_literals(compiled)

    for m in _TAG.finditer(bare):
        if _is_known_tag(m.group(1)):
            continue
        tag = m.group(0)
        issues.append(ValidationIssue(
            message=(
                f'Invalid tag "{tag}". Only standard 8 colors (e.g. [Red]) '
                "or time units (e.g. [h]) are allowed."
            ),
            tag=tag,
            span=m.span(),
        ))

    amp = bare.find("&")
    if amp != -1:
        issues.append(ValidationIssue(
            message='Character "&" detected. Custom formats cannot perform concatenation.',
            span=(amp, amp + 1),
        ))

    calc = _ARITHMETIC.search(bare)
    if calc:
        issues.append(ValidationIssue(
            message="Calculations (like *24) are not supported in custom formats.",
            span=calc.span(),
        ))

    logger.debug("Validated %r: %d issue(s)", compiled, len(issues))
    return issues


def validate_rules(rules: ConditionalFormat | Iterable[ConditionalRule]) -> list[ValidationIssue]:
    """Check a conditional rule list against the host's section limits."""
    if isinstance(rules, ConditionalFormat):
        rules = rules.rules
    rules = list(rules)
    issues: list[ValidationIssue] = []

    if len(rules) > MAX_CONDITIONAL_SECTIONS:
        issues.append(ValidationIssue(
            message=(
                f"{len(rules)} rules given; conditional formats support at most "
                f"{MAX_CONDITIONAL_SECTIONS} sections. Extra rules are dropped."
            ),
        ))

    else_positions = [i for i, r in enumerate(rules) if r.is_else]
    if len(else_positions) > 1:
        issues.append(ValidationIssue(message="Only one rule may omit its condition (the else rule)."))
    if else_positions and else_positions[0] != len(rules) - 1:
        issues.append(ValidationIssue(message="The else rule (no condition) must be the last rule."))

    return issues
