"""Conditional (rule-based) format codes.

The host allows at most three sections: two explicit conditions and an
"else" section. Each section is ``[op value][Color]fragment``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from cellfmt.formats.settings import MAX_CONDITIONAL_SECTIONS, ConditionalFormat, ConditionalRule
from cellfmt.formats.tokens import color_tag, condition_tag

logger = logging.getLogger(__name__)


def _compile_rule(rule: ConditionalRule) -> str:
    part = ""
    if rule.condition is not None:
        part += condition_tag(rule.condition.operator, rule.condition.value)
    part += color_tag(rule.color)
    return part + rule.format


def compile_conditional_format(rules: ConditionalFormat | Iterable[ConditionalRule]) -> str:
    """Compile an ordered rule list into a ``;``-joined conditional code.

    Rules with neither a condition nor a format fragment are skipped.
    Fragments are emitted verbatim. Order is kept as given, and only the
    first three surviving rules are compiled.
    """
    if isinstance(rules, ConditionalFormat):
        rules = rules.rules

    sections = [_compile_rule(r) for r in rules if r.condition is not None or r.format]
    if len(sections) > MAX_CONDITIONAL_SECTIONS:
        logger.warning(
            "Conditional format has %d sections; keeping the first %d",
            len(sections), MAX_CONDITIONAL_SECTIONS,
        )
        sections = sections[:MAX_CONDITIONAL_SECTIONS]

    code = ";".join(sections)
    logger.debug("Compiled conditional format: %s", code)
    return code
