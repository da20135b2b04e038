"""Custom exception hierarchy for cellfmt."""

from __future__ import annotations


class CellFmtError(Exception):
    """Base exception for all cellfmt errors."""


class ConfigurationError(CellFmtError):
    """Invalid or missing configuration."""


class SettingsFileError(CellFmtError):
    """A settings document could not be read or has an unknown kind."""

    def __init__(self, message: str, source: str | None = None):
        self.source = source
        if source:
            message = f"{source}: {message}"
        super().__init__(message)


class RuleParseError(CellFmtError):
    """A conditional rule string could not be parsed."""

    def __init__(self, rule: str, reason: str):
        self.rule = rule
        self.reason = reason
        super().__init__(f"Cannot parse rule '{rule}': {reason}")
