"""Serialize format settings to/from YAML documents.

A document names its settings kind and carries the settings body::

    version: "1.0"
    kind: number
    settings:
      global: {decimals: 2, currency_symbol: "$"}
      negative: {mode: paren, color: Red}
"""

from __future__ import annotations

from typing import Any, Union

import yaml
from pydantic import BaseModel, ValidationError

from cellfmt.exceptions import SettingsFileError
from cellfmt.formats.settings import ConditionalFormat, DateTimeSettings, NumberFormat

SettingsModel = Union[NumberFormat, DateTimeSettings, ConditionalFormat]

_KINDS: dict[str, type[BaseModel]] = {
    "number": NumberFormat,
    "datetime": DateTimeSettings,
    "conditional": ConditionalFormat,
}


class FormatSerializer:
    """YAML round-tripping for the three settings kinds."""

    @staticmethod
    def kind_of(model: SettingsModel) -> str:
        for kind, cls in _KINDS.items():
            if isinstance(model, cls):
                return kind
        raise SettingsFileError(f"Unsupported settings type: {type(model).__name__}")

    @staticmethod
    def to_dict(model: SettingsModel) -> dict[str, Any]:
        return {
            "version": "1.0",
            "kind": FormatSerializer.kind_of(model),
            "settings": model.model_dump(mode="json", by_alias=True),
        }

    @staticmethod
    def to_yaml(model: SettingsModel) -> str:
        """Serialize a settings model for version control."""
        return yaml.safe_dump(
            FormatSerializer.to_dict(model), sort_keys=False, allow_unicode=True
        )

    @staticmethod
    def from_dict(data: Any, source: str | None = None) -> SettingsModel:
        if not data or not isinstance(data, dict):
            raise SettingsFileError("Invalid document: empty or not a mapping", source)

        kind = data.get("kind")
        if kind not in _KINDS:
            raise SettingsFileError(
                f"Unknown kind {kind!r}. Choose from: {', '.join(_KINDS)}", source
            )

        body = data.get("settings") or {}
        try:
            return _KINDS[kind].model_validate(body)
        except ValidationError as e:
            raise SettingsFileError(f"Invalid {kind} settings: {e}", source) from e

    @staticmethod
    def from_yaml(yaml_str: str, source: str | None = None) -> SettingsModel:
        """Deserialize a settings model from YAML."""
        try:
            data = yaml.safe_load(yaml_str)
        except yaml.YAMLError as e:
            raise SettingsFileError(f"Invalid YAML: {e}", source) from e
        return FormatSerializer.from_dict(data, source)
