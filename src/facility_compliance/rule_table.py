"""
Rule table for equipment log validation.

Holds the field-level rules for each monitored system type. Tables are
immutable once built and injected into the validator, so alternate rule
sets can be used side by side.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

import yaml

from facility_compliance.errors import RuleTableError

if TYPE_CHECKING:
    from facility_compliance.config import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Rule:
    """A single field-level validation rule."""

    field: str
    min: float | None = None
    max: float | None = None
    required: bool = False
    expected_value: str | None = None  # equality check for text readings


class RuleTable:
    """
    Maps system types to their validation rules.

    Rule file example:
    ```yaml
    systems:
      boiler:
        - field: steamPressure
          max: 150
          required: true
        - field: waterLevel
          expected_value: Normal
          required: true
    ```
    """

    def __init__(self, rules_by_system: Mapping[str, Iterable[Rule]]) -> None:
        table: dict[str, tuple[Rule, ...]] = {}
        for system_type, rules in rules_by_system.items():
            key = system_type.strip().lower()
            if not key:
                raise ValueError("System type must not be empty")
            if key in table:
                raise ValueError(f"Duplicate system type: {system_type!r}")
            table[key] = tuple(rules)
        self._rules: Mapping[str, tuple[Rule, ...]] = MappingProxyType(table)

    @classmethod
    def default(cls) -> RuleTable:
        """Built-in rules for boilers, chillers and compressors."""
        return cls(
            {
                "boiler": [
                    Rule(field="steamPressure", max=150, required=True),
                    Rule(field="stackTemp", max=550, required=True),
                    Rule(field="waterLevel", expected_value="Normal", required=True),
                ],
                "chiller": [
                    Rule(field="suctionPressure", min=40, max=220, required=True),
                    Rule(field="condenserTemp", min=70, max=105, required=True),
                    Rule(field="oilTemp", max=190, required=True),
                ],
                "compressor": [
                    Rule(field="oilLevel", expected_value="Normal", required=True),
                ],
            }
        )

    @classmethod
    def from_file(cls, path: str | Path) -> RuleTable:
        """Load a rule table from YAML, falling back to defaults if absent."""
        rules_path = Path(path)
        if not rules_path.exists():
            logger.warning(f"Rule file not found: {rules_path}, using defaults")
            return cls.default()

        try:
            with rules_path.open() as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise RuleTableError(f"Invalid YAML in {rules_path}: {e}") from e

        table = cls.from_mapping(data)
        logger.info(
            f"Loaded {table.rule_count()} rules for "
            f"{len(table.system_types())} system types from {rules_path}"
        )
        return table

    @classmethod
    def from_mapping(cls, data: Any) -> RuleTable:
        """Build a rule table from parsed YAML/JSON data."""
        if not isinstance(data, dict) or not isinstance(data.get("systems"), dict):
            raise RuleTableError("Rule table must contain a 'systems' mapping")

        rules_by_system: dict[str, list[Rule]] = {}
        for system_type, rule_list in data["systems"].items():
            if not isinstance(rule_list, list):
                raise RuleTableError(f"Rules for '{system_type}' must be a list")
            rules_by_system[str(system_type)] = [
                _rule_from_dict(system_type, entry) for entry in rule_list
            ]
        try:
            return cls(rules_by_system)
        except ValueError as e:
            raise RuleTableError(str(e)) from e

    @classmethod
    def from_settings(cls, settings: Settings) -> RuleTable:
        if settings.rules_file:
            return cls.from_file(settings.rules_file)
        return cls.default()

    def rules_for(self, system_type: str) -> tuple[Rule, ...]:
        """Rules for a system type (case-insensitive); empty if unknown."""
        return self._rules.get(system_type.strip().lower(), ())

    def supports(self, system_type: str) -> bool:
        return system_type.strip().lower() in self._rules

    def system_types(self) -> list[str]:
        return sorted(self._rules)

    def rule_count(self) -> int:
        return sum(len(rules) for rules in self._rules.values())

    def get_rules(self) -> dict[str, list[dict[str, Any]]]:
        """Get rules as serializable dictionaries."""
        return {
            system_type: [
                {
                    "field": r.field,
                    "min": r.min,
                    "max": r.max,
                    "required": r.required,
                    "expected_value": r.expected_value,
                }
                for r in rules
            ]
            for system_type, rules in self._rules.items()
        }


def _rule_from_dict(system_type: str, entry: Any) -> Rule:
    if not isinstance(entry, dict) or not entry.get("field"):
        raise RuleTableError(f"Rule for '{system_type}' is missing 'field': {entry!r}")

    required = entry.get("required", False)
    if not isinstance(required, bool):
        raise RuleTableError(
            f"'required' in rule '{entry['field']}' for '{system_type}' "
            f"must be true or false, got {required!r}"
        )

    try:
        minimum = entry.get("min")
        maximum = entry.get("max")
        expected = entry.get("expected_value", entry.get("expectedValue"))
        return Rule(
            field=str(entry["field"]),
            min=None if minimum is None else float(minimum),
            max=None if maximum is None else float(maximum),
            required=required,
            expected_value=None if expected is None else str(expected),
        )
    except (TypeError, ValueError) as e:
        raise RuleTableError(
            f"Invalid bound in rule '{entry['field']}' for '{system_type}': {e}"
        ) from e
