"""
Log Validator.

Applies a rule table to a sequence of equipment log observations and
reports every rule violation as a Finding. Violations are data, not
exceptions: the validator never raises for malformed readings.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from facility_compliance.models import (
    FLAG_ABOVE_LIMIT,
    FLAG_BELOW_LIMIT,
    FLAG_NON_COMPLIANT,
    MISSING_VALUE,
    Finding,
    Scalar,
    Severity,
    expected_flag,
)
from facility_compliance.rule_table import Rule, RuleTable

logger = logging.getLogger(__name__)

# Readings beyond these multiples of a bound are severe
SEVERE_ABOVE_FACTOR = 1.2
SEVERE_BELOW_FACTOR = 0.8


class LogValidator:
    """Validates observations against a rule table."""

    def __init__(self, rule_table: RuleTable) -> None:
        self._rule_table = rule_table

    @property
    def rule_table(self) -> RuleTable:
        return self._rule_table

    def validate(
        self,
        observations: Iterable[Mapping[str, Scalar]],
        system_type: str,
    ) -> list[Finding]:
        """
        Validate observations for one system type.

        Findings follow observation order, then rule order. An unknown
        system type has no rules and yields no findings.

        Args:
            observations: Log entries mapping field name to reading
            system_type: System type key (case-insensitive)

        Returns:
            List of findings
        """
        rules = self._rule_table.rules_for(system_type)
        if not rules:
            logger.warning(f"No rules defined for system type: {system_type!r}")

        findings: list[Finding] = []
        for observation in observations:
            for rule in rules:
                findings.extend(_check_rule(rule, observation.get(rule.field)))
        return findings


def _check_rule(rule: Rule, value: Scalar) -> list[Finding]:
    missing = _is_missing(value)
    if missing and rule.required:
        return [
            Finding(
                field=rule.field,
                value=MISSING_VALUE,
                flag=FLAG_NON_COMPLIANT,
                severity=Severity.MODERATE,
            )
        ]

    findings: list[Finding] = []
    if not missing and _is_number(value):
        number = float(value)  # type: ignore[arg-type]
        # Both bounds are checked independently
        if rule.max is not None and number > rule.max:
            findings.append(
                Finding(
                    field=rule.field,
                    value=format_value(value),
                    flag=FLAG_ABOVE_LIMIT,
                    severity=(
                        Severity.SEVERE
                        if number > rule.max * SEVERE_ABOVE_FACTOR
                        else Severity.MODERATE
                    ),
                )
            )
        if rule.min is not None and number < rule.min:
            findings.append(
                Finding(
                    field=rule.field,
                    value=format_value(value),
                    flag=FLAG_BELOW_LIMIT,
                    severity=(
                        Severity.SEVERE
                        if number < rule.min * SEVERE_BELOW_FACTOR
                        else Severity.MODERATE
                    ),
                )
            )
    elif rule.expected_value is not None and value != rule.expected_value:
        findings.append(
            Finding(
                field=rule.field,
                value=MISSING_VALUE if missing else format_value(value),
                flag=expected_flag(rule.expected_value),
                severity=Severity.MINOR,
            )
        )
    return findings


def _is_missing(value: Scalar) -> bool:
    return value is None or value == ""


def _is_number(value: Scalar) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def format_value(value: Scalar) -> str:
    """Render a reading as text (612.0 -> "612")."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
