"""
Compliance Engine.

Runs the rule-based pipeline for one batch of equipment logs:
1. Validate observations against the system's rule set
2. Score findings into a 0-100 compliance score
3. Classify the score into a status tier
4. Derive recommended actions from the findings
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING

from facility_compliance.models import (
    FLAG_ABOVE_LIMIT,
    FLAG_BELOW_LIMIT,
    FLAG_NON_COMPLIANT,
    ComplianceReport,
    ComplianceStatus,
    Finding,
    Scalar,
    Severity,
)
from facility_compliance.rule_table import RuleTable
from facility_compliance.scoring import classify_status, compliance_score
from facility_compliance.validator import LogValidator

if TYPE_CHECKING:
    from facility_compliance.config import Settings

logger = logging.getLogger(__name__)

STATUS_PRIORITY = {
    ComplianceStatus.COMPLIANT: "Low",
    ComplianceStatus.REVIEW: "Medium",
    ComplianceStatus.CRITICAL: "High",
}


class ComplianceEngine:
    """Produces compliance reports from equipment logs."""

    def __init__(self, rule_table: RuleTable | None = None) -> None:
        self._rule_table = rule_table if rule_table is not None else RuleTable.default()
        self._validator = LogValidator(self._rule_table)

    @classmethod
    def from_settings(cls, settings: Settings) -> ComplianceEngine:
        return cls(RuleTable.from_settings(settings))

    @property
    def rule_table(self) -> RuleTable:
        return self._rule_table

    def assess(
        self,
        observations: Iterable[Mapping[str, Scalar]],
        system_type: str,
        system: str | None = None,
        date_range: str | None = None,
    ) -> ComplianceReport:
        """
        Assess a batch of log entries for one system.

        Args:
            observations: Log entries mapping field name to reading
            system_type: System type key, e.g. "boiler"
            system: Display name of the system (defaults to system_type)
            date_range: Period covered by the logs

        Returns:
            ComplianceReport with findings, score and status
        """
        entries = list(observations)
        rules = self._rule_table.rules_for(system_type)
        findings = self._validator.validate(entries, system_type)

        total_checks = len(entries) * len(rules)
        score = compliance_score(total_checks, findings)
        status = classify_status(score)

        logger.info(
            f"Assessed {len(entries)} {system_type} log entries: "
            f"{len(findings)} findings, score={score}, status={status.value}"
        )

        return ComplianceReport(
            system=system or system_type,
            system_type=system_type,
            date_range=date_range,
            supported_system=bool(rules),
            total_checks=total_checks,
            compliance_score=score,
            status=status,
            findings=tuple(findings),
            recommended_actions=tuple(recommend_actions(findings)),
            total_issues=len(findings),
            severe_count=sum(1 for f in findings if f.severity == Severity.SEVERE),
            overall_priority=STATUS_PRIORITY[status],
        )


def recommend_actions(findings: list[Finding]) -> list[str]:
    """
    Derive one recommended action per distinct (field, flag).

    Severe findings put an escalation action first. An empty finding list
    yields a single routine-monitoring action.
    """
    actions: list[str] = []
    if any(f.severity == Severity.SEVERE for f in findings):
        actions.append("Escalate severe findings for inspection within 24 hours")

    seen: set[tuple[str, str]] = set()
    for finding in findings:
        key = (finding.field, finding.flag)
        if key in seen:
            continue
        seen.add(key)
        actions.append(_action_for(finding))

    if not actions:
        actions.append("No deviations found; continue routine log monitoring")
    return actions


def _action_for(finding: Finding) -> str:
    if finding.flag == FLAG_NON_COMPLIANT:
        return f"Record the missing {finding.field} reading and verify the logging procedure"
    if finding.flag == FLAG_ABOVE_LIMIT:
        return f"Investigate high {finding.field} readings and schedule a maintenance review"
    if finding.flag == FLAG_BELOW_LIMIT:
        return f"Investigate low {finding.field} readings and check supply conditions"
    return f"Restore {finding.field} to its required condition ({finding.flag})"


def assess_logs(
    observations: Iterable[Mapping[str, Scalar]], system_type: str
) -> ComplianceReport:
    """Convenience function using the built-in rule table."""
    return ComplianceEngine().assess(observations, system_type)
