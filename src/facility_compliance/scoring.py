"""
Compliance scoring.

Reduces findings to a 0-100 compliance score via severity-weighted
deduction, and maps scores to a status tier:

    risk_points = sum(weight(f.severity) for f in findings)
    score = round(max(0, 1 - risk_points / (total_checks * 5)) * 100)
"""

from __future__ import annotations

from collections.abc import Iterable

from facility_compliance.models import ComplianceStatus, Finding, Severity

SEVERITY_WEIGHTS: dict[Severity, int] = {
    Severity.MINOR: 1,
    Severity.MODERATE: 3,
    Severity.SEVERE: 5,
}
MAX_SEVERITY_WEIGHT = max(SEVERITY_WEIGHTS.values())

COMPLIANT_THRESHOLD = 90
REVIEW_THRESHOLD = 70


def risk_points(findings: Iterable[Finding]) -> int:
    return sum(SEVERITY_WEIGHTS[f.severity] for f in findings)


def compliance_score(total_checks: int, findings: Iterable[Finding]) -> int:
    """
    Compute the compliance score for a validation run.

    Args:
        total_checks: Number of rule checks performed
        findings: Findings produced by those checks

    Returns:
        Integer score in [0, 100]; 100 when no checks were performed
    """
    if total_checks < 0:
        raise ValueError("total_checks must be non-negative")
    if total_checks == 0:
        return 100

    max_risk = total_checks * MAX_SEVERITY_WEIGHT
    remaining = max(0, max_risk - risk_points(findings))
    # Integer round-half-up of remaining / max_risk * 100
    return (remaining * 200 + max_risk) // (2 * max_risk)


def classify_status(score: int) -> ComplianceStatus:
    """Map a compliance score to its status tier."""
    if score >= COMPLIANT_THRESHOLD:
        return ComplianceStatus.COMPLIANT
    if score >= REVIEW_THRESHOLD:
        return ComplianceStatus.REVIEW
    return ComplianceStatus.CRITICAL
