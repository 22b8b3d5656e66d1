"""
Violation Risk Engine.

Aggregates the violations recorded against one subject into a risk
profile: average severity, risk category, cost impact, ethical integrity
index, and derived work-order and equipment recommendations.

    average = mean(v.percent)            (0 when there are no violations)
    risk_cost_impact = average * salary
    ethical_integrity_index = clamp((1 - average) * 100, 0, 100)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Literal

from facility_compliance.models import (
    EquipmentIntelligence,
    RiskCategory,
    RiskProfile,
    SubjectInfo,
    Violation,
    WorkOrderSuggestion,
)

if TYPE_CHECKING:
    from facility_compliance.config import Settings

logger = logging.getLogger(__name__)

CategoryBasis = Literal["average", "cumulative"]

# Average-severity bands
HIGH_SEVERITY = 0.65
LOW_SEVERITY = 0.35

# Cumulative percent-sum bands
CUMULATIVE_HIGH = 1.05
CUMULATIVE_MEDIUM = 0.69
CUMULATIVE_WARNING = 0.35

# First match wins (case-sensitive substring of the violation category)
DEPARTMENT_RULES: tuple[tuple[str, str], ...] = (
    ("Equipment", "Maintenance"),
    ("Safety", "EHS"),
    ("Compliance", "Compliance"),
)
DEFAULT_DEPARTMENT = "General"

EQUIPMENT_SUGGESTIONS: tuple[str, ...] = (
    "Schedule a full inspection of the affected equipment",
    "Review operating and maintenance logs for recurring faults",
    "Consider a retrofit or replacement if the fault recurs",
    "Apply the ATI protocol: Analyze -> Tune -> Improve",
)


class ViolationRiskEngine:
    """
    Builds risk profiles from violation records.

    The risk category is keyed on average severity by default. The
    cumulative rule (sum of violation percents) is kept for sites that
    still report against it and must be selected explicitly.
    """

    def __init__(self, category_basis: CategoryBasis = "average") -> None:
        if category_basis not in ("average", "cumulative"):
            raise ValueError(f"Unknown risk category basis: {category_basis!r}")
        self.category_basis: CategoryBasis = category_basis

    @classmethod
    def from_settings(cls, settings: Settings) -> ViolationRiskEngine:
        return cls(category_basis=settings.risk_category_basis)

    def assess(
        self,
        violations: Iterable[Violation],
        salary: float,
        subject: SubjectInfo | None = None,
    ) -> RiskProfile:
        """
        Compute the risk profile for one subject.

        Args:
            violations: Violations recorded against the subject
            salary: Subject's salary, used for the cost impact estimate
            subject: Optional subject metadata carried into the profile

        Returns:
            RiskProfile
        """
        if salary < 0:
            raise ValueError("salary must be non-negative")

        items = tuple(violations)
        total_percent = sum(v.percent for v in items)
        average = total_percent / len(items) if items else 0.0

        if self.category_basis == "cumulative":
            category = classify_cumulative_percent(total_percent)
        else:
            category = classify_average_severity(average)

        ethical_index = min(100.0, max(0.0, (1 - average) * 100))

        if subject is not None:
            logger.info(
                f"Risk profile for {subject.employee_id}: {len(items)} violations, "
                f"average={average:.3f}, category={category.value}"
            )

        return RiskProfile(
            subject=subject,
            salary=salary,
            violations=items,
            total_violations=len(items),
            total_violation_percent=round(total_percent, 4),
            average_severity=round(average, 4),
            category_basis=self.category_basis,
            risk_category=category,
            risk_cost_impact=round(average * salary, 2),
            ethical_integrity_index=round(ethical_index, 2),
            work_order_suggestions=tuple(work_order_for(v) for v in items),
            equipment_intelligence=tuple(
                EquipmentIntelligence(violation=v.type, suggestions=EQUIPMENT_SUGGESTIONS)
                for v in items
                if "Equipment" in v.category
            ),
        )


def classify_average_severity(average: float) -> RiskCategory:
    if average > HIGH_SEVERITY:
        return RiskCategory.HIGH_RISK
    if average >= LOW_SEVERITY:
        return RiskCategory.MODERATE_RISK
    return RiskCategory.GOOD_STANDING


def classify_cumulative_percent(total: float) -> RiskCategory:
    if total >= CUMULATIVE_HIGH:
        return RiskCategory.HIGH_RISK
    if total >= CUMULATIVE_MEDIUM:
        return RiskCategory.MEDIUM_RISK
    if total >= CUMULATIVE_WARNING:
        return RiskCategory.WARNING
    return RiskCategory.GOOD_STANDING


def work_order_priority(percent: float) -> Literal["Low", "Medium", "High"]:
    if percent > HIGH_SEVERITY:
        return "High"
    if percent < LOW_SEVERITY:
        return "Low"
    return "Medium"


def department_for(category: str) -> str:
    for keyword, department in DEPARTMENT_RULES:
        if keyword in category:
            return department
    return DEFAULT_DEPARTMENT


def work_order_for(violation: Violation) -> WorkOrderSuggestion:
    return WorkOrderSuggestion(
        violation=violation.type,
        code=violation.code,
        department=department_for(violation.category),
        priority=work_order_priority(violation.percent),
        action=violation.description or f"Review and correct: {violation.type}",
    )
