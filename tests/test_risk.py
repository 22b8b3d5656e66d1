"""Tests for violation risk profiles."""

import pytest
from pydantic import ValidationError

from facility_compliance.config import Settings
from facility_compliance.models import RiskCategory, SubjectInfo, Violation
from facility_compliance.risk import (
    EQUIPMENT_SUGGESTIONS,
    ViolationRiskEngine,
    classify_average_severity,
    classify_cumulative_percent,
    department_for,
    work_order_priority,
)


def _violation(percent: float, category: str = "") -> Violation:
    return Violation(type="Procedure Violation", percent=percent, category=category)


class TestViolationRiskEngine:
    """Test cases for ViolationRiskEngine.assess."""

    def test_empty_violations(self) -> None:
        """No violations is good standing with full integrity."""
        profile = ViolationRiskEngine().assess([], salary=80000)

        assert profile.total_violations == 0
        assert profile.average_severity == 0.0
        assert profile.risk_cost_impact == 0.0
        assert profile.ethical_integrity_index == 100.0
        assert profile.risk_category == RiskCategory.GOOD_STANDING
        assert profile.work_order_suggestions == ()
        assert profile.equipment_intelligence == ()

    def test_moderate_example(self) -> None:
        profile = ViolationRiskEngine().assess(
            [_violation(0.7), _violation(0.5)], salary=80000
        )

        assert profile.average_severity == pytest.approx(0.6)
        assert profile.risk_category == RiskCategory.MODERATE_RISK
        assert profile.risk_cost_impact == pytest.approx(48000)
        assert profile.ethical_integrity_index == pytest.approx(40)
        assert profile.total_violation_percent == pytest.approx(1.2)
        assert profile.category_basis == "average"

    def test_high_risk(self) -> None:
        profile = ViolationRiskEngine().assess([_violation(0.9), _violation(0.5)], salary=0)
        assert profile.risk_category == RiskCategory.HIGH_RISK
        assert profile.risk_cost_impact == 0.0

    def test_cumulative_basis(self) -> None:
        """The cumulative rule classifies on the percent sum."""
        violations = [_violation(0.7), _violation(0.5)]
        profile = ViolationRiskEngine(category_basis="cumulative").assess(
            violations, salary=80000
        )

        assert profile.category_basis == "cumulative"
        assert profile.risk_category == RiskCategory.HIGH_RISK
        # Cost impact and integrity still use the average
        assert profile.risk_cost_impact == pytest.approx(48000)
        assert profile.ethical_integrity_index == pytest.approx(40)

    def test_subject_is_carried(self, mixed_violations: list[Violation]) -> None:
        subject = SubjectInfo(employee_id="E-1001", name="J. Rivera", facility="Plant 4")
        profile = ViolationRiskEngine().assess(mixed_violations, 60000, subject=subject)

        assert profile.subject == subject
        assert profile.violations == tuple(mixed_violations)

    def test_work_orders(self, mixed_violations: list[Violation]) -> None:
        profile = ViolationRiskEngine().assess(mixed_violations, salary=60000)
        equipment, safety = profile.work_order_suggestions

        assert equipment.violation == "Unauthorized Equipment Use"
        assert equipment.code == "EQ-01"
        assert equipment.department == "Maintenance"
        assert equipment.priority == "High"
        assert equipment.action == "Review and correct: Unauthorized Equipment Use"

        assert safety.department == "EHS"
        assert safety.priority == "Medium"
        assert safety.action == "No hearing protection in boiler room"

    def test_equipment_intelligence_only_for_equipment(
        self, mixed_violations: list[Violation]
    ) -> None:
        profile = ViolationRiskEngine().assess(mixed_violations, salary=60000)

        assert len(profile.equipment_intelligence) == 1
        insight = profile.equipment_intelligence[0]
        assert insight.violation == "Unauthorized Equipment Use"
        assert insight.suggestions == EQUIPMENT_SUGGESTIONS
        assert len(insight.suggestions) == 4

    def test_negative_salary_rejected(self) -> None:
        with pytest.raises(ValueError):
            ViolationRiskEngine().assess([], salary=-1)

    def test_unknown_basis_rejected(self) -> None:
        with pytest.raises(ValueError):
            ViolationRiskEngine(category_basis="median")  # type: ignore[arg-type]

    def test_from_settings(self) -> None:
        engine = ViolationRiskEngine.from_settings(Settings(risk_category_basis="cumulative"))
        assert engine.category_basis == "cumulative"

    def test_percent_out_of_range(self) -> None:
        with pytest.raises(ValidationError):
            Violation(type="Procedure Violation", percent=1.5)


class TestClassification:
    """Test category bands and derived fields."""

    @pytest.mark.parametrize(
        ("average", "expected"),
        [
            (0.0, RiskCategory.GOOD_STANDING),
            (0.34, RiskCategory.GOOD_STANDING),
            (0.35, RiskCategory.MODERATE_RISK),
            (0.65, RiskCategory.MODERATE_RISK),
            (0.66, RiskCategory.HIGH_RISK),
        ],
    )
    def test_average_bands(self, average: float, expected: RiskCategory) -> None:
        assert classify_average_severity(average) == expected

    @pytest.mark.parametrize(
        ("total", "expected"),
        [
            (0.2, RiskCategory.GOOD_STANDING),
            (0.35, RiskCategory.WARNING),
            (0.69, RiskCategory.MEDIUM_RISK),
            (1.05, RiskCategory.HIGH_RISK),
        ],
    )
    def test_cumulative_bands(self, total: float, expected: RiskCategory) -> None:
        assert classify_cumulative_percent(total) == expected

    @pytest.mark.parametrize(
        ("percent", "expected"),
        [(0.9, "High"), (0.65, "Medium"), (0.35, "Medium"), (0.1, "Low")],
    )
    def test_work_order_priority(self, percent: float, expected: str) -> None:
        assert work_order_priority(percent) == expected

    @pytest.mark.parametrize(
        ("category", "expected"),
        [
            ("Equipment Safety", "Maintenance"),
            ("Workplace Safety", "EHS"),
            ("Regulatory Compliance", "Compliance"),
            ("equipment", "General"),
            ("", "General"),
        ],
    )
    def test_department(self, category: str, expected: str) -> None:
        assert department_for(category) == expected
