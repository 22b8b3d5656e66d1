"""Shared fixtures for facility-compliance tests."""

from __future__ import annotations

import pytest

from facility_compliance.models import Violation
from facility_compliance.rule_table import Rule, RuleTable


@pytest.fixture
def default_rules() -> RuleTable:
    return RuleTable.default()


@pytest.fixture
def boiler_logs() -> list[dict[str, object]]:
    return [
        {"steamPressure": 145, "stackTemp": 612, "waterLevel": "Normal"},
        {"steamPressure": 148, "stackTemp": 540, "waterLevel": "Normal"},
    ]


@pytest.fixture
def pump_rules() -> RuleTable:
    """Alternate rule set with a two-sided bound and an expected value."""
    return RuleTable(
        {
            "Pump": [
                Rule(field="dischargePressure", min=50, max=100, required=True),
                Rule(field="sealCondition", expected_value="Dry"),
            ]
        }
    )


@pytest.fixture
def mixed_violations() -> list[Violation]:
    return [
        Violation(
            type="Unauthorized Equipment Use",
            code="EQ-01",
            percent=0.7,
            category="Equipment",
        ),
        Violation(
            type="Safety PPE Non-Compliance",
            code="SF-02",
            percent=0.5,
            description="No hearing protection in boiler room",
            category="Safety",
        ),
    ]
