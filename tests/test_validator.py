"""Tests for log validation."""

import logging

import pytest

from facility_compliance.models import Finding, Severity
from facility_compliance.rule_table import Rule, RuleTable
from facility_compliance.validator import LogValidator, format_value


class TestBoilerValidation:
    """Test validation against the built-in boiler rules."""

    def test_stack_temp_above_limit(
        self, default_rules: RuleTable, boiler_logs: list[dict[str, object]]
    ) -> None:
        """612 exceeds 550 but stays within 1.2x, so it is moderate."""
        findings = LogValidator(default_rules).validate(boiler_logs, "boiler")

        assert findings == [
            Finding(
                field="stackTemp",
                value="612",
                flag="Above Limit",
                severity=Severity.MODERATE,
            )
        ]

    def test_severe_above_limit(self, default_rules: RuleTable) -> None:
        """Readings over 1.2x the maximum are severe."""
        logs = [{"steamPressure": 181, "stackTemp": 500, "waterLevel": "Normal"}]
        findings = LogValidator(default_rules).validate(logs, "boiler")

        assert len(findings) == 1
        assert findings[0].field == "steamPressure"
        assert findings[0].severity == Severity.SEVERE

    def test_exactly_at_limit_is_compliant(self, default_rules: RuleTable) -> None:
        logs = [{"steamPressure": 150, "stackTemp": 550, "waterLevel": "Normal"}]
        assert LogValidator(default_rules).validate(logs, "boiler") == []

    def test_expected_value_mismatch(self, default_rules: RuleTable) -> None:
        logs = [{"steamPressure": 100, "stackTemp": 400, "waterLevel": "Low"}]
        findings = LogValidator(default_rules).validate(logs, "Boiler")

        assert findings == [
            Finding(
                field="waterLevel",
                value="Low",
                flag="Expected: Normal",
                severity=Severity.MINOR,
            )
        ]


class TestRequiredFields:
    """Test the missing-field check."""

    @pytest.mark.parametrize("missing", [None, ""])
    def test_empty_required_field(self, default_rules: RuleTable, missing: object) -> None:
        logs = [{"steamPressure": 100, "stackTemp": missing, "waterLevel": "Normal"}]
        findings = LogValidator(default_rules).validate(logs, "boiler")

        assert findings == [
            Finding(
                field="stackTemp",
                value="Missing",
                flag="Non-Compliant",
                severity=Severity.MODERATE,
            )
        ]

    def test_missing_field_yields_single_finding(self, default_rules: RuleTable) -> None:
        """An absent field with an expected value is only reported as missing."""
        logs = [{"steamPressure": 100, "stackTemp": 400}]
        findings = LogValidator(default_rules).validate(logs, "boiler")

        water = [f for f in findings if f.field == "waterLevel"]
        assert len(water) == 1
        assert water[0].flag == "Non-Compliant"

    def test_absent_optional_field_checked_against_expected_value(
        self, pump_rules: RuleTable
    ) -> None:
        """An optional field with an expected value is reported when blank or absent."""
        logs = [
            {"dischargePressure": 75},
            {"dischargePressure": 75, "sealCondition": ""},
        ]
        findings = LogValidator(pump_rules).validate(logs, "pump")

        assert findings == [
            Finding(
                field="sealCondition",
                value="Missing",
                flag="Expected: Dry",
                severity=Severity.MINOR,
            )
        ] * 2

    def test_absent_optional_field_without_expected_value(self) -> None:
        table = RuleTable({"tank": [Rule(field="level", min=1, max=9)]})
        assert LogValidator(table).validate([{}, {"level": ""}], "tank") == []


class TestNumericChecks:
    """Test min/max bound handling."""

    def test_below_limit_moderate(self, pump_rules: RuleTable) -> None:
        logs = [{"dischargePressure": 45, "sealCondition": "Dry"}]
        findings = LogValidator(pump_rules).validate(logs, "pump")
        assert [(f.flag, f.severity) for f in findings] == [
            ("Below Limit", Severity.MODERATE)
        ]

    def test_below_limit_severe(self, pump_rules: RuleTable) -> None:
        """Readings under 0.8x the minimum are severe."""
        logs = [{"dischargePressure": 39.5, "sealCondition": "Dry"}]
        findings = LogValidator(pump_rules).validate(logs, "pump")
        assert findings[0].severity == Severity.SEVERE
        assert findings[0].value == "39.5"

    def test_both_bounds_checked_independently(self) -> None:
        """A rule with inverted bounds reports both violations."""
        table = RuleTable({"odd": [Rule(field="x", min=10, max=5)]})
        findings = LogValidator(table).validate([{"x": 7}], "odd")

        assert [f.flag for f in findings] == ["Above Limit", "Below Limit"]

    def test_non_numeric_value_skips_bounds(self, pump_rules: RuleTable) -> None:
        logs = [{"dischargePressure": "high", "sealCondition": "Dry"}]
        assert LogValidator(pump_rules).validate(logs, "pump") == []

    def test_bool_is_not_numeric(self, pump_rules: RuleTable) -> None:
        logs = [{"dischargePressure": True, "sealCondition": "Dry"}]
        assert LogValidator(pump_rules).validate(logs, "pump") == []

    def test_numeric_value_skips_expected_check(self) -> None:
        table = RuleTable({"tank": [Rule(field="level", expected_value="Normal")]})
        assert LogValidator(table).validate([{"level": 3}], "tank") == []


class TestValidatorBehaviour:
    """Test ordering, idempotence and unknown types."""

    def test_order_follows_observations_then_rules(self, default_rules: RuleTable) -> None:
        logs = [
            {"steamPressure": 151, "stackTemp": 700, "waterLevel": "Low"},
            {"stackTemp": 551, "waterLevel": "Normal"},
        ]
        findings = LogValidator(default_rules).validate(logs, "boiler")

        assert [(f.field, f.flag) for f in findings] == [
            ("steamPressure", "Above Limit"),
            ("stackTemp", "Above Limit"),
            ("waterLevel", "Expected: Normal"),
            ("steamPressure", "Non-Compliant"),
            ("stackTemp", "Above Limit"),
        ]

    def test_idempotent(
        self, default_rules: RuleTable, boiler_logs: list[dict[str, object]]
    ) -> None:
        validator = LogValidator(default_rules)
        assert validator.validate(boiler_logs, "boiler") == validator.validate(
            boiler_logs, "boiler"
        )

    def test_unknown_system_type(
        self,
        default_rules: RuleTable,
        boiler_logs: list[dict[str, object]],
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Unknown types yield no findings and log a warning."""
        with caplog.at_level(logging.WARNING):
            findings = LogValidator(default_rules).validate(boiler_logs, "turbine")

        assert findings == []
        assert "turbine" in caplog.text

    def test_empty_observations(self, default_rules: RuleTable) -> None:
        assert LogValidator(default_rules).validate([], "boiler") == []


class TestFormatValue:
    """Test reading stringification."""

    def test_integral_float(self) -> None:
        assert format_value(612.0) == "612"

    def test_fractional_float(self) -> None:
        assert format_value(612.5) == "612.5"

    def test_string(self) -> None:
        assert format_value("Low") == "Low"
