"""
Value objects shared by the compliance engine and its collaborators.

Every model is frozen: findings, reports and risk profiles are built once
per request and handed to reporting sinks as-is.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Scalar = str | int | float | bool | None
Observation = dict[str, Scalar]


# ============================================================================
# Log Findings
# ============================================================================


class Severity(str, Enum):
    """Severity of a rule-based finding."""

    MINOR = "Minor"
    MODERATE = "Moderate"
    SEVERE = "Severe"


class ComplianceStatus(str, Enum):
    """Coarse status tier derived from a compliance score."""

    COMPLIANT = "compliant"
    REVIEW = "review"
    CRITICAL = "critical"


FLAG_NON_COMPLIANT = "Non-Compliant"
FLAG_ABOVE_LIMIT = "Above Limit"
FLAG_BELOW_LIMIT = "Below Limit"
MISSING_VALUE = "Missing"


def expected_flag(expected_value: str) -> str:
    return f"Expected: {expected_value}"


class Finding(BaseModel):
    """A single rule violation found in an observation."""

    field: str
    value: str
    flag: str
    severity: Severity

    model_config = ConfigDict(frozen=True)


class ComplianceReport(BaseModel):
    """Rule-based compliance report for one batch of equipment logs."""

    kind: Literal["compliance_report"] = "compliance_report"
    system: str
    system_type: str
    date_range: str | None = None
    supported_system: bool
    total_checks: int = Field(..., ge=0)
    compliance_score: int = Field(..., ge=0, le=100)
    status: ComplianceStatus
    findings: tuple[Finding, ...] = ()
    recommended_actions: tuple[str, ...] = ()
    total_issues: int = Field(..., ge=0)
    severe_count: int = Field(..., ge=0)
    overall_priority: Literal["Low", "Medium", "High"]

    model_config = ConfigDict(frozen=True)


# ============================================================================
# Violations & Risk
# ============================================================================


class RiskCategory(str, Enum):
    """Risk tier for a subject's violation history."""

    GOOD_STANDING = "Good Standing"
    WARNING = "Warning"
    MODERATE_RISK = "Moderate Risk"
    MEDIUM_RISK = "Medium Risk"
    HIGH_RISK = "High Risk"


class Violation(BaseModel):
    """A named violation recorded against a subject."""

    type: str
    code: str = ""
    percent: float = Field(..., ge=0, le=1, description="Severity weight [0-1]")
    description: str = ""
    category: str = ""

    model_config = ConfigDict(frozen=True)


class SubjectInfo(BaseModel):
    """Person the violations were recorded against."""

    employee_id: str
    name: str = ""
    department: str = ""
    supervisor: str = ""
    facility: str = ""
    shift: str = ""
    date: str | None = None

    model_config = ConfigDict(frozen=True)


class WorkOrderSuggestion(BaseModel):
    violation: str
    code: str
    department: str
    priority: Literal["Low", "Medium", "High"]
    action: str

    model_config = ConfigDict(frozen=True)


class EquipmentIntelligence(BaseModel):
    violation: str
    suggestions: tuple[str, ...]

    model_config = ConfigDict(frozen=True)


class RiskProfile(BaseModel):
    """Aggregated risk assessment for one subject."""

    kind: Literal["risk_profile"] = "risk_profile"
    subject: SubjectInfo | None = None
    salary: float = Field(..., ge=0)
    violations: tuple[Violation, ...] = ()
    total_violations: int = Field(..., ge=0)
    total_violation_percent: float = Field(..., ge=0)
    average_severity: float = Field(..., ge=0, le=1)
    category_basis: Literal["average", "cumulative"]
    risk_category: RiskCategory
    risk_cost_impact: float
    ethical_integrity_index: float = Field(..., ge=0, le=100)
    work_order_suggestions: tuple[WorkOrderSuggestion, ...] = ()
    equipment_intelligence: tuple[EquipmentIntelligence, ...] = ()

    model_config = ConfigDict(frozen=True)
