"""
Facility Compliance: rule-based compliance scoring for facility equipment

Validates equipment logs, scores findings, and builds violation risk
profiles for reporting and notification sinks.
"""

from facility_compliance.config import Settings
from facility_compliance.engine import ComplianceEngine, assess_logs
from facility_compliance.errors import (
    AnalysisPayloadError,
    ComplianceError,
    RuleTableError,
    UnknownWebhookError,
)
from facility_compliance.models import (
    ComplianceReport,
    ComplianceStatus,
    Finding,
    RiskCategory,
    RiskProfile,
    Severity,
    SubjectInfo,
    Violation,
)
from facility_compliance.risk import ViolationRiskEngine
from facility_compliance.rule_table import Rule, RuleTable
from facility_compliance.scoring import classify_status, compliance_score
from facility_compliance.validator import LogValidator
from facility_compliance.violation_types import ViolationTypeTable

__all__ = [
    "Settings",
    "Rule",
    "RuleTable",
    "LogValidator",
    "ComplianceEngine",
    "assess_logs",
    "compliance_score",
    "classify_status",
    "ViolationRiskEngine",
    "ViolationTypeTable",
    "Finding",
    "Severity",
    "ComplianceStatus",
    "ComplianceReport",
    "Violation",
    "SubjectInfo",
    "RiskCategory",
    "RiskProfile",
    "ComplianceError",
    "RuleTableError",
    "AnalysisPayloadError",
    "UnknownWebhookError",
]

__version__ = "0.1.0"
