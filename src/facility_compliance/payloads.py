"""
Payload documents exchanged with reporting and notification sinks.

Rule-based reports, risk profiles and LLM analyses travel as a tagged
union keyed on ``kind`` so a consumer always knows which source a payload
came from.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import Annotated, Any

from pydantic import Field, TypeAdapter

from facility_compliance.llm_payloads import LlmComplianceAnalysis, LlmIssueAnalysis
from facility_compliance.models import ComplianceReport, RiskProfile

AnalysisPayload = Annotated[
    ComplianceReport | RiskProfile | LlmComplianceAnalysis | LlmIssueAnalysis,
    Field(discriminator="kind"),
]

_payload_adapter: TypeAdapter[Any] = TypeAdapter(AnalysisPayload)


def parse_payload(data: Any) -> Any:
    """Validate a JSON-compatible document into its payload model."""
    return _payload_adapter.validate_python(data)


def dump_payload(payload: Any) -> dict[str, Any]:
    """Serialize a payload model to a JSON-compatible document."""
    return _payload_adapter.dump_python(payload, mode="json")


def new_report_id() -> str:
    return f"COMP-{uuid.uuid4().hex[:8]}"


def compliance_sink_payload(
    report: ComplianceReport,
    facility: str,
    auditor: str = "Rule-Based-Validator",
    llm_analysis: LlmComplianceAnalysis | None = None,
    report_id: str | None = None,
    timestamp: datetime | None = None,
) -> dict[str, Any]:
    """Build the reporting-sink document for a compliance report."""
    return {
        "Report_ID": report_id or new_report_id(),
        "Facility": facility,
        "System": report.system,
        "Auditor": auditor,
        "Date": (timestamp or datetime.now(UTC)).isoformat(),
        "Date_Range": report.date_range,
        "Compliance_Issues": [f.model_dump(mode="json") for f in report.findings],
        "Recommended_Actions": list(report.recommended_actions),
        "SummaryMetrics": {
            "Total_Issues": report.total_issues,
            "Severe_Count": report.severe_count,
            "Compliance_Score": report.compliance_score,
            "Status": report.status.value,
            "Overall_Priority": report.overall_priority,
        },
        "AI_Analysis": (
            llm_analysis.model_dump(mode="json", by_alias=True) if llm_analysis else None
        ),
    }


def risk_sink_payload(
    profile: RiskProfile, timestamp: datetime | None = None
) -> dict[str, Any]:
    """Build the reporting-sink document for a risk profile."""
    subject = profile.subject
    return {
        "Employee_ID": subject.employee_id if subject else None,
        "Name": subject.name if subject else None,
        "Department": subject.department if subject else None,
        "Violations": [
            {
                "Type": v.type,
                "Code": v.code,
                "Percent": v.percent,
                "Description": v.description,
                "Category": v.category,
            }
            for v in profile.violations
        ],
        "Total_Violations": profile.total_violations,
        "Total_Violation_%": profile.total_violation_percent,
        "Average_Severity": profile.average_severity,
        "Risk_Category": profile.risk_category.value,
        "Category_Basis": profile.category_basis,
        "Salary": profile.salary,
        "Risk_Cost_Impact": profile.risk_cost_impact,
        "Ethical_Integrity_Index": profile.ethical_integrity_index,
        "Work_Order_Suggestions": [
            wo.model_dump(mode="json") for wo in profile.work_order_suggestions
        ],
        "Equipment_Intelligence": [
            eq.model_dump(mode="json") for eq in profile.equipment_intelligence
        ],
        "Supervisor": subject.supervisor if subject else None,
        "Facility": subject.facility if subject else None,
        "Date": (subject.date if subject and subject.date else None)
        or (timestamp or datetime.now(UTC)).isoformat(),
        "Shift": subject.shift if subject else None,
    }
