"""
Payloads returned by the LLM analysis collaborator.

The collaborator answers with a forced tool call whose arguments follow
one of two schemas: a log/image analysis (issues + summary) or a
free-text issue analysis (findings, work order, supervisor summary).
These models only decode that output. It is presented next to the
rule-based report and is never reconciled with it.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from facility_compliance.errors import AnalysisPayloadError
from facility_compliance.models import Finding

_LLM_MODEL_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    frozen=True,
)


# ============================================================================
# Log / Image Analysis
# ============================================================================


class LlmIssue(BaseModel):
    problem_detected: str
    severity: Literal["Low", "Moderate", "Severe", "Critical"]
    possible_causes: list[str] = Field(default_factory=list)
    recommended_actions: list[str] = Field(default_factory=list)
    monitoring_suggestions: list[str] = Field(default_factory=list)
    estimated_risk_cost: float = 0.0
    notes: str | None = None

    model_config = _LLM_MODEL_CONFIG


class LlmSummary(BaseModel):
    compliance_score: float = Field(..., ge=0, le=100)
    number_of_issues: int = Field(..., ge=0)
    critical_flags: int = Field(..., ge=0)
    overall_priority: Literal["Low", "Medium", "High"]

    model_config = _LLM_MODEL_CONFIG


class LlmComplianceAnalysis(BaseModel):
    """Analysis of log findings or equipment images."""

    kind: Literal["llm_compliance_analysis"] = "llm_compliance_analysis"
    issues: list[LlmIssue] = Field(default_factory=list)
    summary: LlmSummary

    model_config = _LLM_MODEL_CONFIG


# ============================================================================
# Free-text Issue Analysis
# ============================================================================


RiskLevel = Literal["Emergency", "High", "Medium", "Low"]


class LlmIssueFindings(BaseModel):
    issue_summary: str
    root_cause: str
    severity_score: float
    system_impact: str
    operational_risk_level: RiskLevel
    code_references: str | None = None

    model_config = _LLM_MODEL_CONFIG


class LlmWorkOrder(BaseModel):
    department: str
    description: str
    priority: RiskLevel
    estimated_cost: str
    optimization: str | None = None

    model_config = _LLM_MODEL_CONFIG


class LlmIssueAnalysis(BaseModel):
    """Analysis of a free-text compliance issue report."""

    kind: Literal["llm_issue_analysis"] = "llm_issue_analysis"
    findings: LlmIssueFindings
    work_order: LlmWorkOrder
    supervisor_summary: str

    model_config = _LLM_MODEL_CONFIG

    def formatted_summary(self) -> str:
        """Render the sectioned text shown in the assistant chat."""
        return (
            "**COMPLIANCE FINDINGS**\n"
            f"Issue: {self.findings.issue_summary}\n"
            f"Root Cause: {self.findings.root_cause}\n"
            f"Severity: {self.findings.severity_score:g}/100\n"
            f"Risk Level: {self.findings.operational_risk_level}\n"
            "\n"
            "**WORK ORDER**\n"
            f"Department: {self.work_order.department}\n"
            f"Priority: {self.work_order.priority}\n"
            f"Cost: {self.work_order.estimated_cost}\n"
            "\n"
            "**SUPERVISOR SUMMARY**\n"
            f"{self.supervisor_summary}"
        )


# ============================================================================
# Decoding
# ============================================================================


def extract_tool_arguments(response: Mapping[str, Any]) -> dict[str, Any]:
    """Decode the arguments of the first tool call in a chat completion."""
    try:
        tool_call = response["choices"][0]["message"]["tool_calls"][0]
        arguments = tool_call["function"]["arguments"]
    except (KeyError, IndexError, TypeError) as e:
        raise AnalysisPayloadError("No tool call in response") from e

    if isinstance(arguments, dict):
        return arguments
    try:
        data = json.loads(arguments)
    except (TypeError, json.JSONDecodeError) as e:
        raise AnalysisPayloadError(f"Tool call arguments are not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise AnalysisPayloadError("Tool call arguments must be a JSON object")
    return data


def parse_compliance_analysis(response: Mapping[str, Any]) -> LlmComplianceAnalysis:
    try:
        return LlmComplianceAnalysis.model_validate(extract_tool_arguments(response))
    except ValidationError as e:
        raise AnalysisPayloadError(f"Unexpected compliance analysis shape: {e}") from e


def parse_issue_analysis(response: Mapping[str, Any]) -> LlmIssueAnalysis:
    try:
        return LlmIssueAnalysis.model_validate(extract_tool_arguments(response))
    except ValidationError as e:
        raise AnalysisPayloadError(f"Unexpected issue analysis shape: {e}") from e


def render_findings_prompt(
    findings: Iterable[Finding], system_type: str, date_range: str | None = None
) -> str:
    """Render rule-based findings into the reviewer message."""
    lines = [
        f"- {f.field}: {f.value} ({f.flag}) - Severity: {f.severity.value}"
        for f in findings
    ]
    period = f" from {date_range}" if date_range else ""
    return (
        f"Analyze this {system_type} system compliance data{period}:\n"
        "\n"
        "Findings:\n"
        + ("\n".join(lines) if lines else "- none")
        + "\n\nProvide detailed analysis for each issue and an overall summary."
    )
