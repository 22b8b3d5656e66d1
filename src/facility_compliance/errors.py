"""Exception types raised by facility-compliance."""

from __future__ import annotations


class ComplianceError(Exception):
    """Base class for facility-compliance errors."""


class RuleTableError(ComplianceError):
    """Rule table definition could not be loaded."""


class AnalysisPayloadError(ComplianceError):
    """LLM collaborator response could not be decoded."""


class UnknownWebhookError(ComplianceError):
    """Notification category has no webhook slot."""
