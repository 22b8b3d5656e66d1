"""
Configuration settings for facility-compliance.
"""

from typing import Literal

from pydantic import model_validator
from pydantic_settings import BaseSettings

WEBHOOK_CATEGORIES = ("compliance", "facility", "employee")


class Settings(BaseSettings):
    """Configuration loaded from environment variables."""

    app_env: str = "dev"

    # Rule table (YAML); built-in rules when unset
    rules_file: str | None = None

    # Violation risk classification
    risk_category_basis: Literal["average", "cumulative"] = "average"

    # Reporting sink and reference violation-type table
    reporting_url: str = ""
    violation_types_csv_url: str = ""

    # Notification webhooks, keyed by category tag
    compliance_webhook_url: str = ""
    facility_webhook_url: str = ""
    employee_webhook_url: str = ""

    http_timeout_seconds: float = 30.0

    model_config = {"env_prefix": "", "case_sensitive": False}

    @model_validator(mode="after")
    def _validate_reporting_sink(self) -> "Settings":
        if self.app_env.lower() == "prod" and not self.reporting_url:
            raise ValueError("REPORTING_URL must be set")
        return self

    def webhooks(self) -> dict[str, str]:
        """Webhook URL per category tag ("" when not configured)."""
        return {
            "compliance": self.compliance_webhook_url,
            "facility": self.facility_webhook_url,
            "employee": self.employee_webhook_url,
        }
