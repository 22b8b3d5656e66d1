"""
HTTP clients for external collaborators.

Provides:
- Posting computed reports to the reporting sink
- Notifying category-tagged webhooks
- Fetching the reference violation-type table
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import httpx

from facility_compliance.errors import UnknownWebhookError
from facility_compliance.violation_types import ViolationTypeTable

if TYPE_CHECKING:
    from facility_compliance.config import Settings

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}


class ReportingClient:
    """Client for the reporting sink."""

    def __init__(
        self,
        url: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not url:
            raise ValueError("Reporting sink URL must be set")
        self._url = url
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    @classmethod
    def from_settings(
        cls, settings: Settings, transport: httpx.AsyncBaseTransport | None = None
    ) -> ReportingClient:
        return cls(
            settings.reporting_url,
            timeout=settings.http_timeout_seconds,
            transport=transport,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def post(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Post a report document; returns the sink's JSON reply."""
        response = await self._client.post(self._url, json=payload, headers=JSON_HEADERS)
        response.raise_for_status()
        if not response.content:
            return {}
        return response.json()


class WebhookNotifier:
    """Delivers payloads to webhooks keyed by category tag."""

    def __init__(
        self,
        webhooks: Mapping[str, str],
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._webhooks = dict(webhooks)
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    @classmethod
    def from_settings(
        cls, settings: Settings, transport: httpx.AsyncBaseTransport | None = None
    ) -> WebhookNotifier:
        return cls(
            settings.webhooks(),
            timeout=settings.http_timeout_seconds,
            transport=transport,
        )

    @property
    def categories(self) -> list[str]:
        return list(self._webhooks)

    async def close(self) -> None:
        await self._client.aclose()

    async def notify(self, category: str, payload: dict[str, Any]) -> bool:
        """
        Post a payload to the webhook for a category.

        Returns True when the webhook accepted the payload, False when it
        answered with an error status or no URL is configured.
        """
        if category not in self._webhooks:
            raise UnknownWebhookError(f"Unknown webhook category: {category!r}")

        url = self._webhooks[category]
        if not url:
            logger.debug(f"No webhook configured for {category}, skipping")
            return False

        try:
            response = await self._client.post(url, json=payload, headers=JSON_HEADERS)
        except httpx.HTTPError as e:
            logger.error(f"Error triggering {category} webhook: {e}")
            raise

        if not response.is_success:
            logger.warning(f"Webhook {category} returned {response.status_code}")
        return response.is_success


class ViolationTypeClient:
    """Fetches the reference violation-type table from a CSV export."""

    def __init__(
        self,
        csv_url: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._csv_url = csv_export_url(csv_url) if csv_url else ""
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    @classmethod
    def from_settings(
        cls, settings: Settings, transport: httpx.AsyncBaseTransport | None = None
    ) -> ViolationTypeClient:
        return cls(
            settings.violation_types_csv_url,
            timeout=settings.http_timeout_seconds,
            transport=transport,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def fetch(self) -> ViolationTypeTable:
        """Fetch the table, falling back to built-in rows on failure."""
        if not self._csv_url:
            return ViolationTypeTable.fallback()

        try:
            response = await self._client.get(self._csv_url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning(f"Failed to fetch violation types: {e}. Using fallback table.")
            return ViolationTypeTable.fallback()

        table = ViolationTypeTable.from_csv(response.text)
        if not len(table):
            logger.warning("Violation type export is empty. Using fallback table.")
            return ViolationTypeTable.fallback()
        return table


def csv_export_url(sheet_url: str) -> str:
    """Turn a spreadsheet edit link into its CSV export link."""
    return sheet_url.replace("/edit?gid=", "/export?format=csv&gid=")


@dataclass
class PublishResult:
    sink_response: dict[str, Any]
    notified: bool


class ReportPublisher:
    """Sends a payload to the reporting sink, then to its webhook."""

    def __init__(self, reporting: ReportingClient, notifier: WebhookNotifier) -> None:
        self._reporting = reporting
        self._notifier = notifier

    @classmethod
    def from_settings(
        cls, settings: Settings, transport: httpx.AsyncBaseTransport | None = None
    ) -> ReportPublisher:
        return cls(
            ReportingClient.from_settings(settings, transport=transport),
            WebhookNotifier.from_settings(settings, transport=transport),
        )

    async def close(self) -> None:
        await self._reporting.close()
        await self._notifier.close()

    async def publish(self, payload: dict[str, Any], category: str) -> PublishResult:
        if category not in self._notifier.categories:
            raise UnknownWebhookError(f"Unknown webhook category: {category!r}")
        sink_response = await self._reporting.post(payload)
        notified = await self._notifier.notify(category, payload)
        logger.info(f"Published {category} payload (webhook delivered={notified})")
        return PublishResult(sink_response=sink_response, notified=notified)
