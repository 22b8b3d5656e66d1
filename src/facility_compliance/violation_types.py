"""
Reference violation-type table.

Looks up code, severity weight and category for a violation type so a
caller only has to name the type. The table is an optional enrichment
source; risk scoring never depends on it.
"""

from __future__ import annotations

import csv
import io
import logging
from collections.abc import Iterable
from dataclasses import dataclass

from facility_compliance.models import Violation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ViolationType:
    """A row of the reference violation-type table."""

    type: str
    percent: float
    code: str = ""
    category: str = ""
    notes: str = ""
    description: str = ""


FALLBACK_VIOLATION_TYPES: tuple[ViolationType, ...] = (
    ViolationType(type="Safety PPE Non-Compliance", percent=0.05, category="Safety"),
    ViolationType(type="Late Inspection Log", percent=0.03, category="Compliance"),
    ViolationType(type="Unauthorized Equipment Use", percent=0.06, category="Equipment"),
    ViolationType(type="Missed Training", percent=0.04, category="Compliance"),
    ViolationType(type="Procedure Violation", percent=0.05, category="Compliance"),
)


class ViolationTypeTable:
    """Lookup of reference violation types by name."""

    def __init__(self, entries: Iterable[ViolationType]) -> None:
        self._entries = {entry.type: entry for entry in entries}

    @classmethod
    def fallback(cls) -> ViolationTypeTable:
        return cls(FALLBACK_VIOLATION_TYPES)

    @classmethod
    def from_csv(cls, text: str) -> ViolationTypeTable:
        """
        Parse a CSV export of the reference table.

        Columns are matched by header name (case-insensitive): type,
        code, percent or severity, category, notes, description. Rows
        without a type are skipped; unparseable weights read as 0.
        """
        reader = csv.DictReader(io.StringIO(text.lstrip("\ufeff")))
        entries: list[ViolationType] = []
        for row in reader:
            cells = {
                (k or "").strip().lower(): (v or "").strip()
                for k, v in row.items()
                if k is not None
            }
            name = cells.get("type", "")
            if not name:
                continue
            entries.append(
                ViolationType(
                    type=name,
                    percent=_parse_percent(cells.get("percent") or cells.get("severity")),
                    code=cells.get("code", ""),
                    category=cells.get("category", ""),
                    notes=cells.get("notes", ""),
                    description=cells.get("description", ""),
                )
            )
        logger.debug(f"Parsed {len(entries)} violation types")
        return cls(entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, violation_type: object) -> bool:
        return violation_type in self._entries

    def get(self, violation_type: str) -> ViolationType | None:
        return self._entries.get(violation_type)

    def types(self) -> list[str]:
        return list(self._entries)

    def enrich(self, violation: Violation) -> Violation:
        """
        Autofill a violation from its reference entry.

        Code, severity weight and category come from the table; the
        description is filled only when the caller left it blank.
        """
        entry = self._entries.get(violation.type)
        if entry is None:
            return violation

        description = violation.description or entry.description or entry.notes
        return violation.model_copy(
            update={
                "code": entry.code or violation.code,
                "percent": min(1.0, max(0.0, entry.percent)),
                "category": entry.category or violation.category,
                "description": description,
            }
        )


def _parse_percent(raw: str | None) -> float:
    if not raw:
        return 0.0
    text = raw.strip()
    try:
        if text.endswith("%"):
            return float(text[:-1]) / 100
        return float(text)
    except ValueError:
        return 0.0
