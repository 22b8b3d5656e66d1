"""CSV log export parsing."""

from __future__ import annotations

import csv
import io

from facility_compliance.models import Observation, Scalar


def coerce_scalar(raw: str) -> Scalar:
    """Convert a CSV cell to a number when it reads as one."""
    text = raw.strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        return text


def parse_observations_csv(text: str) -> list[Observation]:
    """
    Parse a CSV log export into observations.

    The header row names the fields. Blank cells are left out so that a
    required field reads as missing.
    """
    reader = csv.DictReader(io.StringIO(text.lstrip("\ufeff")))
    observations: list[Observation] = []
    for row in reader:
        entry: Observation = {}
        for name, raw in row.items():
            if name is None or raw is None:
                continue
            value = coerce_scalar(raw)
            if value is not None:
                entry[name.strip()] = value
        if entry:
            observations.append(entry)
    return observations
