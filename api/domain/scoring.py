# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Team safety score calculation.

The score is a linear formula over a team's counters: every team starts the
year at 100 points, infractions deduct and bonus activities add. Nothing is
clamped, so a score may drop below zero or rise above 100.
"""

from typing import Any, Dict, List, Mapping, Tuple

BASE_SCORE = 100

# (snake_case field, camelCase alias, points per occurrence)
FIELD_WEIGHTS: List[Tuple[str, str, int]] = [
    ("work_accident", "workAccident", -40),
    ("fine_speed", "fineSpeed", -1),
    ("fine_signal", "fineSignal", -1),
    ("fine_lane", "fineLane", -1),
    ("inspection_miss", "inspectionMiss", -3),
    ("suggestion", "suggestion", 3),
    ("activity", "activity", 3),
]

# At-fault percentage band -> points per accident
SEVERITY_BAND_WEIGHTS: List[Tuple[str, int]] = [
    ("p50_59", -5),
    ("p60_69", -6),
    ("p70_79", -7),
    ("p80_89", -8),
    ("p90_99", -9),
    ("p100", -10),
]

SEVERITY_BANDS = [band for band, _ in SEVERITY_BAND_WEIGHTS]
COUNTER_FIELDS = [field for field, _, _ in FIELD_WEIGHTS]


def _as_mapping(record: Any) -> Mapping[str, Any]:
    if record is None:
        return {}
    if isinstance(record, Mapping):
        return record
    if hasattr(record, "model_dump"):
        return record.model_dump()
    return vars(record)


def _count(value: Any) -> int:
    """Missing counters count as zero."""
    if value is None:
        return 0
    return int(value)


def _accidents(record: Mapping[str, Any]) -> Mapping[str, Any]:
    accidents = record.get("vehicle_accidents")
    if accidents is None:
        accidents = record.get("vehicleAccidents")
    return _as_mapping(accidents)


def score_breakdown(team: Any) -> Dict[str, int]:
    """
    Per-field contributions to the total score.

    Args:
        team: Team model or mapping (snake_case or camelCase keys)

    Returns:
        Mapping of field name to signed point contribution
    """
    record = _as_mapping(team)
    breakdown: Dict[str, int] = {}

    for field, alias, weight in FIELD_WEIGHTS:
        value = record.get(field)
        if value is None:
            value = record.get(alias)
        breakdown[alias] = _count(value) * weight

    accidents = _accidents(record)
    for band, weight in SEVERITY_BAND_WEIGHTS:
        breakdown[band] = _count(accidents.get(band)) * weight

    return breakdown


def calculate_score(team: Any) -> int:
    """Compute a team's total safety score from its counters."""
    return BASE_SCORE + sum(score_breakdown(team).values())


def score_rules() -> Dict[str, Any]:
    """Coefficient table exposed to clients."""
    return {
        "baseScore": BASE_SCORE,
        "fields": {alias: weight for _, alias, weight in FIELD_WEIGHTS},
        "vehicleAccidents": dict(SEVERITY_BAND_WEIGHTS),
    }
