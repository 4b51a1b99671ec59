# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Safety inspection rules.
"""

from typing import Any, Dict, Iterable, List, Mapping

from pydantic import ValidationError as PydanticValidationError

from models.entities import SafetyInspection, ChecklistItem
from models.requests import CreateInspectionRequest
from domain.errors import ValidationError, from_pydantic

DEFAULT_CHECKLIST = [
    "Hard hat worn",
    "Safety shoes worn",
    "Safety vest worn",
    "Workplace kept tidy",
    "Fire extinguisher in place",
    "Emergency exit clear",
    "Electrical safety",
    "Hazardous material storage",
]


def default_checklist() -> List[ChecklistItem]:
    return [ChecklistItem(item=item) for item in DEFAULT_CHECKLIST]


def build_inspection(fields: Any) -> SafetyInspection:
    """Validate a create payload; a missing checklist gets the standard items."""
    if not isinstance(fields, Mapping):
        raise ValidationError("Inspection payload must be a JSON object")
    try:
        request = CreateInspectionRequest.model_validate(fields)
        data = {key: value for key, value in request.model_dump(exclude_unset=True).items() if value is not None}
        if request.checklist is None:
            data["checklist"] = default_checklist()
        return SafetyInspection(**data)
    except PydanticValidationError as e:
        raise from_pydantic("Invalid inspection", e)


def completion_rate(inspection: SafetyInspection) -> int:
    """Percentage of checked items, rounded; 0 for an empty checklist."""
    if not inspection.checklist:
        return 0
    checked = sum(1 for entry in inspection.checklist if entry.checked)
    return round(checked * 100 / len(inspection.checklist))


def sort_inspections(inspections: Iterable[SafetyInspection]) -> List[SafetyInspection]:
    """Newest inspection day first, then newest record."""
    return sorted(
        inspections,
        key=lambda inspection: (inspection.inspection_date or "", inspection.created_at),
        reverse=True
    )


def inspection_response(inspection: SafetyInspection) -> Dict[str, Any]:
    data = inspection.to_response()
    data["completionRate"] = completion_rate(inspection)
    return data
