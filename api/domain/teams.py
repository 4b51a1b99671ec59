# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Team aggregation rules.

Pure functions that turn create/update/reset/import requests into the team
records to persist. Every function returns records whose total score was
recomputed from their merged counters, so callers never write a stale score.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from pydantic import ValidationError as PydanticValidationError

from models.entities import Team, VehicleAccidents
from models.requests import CreateTeamRequest, UpdateTeamRequest, ImportTeamRow
from domain.errors import ValidationError, from_pydantic
from domain.scoring import calculate_score, COUNTER_FIELDS

# Counters zeroed by a reset; vehicle_count is informational and survives
RESET_FIELDS = list(COUNTER_FIELDS)

# Fields a bulk import may overwrite
IMPORT_FIELDS = ["vehicle_count"] + COUNTER_FIELDS


@dataclass
class ImportPlan:
    """Records to write for a bulk import."""
    to_create: List[Team] = field(default_factory=list)
    to_update: List[Team] = field(default_factory=list)
    created: int = 0
    updated: int = 0
    skipped: int = 0

    @property
    def count(self) -> int:
        return self.created + self.updated


def with_score(team: Team) -> Team:
    """Return a copy of the team with total_score recomputed."""
    return team.model_copy(update={"total_score": calculate_score(team)})


def _present(request, fields: Optional[Iterable[str]] = None) -> Dict[str, Any]:
    """Fields the client actually sent, with null treated as absent."""
    data = request.model_dump(exclude_unset=True)
    if fields is not None:
        data = {key: value for key, value in data.items() if key in fields}
    return {key: value for key, value in data.items() if value is not None}


def parse_create_request(fields: Any) -> CreateTeamRequest:
    """Validate a create payload, raising a domain ValidationError."""
    if not isinstance(fields, Mapping):
        raise ValidationError("Team payload must be a JSON object")
    try:
        return CreateTeamRequest.model_validate(fields)
    except PydanticValidationError as e:
        raise from_pydantic("Invalid team", e)


def parse_update_request(fields: Any) -> Dict[str, Any]:
    """Validate a partial update payload and return the provided fields."""
    if not isinstance(fields, Mapping):
        raise ValidationError("Team payload must be a JSON object")
    try:
        request = UpdateTeamRequest.model_validate(fields)
    except PydanticValidationError as e:
        raise from_pydantic("Invalid team update", e)
    return _present(request)


def build_team(request: CreateTeamRequest, default_year: int) -> Team:
    """
    Build a new team from a validated create request.

    Unspecified counters default to zero and the score is computed before the
    record is returned.
    """
    data = _present(request)
    data.setdefault("year", default_year)
    accidents = data.pop("vehicle_accidents", None)
    team = Team(**data, vehicle_accidents=accidents or VehicleAccidents())
    return with_score(team)


def merge_update(existing: Team, changes: Mapping[str, Any]) -> Team:
    """
    Merge provided fields onto the stored team.

    Fields absent from ``changes`` keep their stored value. The score is
    recomputed from the merged result, never from the partial payload.
    """
    data = existing.model_dump()
    data.update(changes)
    data.pop("total_score", None)
    merged = Team(**data)
    merged.update_timestamp()
    return with_score(merged)


def reset_team(existing: Team) -> Team:
    """Zero every counter and accident band; name, year and vehicle_count stay."""
    data = existing.model_dump()
    for name in RESET_FIELDS:
        data[name] = 0
    data["vehicle_accidents"] = VehicleAccidents()
    reset = Team(**data)
    reset.update_timestamp()
    return with_score(reset)


def _row_name(row: Mapping[str, Any]) -> Optional[str]:
    name = row.get("name")
    if name is None:
        return None
    name = str(name).strip()
    return name or None


def validate_import_rows(rows: Any) -> Tuple[List[ImportTeamRow], int]:
    """
    Validate every row of an import batch before anything is written.

    Rows without a name are skipped. Any malformed named row rejects the
    whole batch.

    Returns:
        Tuple of (validated rows, number of skipped rows)
    """
    if not isinstance(rows, list):
        raise ValidationError("Import rows must be a list")

    parsed: List[ImportTeamRow] = []
    skipped = 0
    for index, row in enumerate(rows):
        if not isinstance(row, Mapping):
            raise ValidationError(
                f"Invalid import row {index}: expected an object",
                [{"field": f"rows[{index}]", "message": "Expected an object", "type": "type_error"}]
            )
        if _row_name(row) is None:
            skipped += 1
            continue
        try:
            parsed.append(ImportTeamRow.model_validate(row))
        except PydanticValidationError as e:
            raise from_pydantic("Invalid import row", e, row=index)
    return parsed, skipped


def plan_import(rows: Any, existing_teams: Iterable[Team], year: int) -> ImportPlan:
    """
    Merge import rows into the teams of a year, matching by name.

    Existing teams get the provided counters overwritten and keep everything
    else, including their vehicle accidents. Unknown names become new teams
    with zero defaults. A name repeated in the batch merges onto the result of
    its earlier row.
    """
    parsed, skipped = validate_import_rows(rows)
    plan = ImportPlan(skipped=skipped)

    by_name: Dict[str, Team] = {team.name: team for team in existing_teams}
    pending_new: Dict[str, Team] = {}
    pending_update: Dict[str, Team] = {}

    for row in parsed:
        changes = _present(row, IMPORT_FIELDS)
        current = pending_new.get(row.name) or pending_update.get(row.name) or by_name.get(row.name)

        if current is None:
            pending_new[row.name] = with_score(Team(name=row.name, year=year, **changes))
            plan.created += 1
        else:
            merged = merge_update(current, changes)
            if row.name in pending_new:
                pending_new[row.name] = merged
            else:
                pending_update[row.name] = merged
            plan.updated += 1

    plan.to_create = list(pending_new.values())
    plan.to_update = list(pending_update.values())
    return plan


def rank_teams(teams: Iterable[Team]) -> List[Tuple[int, Team]]:
    """
    Order teams by score and assign competition ranks.

    Tied scores share a rank and the next rank skips accordingly (1, 2, 2, 4).
    """
    ordered = sorted(teams, key=lambda team: (-team.total_score, team.name))
    ranked: List[Tuple[int, Team]] = []
    previous_score = None
    rank = 0
    for position, team in enumerate(ordered, start=1):
        if team.total_score != previous_score:
            rank = position
            previous_score = team.total_score
        ranked.append((rank, team))
    return ranked
