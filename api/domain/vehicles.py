# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Fleet vehicle rules.
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional

from pydantic import ValidationError as PydanticValidationError

from models.entities import Vehicle
from models.requests import CreateVehicleRequest, UpdateVehicleRequest, VehicleFilters
from models.responses import FleetStatsResponse
from domain.errors import ValidationError, from_pydantic

# Fields that cannot be cleared by an update
REQUIRED_FIELDS = ("plate_number", "vehicle_type", "model", "status", "mileage")


def parse_filters(args: Mapping[str, Any]) -> VehicleFilters:
    """Validate list query arguments; empty values mean no filter."""
    cleaned = {key: value for key, value in args.items() if value not in (None, "", "all")}
    try:
        return VehicleFilters.model_validate(cleaned)
    except PydanticValidationError as e:
        raise from_pydantic("Invalid vehicle filter", e)


def build_vehicle_query(filters: VehicleFilters) -> Dict[str, Any]:
    """Equality filters pushed down to the store."""
    query: Dict[str, Any] = {}
    if filters.team:
        query["team"] = filters.team
    if filters.status:
        query["status"] = filters.status
    return query


def matches_search(vehicle: Vehicle, search: Optional[str]) -> bool:
    """Case-insensitive match on plate number, model or driver."""
    if not search:
        return True
    needle = search.strip().lower()
    haystack = [vehicle.plate_number, vehicle.model, vehicle.driver]
    return any(needle in value.lower() for value in haystack if value)


def build_vehicle(fields: Any) -> Vehicle:
    if not isinstance(fields, Mapping):
        raise ValidationError("Vehicle payload must be a JSON object")
    try:
        request = CreateVehicleRequest.model_validate(fields)
        data = {key: value for key, value in request.model_dump(exclude_unset=True).items() if value is not None}
        return Vehicle(**data)
    except PydanticValidationError as e:
        raise from_pydantic("Invalid vehicle", e)


def merge_vehicle(existing: Vehicle, fields: Any) -> Vehicle:
    """Apply a partial update; explicit nulls clear optional fields."""
    if not isinstance(fields, Mapping):
        raise ValidationError("Vehicle payload must be a JSON object")
    try:
        request = UpdateVehicleRequest.model_validate(fields)
        changes = request.model_dump(exclude_unset=True)
        for name in REQUIRED_FIELDS:
            if changes.get(name) is None:
                changes.pop(name, None)
        data = existing.model_dump()
        data.update(changes)
        vehicle = Vehicle(**data)
    except PydanticValidationError as e:
        raise from_pydantic("Invalid vehicle update", e)
    vehicle.update_timestamp()
    return vehicle


def summarize_fleet(vehicles: Iterable[Vehicle]) -> FleetStatsResponse:
    """Count vehicles per status."""
    stats = FleetStatsResponse()
    for vehicle in vehicles:
        stats.total += 1
        setattr(stats, vehicle.status, getattr(stats, vehicle.status) + 1)
    return stats


def sort_vehicles(vehicles: Iterable[Vehicle]) -> List[Vehicle]:
    return sorted(vehicles, key=lambda vehicle: vehicle.plate_number)
