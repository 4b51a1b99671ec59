# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Fleet vehicle service.
"""

import logging
from typing import Any, List, Mapping, Optional

from opentelemetry import trace

from domain import vehicles as vehicle_domain
from domain.errors import ConflictError, NotFoundError
from models.entities import Vehicle
from models.responses import FleetStatsResponse
from services.mongodb import VEHICLES

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


class VehicleService:
    """Register and track fleet vehicles."""

    def __init__(self, store):
        self.store = store

    def _load(self, vehicle_id: str) -> Vehicle:
        document = self.store.get(VEHICLES, vehicle_id)
        if document is None:
            raise NotFoundError(f"Vehicle {vehicle_id} not found")
        return Vehicle.model_validate(document)

    def _ensure_unique_plate(self, plate_number: str, vehicle_id: Optional[str] = None) -> None:
        existing = self.store.find_one(VEHICLES, {"plateNumber": plate_number})
        if existing is not None and existing.get("id") != vehicle_id:
            raise ConflictError(f"Vehicle with plate '{plate_number}' already exists")

    def list_vehicles(self, args: Mapping[str, Any] = None) -> List[Vehicle]:
        """Vehicles matching team, status and free-text search filters."""
        filters = vehicle_domain.parse_filters(args or {})
        with tracer.start_as_current_span("vehicles.list") as span:
            span.set_attributes({
                "vehicle.team": filters.team or "all",
                "vehicle.status": filters.status or "all"
            })
            documents = self.store.find(VEHICLES, vehicle_domain.build_vehicle_query(filters))
            vehicles = [
                vehicle for vehicle in (Vehicle.model_validate(doc) for doc in documents)
                if vehicle_domain.matches_search(vehicle, filters.search)
            ]
            return vehicle_domain.sort_vehicles(vehicles)

    def get_vehicle(self, vehicle_id: str) -> Vehicle:
        return self._load(vehicle_id)

    def create_vehicle(self, fields: Any) -> Vehicle:
        with tracer.start_as_current_span("vehicles.create") as span:
            vehicle = vehicle_domain.build_vehicle(fields)
            span.set_attribute("vehicle.plate_number", vehicle.plate_number)
            self._ensure_unique_plate(vehicle.plate_number)
            created = Vehicle.model_validate(self.store.insert(VEHICLES, vehicle.to_document(), doc_id=vehicle.id))
            logger.info("Vehicle registered", extra={"vehicle_id": created.id, "plate_number": created.plate_number})
            return created

    def update_vehicle(self, vehicle_id: str, fields: Any) -> Vehicle:
        with tracer.start_as_current_span("vehicles.update") as span:
            span.set_attribute("vehicle.id", vehicle_id)
            existing = self._load(vehicle_id)
            merged = vehicle_domain.merge_vehicle(existing, fields)
            if merged.plate_number != existing.plate_number:
                self._ensure_unique_plate(merged.plate_number, vehicle_id=existing.id)
            document = self.store.update(VEHICLES, vehicle_id, merged.to_document())
            if document is None:
                raise NotFoundError(f"Vehicle {vehicle_id} not found")
            logger.info("Vehicle updated", extra={"vehicle_id": vehicle_id})
            return Vehicle.model_validate(document)

    def delete_vehicle(self, vehicle_id: str) -> None:
        with tracer.start_as_current_span("vehicles.delete") as span:
            span.set_attribute("vehicle.id", vehicle_id)
            if not self.store.delete(VEHICLES, vehicle_id):
                raise NotFoundError(f"Vehicle {vehicle_id} not found")
            logger.info("Vehicle deleted", extra={"vehicle_id": vehicle_id})

    def fleet_stats(self, team: Optional[str] = None) -> FleetStatsResponse:
        filters = {"team": team} if team else {}
        documents = self.store.find(VEHICLES, filters)
        return vehicle_domain.summarize_fleet(Vehicle.model_validate(doc) for doc in documents)
