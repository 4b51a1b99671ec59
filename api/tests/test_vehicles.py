# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Tests for fleet vehicle management.
"""

import pytest

from domain import vehicles as vehicle_domain
from domain.errors import ConflictError, ValidationError
from services.vehicles import VehicleService


@pytest.fixture
def vehicle_service(store):
    return VehicleService(store)


@pytest.fixture
def fleet(vehicle_service):
    vehicles = [
        {"plateNumber": "33NA1111", "model": "Starex", "team": "Alpha", "driver": "Kim", "status": "operating"},
        {"plateNumber": "11GA2222", "model": "Porter", "team": "Alpha", "driver": "Lee", "status": "maintenance"},
        {"plateNumber": "22DA3333", "model": "Bongo", "team": "Beta", "driver": "Park", "status": "operating"},
        {"plateNumber": "44RA4444", "model": "Sonata", "team": "Beta", "status": "scrap_scheduled"},
    ]
    return [vehicle_service.create_vehicle(vehicle) for vehicle in vehicles]


class TestVehicleDomain:

    def test_defaults(self):
        vehicle = vehicle_domain.build_vehicle({"plateNumber": " 12GA3456 "})

        assert vehicle.plate_number == "12GA3456"
        assert vehicle.status == "operating"
        assert vehicle.mileage == 0

    @pytest.mark.parametrize("payload", [
        {},
        {"plateNumber": "12GA3456", "status": "stolen"},
        {"plateNumber": "12GA3456", "mileage": -5},
        {"plateNumber": "12GA3456", "mileage": 10 ** 30},
        {"plateNumber": "12GA3456", "inspectionDate": "2025-13-01"},
    ])
    def test_invalid_payloads(self, payload):
        with pytest.raises(ValidationError):
            vehicle_domain.build_vehicle(payload)

    def test_filters_ignore_all_and_empty(self):
        filters = vehicle_domain.parse_filters({"team": "all", "status": "", "search": "kim"})

        assert vehicle_domain.build_vehicle_query(filters) == {}
        assert filters.search == "kim"

    def test_merge_keeps_required_fields(self, sample_vehicle_data):
        existing = vehicle_domain.build_vehicle(sample_vehicle_data)
        merged = vehicle_domain.merge_vehicle(existing, {"model": None, "driver": None, "mileage": 43000})

        assert merged.model == "Porter II"
        assert merged.driver is None
        assert merged.mileage == 43000


class TestVehicleService:

    def test_sorted_by_plate(self, vehicle_service, fleet):
        plates = [vehicle.plate_number for vehicle in vehicle_service.list_vehicles()]
        assert plates == sorted(plates)

    def test_team_and_status_filters(self, vehicle_service, fleet):
        vehicles = vehicle_service.list_vehicles({"team": "Alpha", "status": "operating"})
        assert [vehicle.plate_number for vehicle in vehicles] == ["33NA1111"]

    @pytest.mark.parametrize("search,expected", [
        ("porter", ["11GA2222"]),
        ("PARK", ["22DA3333"]),
        ("33", ["22DA3333", "33NA1111"]),
    ])
    def test_search(self, vehicle_service, fleet, search, expected):
        vehicles = vehicle_service.list_vehicles({"search": search})
        assert [vehicle.plate_number for vehicle in vehicles] == expected

    def test_duplicate_plate(self, vehicle_service, fleet):
        with pytest.raises(ConflictError):
            vehicle_service.create_vehicle({"plateNumber": "33NA1111"})

    def test_change_plate_onto_existing(self, vehicle_service, fleet):
        with pytest.raises(ConflictError):
            vehicle_service.update_vehicle(fleet[1].id, {"plateNumber": "33NA1111"})

    def test_stats(self, vehicle_service, fleet):
        stats = vehicle_service.fleet_stats()
        assert (stats.total, stats.operating, stats.maintenance, stats.idle, stats.scrap_scheduled) == (4, 2, 1, 0, 1)

        assert vehicle_service.fleet_stats("Beta").total == 2


class TestVehicleEndpoints:

    def test_crud(self, client, sample_vehicle_data):
        created = client.post('/api/vehicles', json=sample_vehicle_data)
        assert created.status_code == 201
        vehicle = created.get_json()
        assert vehicle["plateNumber"] == "12GA3456"
        assert vehicle["_links"]["edit"]["method"] == "PUT"

        updated = client.put(f"/api/vehicles/{vehicle['id']}", json={"status": "maintenance"})
        assert updated.get_json()["status"] == "maintenance"
        assert updated.get_json()["driver"] == "Kim Minsu"

        assert client.delete(f"/api/vehicles/{vehicle['id']}").status_code == 204
        assert client.get(f"/api/vehicles/{vehicle['id']}").status_code == 404

    def test_list_with_filters(self, client, fleet):
        data = client.get('/api/vehicles?team=Beta&status=all').get_json()
        assert [vehicle["plateNumber"] for vehicle in data] == ["22DA3333", "44RA4444"]

    def test_invalid_status_filter(self, client):
        assert client.get('/api/vehicles?status=flying').status_code == 400

    def test_stats_endpoint(self, client, fleet):
        data = client.get('/api/vehicles/stats?team=Alpha').get_json()
        assert data == {"total": 2, "operating": 1, "maintenance": 1, "idle": 0, "scrapScheduled": 0}

    def test_duplicate_plate_conflict(self, client, sample_vehicle_data):
        client.post('/api/vehicles', json=sample_vehicle_data)
        assert client.post('/api/vehicles', json=sample_vehicle_data).status_code == 409
