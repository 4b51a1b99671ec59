# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for Pydantic models.
"""

import pytest
from datetime import datetime
from pydantic import ValidationError
from bson import ObjectId

from models.entities import Team, VehicleAccidents, Notice, Vehicle, SafetyInspection
from models.requests import CreateTeamRequest, UpdateTeamRequest, SetLockRequest
from models.responses import BulkOperationResponse


class TestTeamModel:
    """Test Team model validation."""

    def test_valid_team(self):
        team = Team(name="Alpha", year=2025, fine_speed=2)

        assert ObjectId.is_valid(team.id)
        assert team.schema_version == 1
        assert isinstance(team.created_at, datetime)
        assert team.vehicle_accidents.total() == 0

    def test_camel_case_document(self):
        document = Team(name="Alpha", year=2025, work_accident=1).to_document()

        assert "id" not in document
        assert document["workAccident"] == 1
        assert document["vehicleAccidents"]["p100"] == 0

    def test_populate_from_stored_document(self):
        team = Team.model_validate({
            "id": str(ObjectId()),
            "name": "Alpha",
            "year": 2025,
            "inspectionMiss": 2,
            "vehicleAccidents": {"p90_99": 1},
        })

        assert team.inspection_miss == 2
        assert team.vehicle_accidents.p90_99 == 1

    def test_negative_counter(self):
        with pytest.raises(ValidationError):
            Team(name="Alpha", year=2025, activity=-1)

    def test_year_range(self):
        with pytest.raises(ValidationError):
            Team(name="Alpha", year=1999)


class TestVehicleAccidents:

    def test_null_bands_are_zero(self):
        assert VehicleAccidents.model_validate({"p50_59": None, "p100": 2}) == VehicleAccidents(p100=2)

    def test_unknown_band(self):
        with pytest.raises(ValidationError):
            VehicleAccidents.model_validate({"p10_19": 1})


class TestTeamRequests:

    def test_numeric_name_is_text(self):
        assert CreateTeamRequest.model_validate({"name": 7}).name == "7"

    def test_server_owned_fields_ignored(self):
        request = UpdateTeamRequest.model_validate({"totalScore": 1, "id": "x", "fineLane": 1})

        assert request.model_dump(exclude_unset=True) == {"fine_lane": 1}

    def test_whitespace_name_rejected(self):
        with pytest.raises(ValidationError):
            CreateTeamRequest.model_validate({"name": "   "})


class TestOtherEntities:

    def test_notice_content_normalized(self):
        notice = Notice(category="digital_board", title=" Slide ", content={"text": "Drive safe"})

        assert notice.title == "Slide"
        assert notice.content == {"text": "Drive safe", "imageUrl": None}

    def test_notice_unknown_category(self):
        with pytest.raises(ValidationError):
            Notice(category="memo", title="Hello")

    def test_vehicle_dates(self):
        vehicle = Vehicle(plate_number="12GA3456", inspection_date="", insurance_expiry="2026-01-31")

        assert vehicle.inspection_date is None
        assert vehicle.insurance_expiry == "2026-01-31"
        assert vehicle.status == "operating"

    def test_inspection_requires_date(self):
        with pytest.raises(ValidationError):
            SafetyInspection(title="Monthly")

    def test_lock_request_alias(self):
        request = SetLockRequest.model_validate({"isLocked": True, "pin": "2026"})
        assert request.is_locked is True


class TestBulkOperationResponse:

    def test_reset_result_has_no_import_counts(self):
        assert BulkOperationResponse(count=3).to_response() == {"success": True, "count": 3}

    def test_import_result(self):
        result = BulkOperationResponse(count=2, created=1, updated=1)
        assert result.to_response() == {"success": True, "count": 2, "created": 1, "updated": 1}
