# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Tests for HAL response formatting.
"""

import pytest

from domain.errors import ConflictError, InvalidPinError, ValidationError
from services.hal import (
    HalLinkBuilder, AffordanceLinkBuilder, HalFormatter, create_hal_formatter, ERROR_TYPE_BASE
)


class TestHalLinkBuilder:

    def test_build_basic_link(self):
        link = HalLinkBuilder("https://api.example.com").build_link("/api/teams")

        assert link.href == "https://api.example.com/api/teams"
        assert link.method == "GET"
        assert link.type is None

    def test_build_action_link(self):
        link = HalLinkBuilder("https://api.example.com").build_action_link("/api/teams/123", "reset")

        assert link.href == "https://api.example.com/api/teams/123/reset"
        assert link.method == "POST"
        assert link.type == "application/json"
        assert link.title == "Reset"

    def test_base_url_normalization(self):
        link = HalLinkBuilder("https://api.example.com/").build_self_link("api/vehicles")
        assert link.href == "https://api.example.com/api/vehicles"


class TestAffordanceLinkBuilder:

    def setup_method(self):
        self.builder = AffordanceLinkBuilder("https://api.example.com")

    def test_unlocked_team(self):
        links = self.builder.build_affordances("team", "123", locked=False)

        assert set(links) == {"self", "collection", "edit", "delete", "reset"}
        assert links["edit"].method == "PUT"
        assert links["delete"].method == "DELETE"

    def test_locked_team_is_read_only(self):
        links = self.builder.build_affordances("team", "123", locked=True)
        assert set(links) == {"self", "collection"}

    @pytest.mark.parametrize("category,has_status", [("equip_request", True), ("notice", False)])
    def test_notice_status_link(self, category, has_status):
        links = self.builder.build_affordances("notice", "n1", locked=False, data={"category": category})
        assert ("status" in links) is has_status

    def test_inspection_cannot_be_edited(self):
        links = self.builder.build_affordances("inspection", "i1", locked=False)

        assert "edit" not in links
        assert links["self"].href == "https://api.example.com/api/safety-inspections/i1"


class TestHalFormatter:

    def setup_method(self):
        self.formatter = create_hal_formatter("https://api.example.com")

    def test_format_team_with_rank(self):
        data = self.formatter.format_team({"id": "t1", "name": "Alpha", "totalScore": 100}, rank=2)

        assert data["rank"] == 2
        assert data["name"] == "Alpha"
        assert data["_links"]["self"]["href"] == "https://api.example.com/api/teams/t1"
        assert "type" not in data["_links"]["self"]

    def test_format_does_not_mutate_input(self):
        team = {"id": "t1", "name": "Alpha"}
        self.formatter.format_team(team, rank=1)
        assert team == {"id": "t1", "name": "Alpha"}

    def test_format_validation_error(self):
        error = ValidationError("Invalid team: name: required", [{"field": "name", "message": "required"}])

        data = self.formatter.format_error(error, "/api/teams")

        assert data["type"] == f"{ERROR_TYPE_BASE}/validation-error"
        assert data["status"] == 400
        assert data["message"] == "Invalid team: name: required"
        assert data["errors"] == [{"field": "name", "message": "required"}]
        assert "schema" in data["_links"]

    def test_format_conflict(self):
        data = self.formatter.format_error(ConflictError("Team 'Alpha' already exists in 2025"), "/api/teams")

        assert data["status"] == 409
        assert "errors" not in data

    def test_format_invalid_pin(self):
        data = self.formatter.format_error(InvalidPinError("Invalid PIN"), "/api/settings/lock")

        assert data["status"] == 401
        assert data["_links"]["lock"]["href"] == "https://api.example.com/api/settings/lock"

    def test_format_server_error(self):
        data = HalFormatter("https://api.example.com").format_server_error("/api/teams")

        assert data["status"] == 500
        assert data["detail"] == "An unexpected error occurred"
