# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Tests for the notice board and the equipment workflow.
"""

import json
import pytest

from domain import notices as notice_domain
from domain.errors import ValidationError
from models.entities import Notice


def equipment_status(team, items):
    return {"category": "equip_status", "title": f"{team} inventory", "content": {"team": team, "items": items}}


class TestNoticeContent:

    def test_json_string_content_is_decoded(self):
        notice = notice_domain.build_notice({
            "category": "equip_request",
            "title": "Gloves",
            "content": json.dumps({"team": "Alpha", "requester": "Lee",
                                   "items": [{"name": "Gloves", "quantity": 2}]}),
        })

        assert notice.content["team"] == "Alpha"
        assert notice.content["status"] == "requested"
        assert notice.content["items"][0]["category"] == "other"

    def test_plain_text_becomes_text_content(self):
        notice = notice_domain.build_notice({"category": "notice", "title": "Hello", "content": "Wear helmets"})
        assert notice.content == {"text": "Wear helmets"}

    def test_plain_text_rejected_for_structured_category(self):
        with pytest.raises(ValidationError):
            notice_domain.build_notice({"category": "access", "title": "Visit", "content": "tomorrow"})

    def test_unknown_category(self):
        with pytest.raises(ValidationError) as exc_info:
            notice_domain.build_notice({"category": "gossip", "title": "Hi"})
        assert exc_info.value.errors[0]["field"] == "category"

    def test_access_period_checked(self):
        content = {
            "visitStartDate": "2025-05-10",
            "visitEndDate": "2025-05-09",
            "visitPurpose": "Boiler repair",
            "people": [{"applicantName": "Park"}],
        }
        with pytest.raises(ValidationError):
            notice_domain.build_notice({"category": "access", "title": "Visit", "content": content})

    def test_update_keeps_category(self):
        existing = notice_domain.build_notice({"category": "rule", "title": "Rule 1", "content": "Old"})
        merged = notice_domain.merge_notice(existing, {"category": "notice", "content": "New"})

        assert merged.category == "rule"
        assert merged.content == {"text": "New"}
        assert merged.title == "Rule 1"


class TestRequestStatus:

    @pytest.fixture
    def request_notice(self, sample_equipment_request):
        return notice_domain.build_notice(sample_equipment_request)

    def test_issue_requires_signature(self, request_notice):
        with pytest.raises(ValidationError) as exc_info:
            notice_domain.apply_request_status(request_notice, {"status": "issued", "signature": "  "})
        assert exc_info.value.errors[0]["field"] == "signature"

    def test_issue_and_revert(self, request_notice):
        issued = notice_domain.apply_request_status(
            request_notice, {"status": "issued", "signature": "data:image/png;base64,AAA"}
        )
        assert issued.content["status"] == "issued"
        assert issued.content["issuedAt"] is not None

        reverted = notice_domain.apply_request_status(issued, {"status": "requested"})
        assert reverted.content["status"] == "requested"
        assert reverted.content["signature"] is None
        assert reverted.content["issuedAt"] is None

    def test_only_equipment_requests_have_status(self):
        notice = notice_domain.build_notice({"category": "notice", "title": "Hello"})
        with pytest.raises(ValidationError):
            notice_domain.apply_request_status(notice, {"status": "issued", "signature": "x"})


class TestEquipmentSummary:

    def test_groups_items_across_teams(self):
        notices = [
            Notice(**equipment_status("Alpha", [
                {"name": "Helmet", "quantity": 5, "category": "protective_gear", "condition": "good"},
                {"name": "Cone", "quantity": 10, "category": "safety_supplies", "condition": "registered"},
            ])),
            Notice(**equipment_status("Beta", [
                {"name": "Helmet", "quantity": 3, "category": "protective_gear", "condition": "bad"},
            ])),
            Notice(category="notice", title="Unrelated"),
        ]

        summary = notice_domain.summarize_equipment_status(notices)

        assert (summary.total_quantity, summary.good_qty, summary.bad_qty, summary.registered_qty) == (18, 5, 3, 8)
        helmet = next(item for item in summary.items if item.name == "Helmet")
        assert helmet.total_quantity == 8
        assert helmet.teams == ["Alpha", "Beta"]

    def test_filters(self):
        notices = [
            Notice(**equipment_status("Alpha", [
                {"name": "Helmet", "quantity": 5, "category": "protective_gear", "condition": "good"},
                {"name": "Cone", "quantity": 10, "category": "safety_supplies"},
            ])),
            Notice(**equipment_status("Beta", [{"name": "Helmet", "quantity": 3, "category": "protective_gear"}])),
        ]

        by_category = notice_domain.summarize_equipment_status(notices, item_category="safety_supplies")
        by_team = notice_domain.summarize_equipment_status(notices, team="Beta")

        assert [item.name for item in by_category.items] == ["Cone"]
        assert by_team.total_quantity == 3


class TestNoticeEndpoints:

    def test_create_and_list(self, client):
        assert client.post('/api/notices', json={"category": "notice", "title": "First", "content": "A"}).status_code == 201
        assert client.post('/api/notices', json={"category": "rule", "title": "Second"}).status_code == 201

        everything = client.get('/api/notices').get_json()
        rules = client.get('/api/notices?category=rule').get_json()

        assert {notice["title"] for notice in everything} == {"First", "Second"}
        assert [notice["title"] for notice in rules] == ["Second"]

    def test_list_unknown_category(self, client):
        assert client.get('/api/notices?category=gossip').status_code == 400

    def test_equipment_request_workflow(self, client, sample_equipment_request):
        created = client.post('/api/notices', json=sample_equipment_request).get_json()
        assert "status" in created["_links"]

        missing_signature = client.post(f"/api/notices/{created['id']}/status", json={"status": "issued"})
        assert missing_signature.status_code == 400

        issued = client.post(
            f"/api/notices/{created['id']}/status",
            json={"status": "issued", "signature": "data:image/png;base64,AAA"}
        )
        assert issued.status_code == 200
        assert issued.get_json()["content"]["status"] == "issued"

    def test_update_and_delete(self, client):
        created = client.post('/api/notices', json={"category": "edu", "title": "Course"}).get_json()

        updated = client.put(f"/api/notices/{created['id']}", json={"title": "Course 2"})
        assert updated.get_json()["title"] == "Course 2"

        assert client.delete(f"/api/notices/{created['id']}").status_code == 204
        assert client.put(f"/api/notices/{created['id']}", json={"title": "x"}).status_code == 404

    def test_equipment_summary_endpoint(self, client):
        client.post('/api/notices', json=equipment_status("Alpha", [
            {"name": "Helmet", "quantity": 4, "category": "protective_gear", "condition": "good"},
        ]))

        data = client.get('/api/notices/equipment-summary?category=protective_gear').get_json()

        assert data["totalQuantity"] == 4
        assert data["goodQty"] == 4
        assert data["items"][0]["teams"] == ["Alpha"]

    def test_locked_board_rejects_writes(self, client, lock_portal):
        response = client.post('/api/notices', json={"category": "notice", "title": "Blocked"})

        assert response.status_code == 423
        assert client.get('/api/notices').get_json() == []
