# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Notice board endpoints: notices, rules, training material, digital board
slides, equipment requests, equipment inventories and site access requests.
"""

from flask import jsonify, current_app
from flask_openapi3 import APIBlueprint, Tag
import logging

from models.requests import NoticePath, NoticeListQuery, EquipmentSummaryQuery
from middleware.lock import require_unlocked
from middleware.validation import get_json_body

logger = logging.getLogger(__name__)

notices_tag = Tag(name="Notices", description="Notice board and equipment workflow")
notices_bp = APIBlueprint(
    'notices',
    __name__,
    url_prefix='/api/notices',
    abp_tags=[notices_tag]
)


def _format(notice, locked=None):
    if locked is None:
        locked = current_app.settings_service.get_lock()
    return current_app.hal_formatter.format_notice(notice.to_response(), locked=locked)


@notices_bp.get('')
def list_notices(query: NoticeListQuery):
    """List notices newest first, optionally for one category."""
    notices = current_app.notice_service.list_notices(query.category)
    locked = current_app.settings_service.get_lock()
    return jsonify([_format(notice, locked) for notice in notices])


@notices_bp.get('/equipment-summary')
def equipment_summary(query: EquipmentSummaryQuery):
    """Equipment held across teams, grouped by item."""
    summary = current_app.notice_service.equipment_summary(query.category, query.team)
    return jsonify(summary.model_dump(mode="json", by_alias=True))


@notices_bp.post('')
@require_unlocked
def create_notice():
    """Create a notice; content is validated against its category."""
    notice = current_app.notice_service.create_notice(get_json_body())
    return jsonify(_format(notice)), 201


@notices_bp.put('/<notice_id>')
@require_unlocked
def update_notice(path: NoticePath):
    notice = current_app.notice_service.update_notice(path.notice_id, get_json_body())
    return jsonify(_format(notice))


@notices_bp.post('/<notice_id>/status')
@require_unlocked
def update_request_status(path: NoticePath):
    """Issue an equipment request (signature required) or revert it."""
    notice = current_app.notice_service.update_request_status(path.notice_id, get_json_body())
    return jsonify(_format(notice))


@notices_bp.delete('/<notice_id>')
@require_unlocked
def delete_notice(path: NoticePath):
    current_app.notice_service.delete_notice(path.notice_id)
    return '', 204
