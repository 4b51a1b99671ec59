# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Safety inspection endpoints.
"""

from flask import jsonify, current_app
from flask_openapi3 import APIBlueprint, Tag

from domain.inspections import inspection_response
from models.requests import InspectionPath
from middleware.lock import require_unlocked
from middleware.validation import get_json_body

inspections_tag = Tag(name="Safety Inspections", description="Safety inspection records")
inspections_bp = APIBlueprint(
    'inspections',
    __name__,
    url_prefix='/api/safety-inspections',
    abp_tags=[inspections_tag]
)


def _format(inspection, locked=None):
    if locked is None:
        locked = current_app.settings_service.get_lock()
    return current_app.hal_formatter.format_inspection(inspection_response(inspection), locked=locked)


@inspections_bp.get('')
def list_inspections():
    """List inspections, most recent inspection day first."""
    inspections = current_app.inspection_service.list_inspections()
    locked = current_app.settings_service.get_lock()
    return jsonify([_format(inspection, locked) for inspection in inspections])


@inspections_bp.post('')
@require_unlocked
def create_inspection():
    """Record an inspection; without a checklist the standard items are used."""
    inspection = current_app.inspection_service.create_inspection(get_json_body())
    return jsonify(_format(inspection)), 201


@inspections_bp.get('/<inspection_id>')
def get_inspection(path: InspectionPath):
    return jsonify(_format(current_app.inspection_service.get_inspection(path.inspection_id)))


@inspections_bp.delete('/<inspection_id>')
@require_unlocked
def delete_inspection(path: InspectionPath):
    current_app.inspection_service.delete_inspection(path.inspection_id)
    return '', 204
