# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Portal settings endpoints.
"""

from flask import jsonify, current_app
from flask_openapi3 import APIBlueprint, Tag

from models.responses import LockStatusResponse, ErrorResponse
from middleware.validation import get_json_body

settings_tag = Tag(name="Settings", description="Portal edit lock")
settings_bp = APIBlueprint(
    'settings',
    __name__,
    url_prefix='/api/settings',
    abp_tags=[settings_tag]
)


@settings_bp.get('/lock', responses={200: LockStatusResponse})
def get_lock():
    """Current edit lock state."""
    status = LockStatusResponse(is_locked=current_app.settings_service.get_lock())
    return jsonify(status.model_dump(by_alias=True, exclude_none=True))


@settings_bp.post('/lock', responses={200: LockStatusResponse, 400: ErrorResponse, 401: ErrorResponse})
def set_lock():
    """
    Lock or unlock the portal.

    Requires the admin PIN; a wrong or missing PIN is rejected with 401.
    """
    is_locked = current_app.settings_service.set_lock(get_json_body())
    status = LockStatusResponse(success=True, is_locked=is_locked)
    return jsonify(status.model_dump(by_alias=True, exclude_none=True))
