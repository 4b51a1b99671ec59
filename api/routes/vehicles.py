# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Fleet vehicle endpoints.
"""

from flask import request, jsonify, current_app
from flask_openapi3 import APIBlueprint, Tag

from models.requests import VehiclePath, FleetStatsQuery
from middleware.lock import require_unlocked
from middleware.validation import get_json_body

vehicles_tag = Tag(name="Vehicles", description="Fleet vehicle management")
vehicles_bp = APIBlueprint(
    'vehicles',
    __name__,
    url_prefix='/api/vehicles',
    abp_tags=[vehicles_tag]
)


def _format(vehicle, locked=None):
    if locked is None:
        locked = current_app.settings_service.get_lock()
    return current_app.hal_formatter.format_vehicle(vehicle.to_response(), locked=locked)


@vehicles_bp.get('')
def list_vehicles():
    """
    List vehicles.

    Query parameters ``team``, ``status`` and ``search`` narrow the result;
    ``all`` or an empty value disables a filter.
    """
    vehicles = current_app.vehicle_service.list_vehicles(request.args.to_dict())
    locked = current_app.settings_service.get_lock()
    return jsonify([_format(vehicle, locked) for vehicle in vehicles])


@vehicles_bp.get('/stats')
def fleet_stats(query: FleetStatsQuery):
    """Vehicle counts per status."""
    stats = current_app.vehicle_service.fleet_stats(query.team)
    return jsonify(stats.model_dump(by_alias=True))


@vehicles_bp.post('')
@require_unlocked
def create_vehicle():
    vehicle = current_app.vehicle_service.create_vehicle(get_json_body())
    return jsonify(_format(vehicle)), 201


@vehicles_bp.get('/<vehicle_id>')
def get_vehicle(path: VehiclePath):
    return jsonify(_format(current_app.vehicle_service.get_vehicle(path.vehicle_id)))


@vehicles_bp.put('/<vehicle_id>')
@require_unlocked
def update_vehicle(path: VehiclePath):
    vehicle = current_app.vehicle_service.update_vehicle(path.vehicle_id, get_json_body())
    return jsonify(_format(vehicle))


@vehicles_bp.delete('/<vehicle_id>')
@require_unlocked
def delete_vehicle(path: VehiclePath):
    current_app.vehicle_service.delete_vehicle(path.vehicle_id)
    return '', 204
