# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Team safety score endpoints.

Thin HTTP layer over ``TeamService``: bodies are handed to the service as
received, and mutating endpoints are guarded by the portal edit lock.
"""

from flask import jsonify, current_app
from flask_openapi3 import APIBlueprint, Tag
from opentelemetry import trace
import logging

from domain.scoring import score_rules
from models.requests import TeamPath, TeamListQuery, ImportTeamsRequest, ResetAllTeamsRequest
from middleware.lock import require_unlocked
from middleware.validation import get_json_body, get_json_object, parse_model

# Set up logging and tracing
logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

teams_tag = Tag(name="Teams", description="Team safety scores")
teams_bp = APIBlueprint(
    'teams',
    __name__,
    url_prefix='/api/teams',
    abp_tags=[teams_tag]
)


def _format(team, rank=None):
    return current_app.hal_formatter.format_team(
        team.to_response(),
        locked=current_app.settings_service.get_lock(),
        rank=rank
    )


@teams_bp.get('')
def list_teams(query: TeamListQuery):
    """
    List the teams of a year.

    Teams are ordered by total score (highest first) and carry their rank.
    """
    with tracer.start_as_current_span("teams.list.request") as span:
        ranked = current_app.team_service.list_teams(query.year)
        locked = current_app.settings_service.get_lock()
        span.set_attribute("teams.count", len(ranked))
        return jsonify([
            current_app.hal_formatter.format_team(team.to_response(), locked=locked, rank=rank)
            for rank, team in ranked
        ])


@teams_bp.get('/score-rules')
def get_score_rules():
    """Scoring coefficients."""
    return jsonify(score_rules())


@teams_bp.post('')
@require_unlocked
def create_team():
    """Create a team; missing counters start at zero."""
    team = current_app.team_service.create_team(get_json_body())
    return jsonify(_format(team)), 201


@teams_bp.post('/reset-all')
@require_unlocked
def reset_all_teams():
    """Reset every team of a year."""
    body = parse_model(ResetAllTeamsRequest, get_json_object(), "Invalid reset request")
    result = current_app.team_service.reset_all_teams(body.year)
    return jsonify(result.to_response())


@teams_bp.post('/import')
@require_unlocked
def import_teams():
    """
    Bulk import team counters.

    Rows are matched to existing teams of the year by name. The whole batch
    is rejected if any named row is malformed.
    """
    body = parse_model(ImportTeamsRequest, get_json_object(), "Invalid import request")
    result = current_app.team_service.import_teams(body.rows, body.year)
    return jsonify(result.to_response())


@teams_bp.get('/<team_id>')
def get_team(path: TeamPath):
    team = current_app.team_service.get_team(path.team_id)
    return jsonify(_format(team))


@teams_bp.put('/<team_id>')
@require_unlocked
def update_team(path: TeamPath):
    """Merge the provided fields onto the team and recompute its score."""
    team = current_app.team_service.update_team(path.team_id, get_json_body())
    return jsonify(_format(team))


@teams_bp.patch('/<team_id>')
@require_unlocked
def patch_team(path: TeamPath):
    """Same as PUT; updates are always partial."""
    team = current_app.team_service.update_team(path.team_id, get_json_body())
    return jsonify(_format(team))


@teams_bp.post('/<team_id>/reset')
@require_unlocked
def reset_team(path: TeamPath):
    team = current_app.team_service.reset_team(path.team_id)
    return jsonify(_format(team))


@teams_bp.delete('/<team_id>')
@require_unlocked
def delete_team(path: TeamPath):
    current_app.team_service.delete_team(path.team_id)
    return '', 204
