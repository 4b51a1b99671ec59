# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Team aggregation service.

Loads team records from the record store, applies the pure rules from
``domain.teams`` and persists the result. Every write stores counters and the
recomputed total score together.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

from domain import teams as team_domain
from domain.errors import ConflictError, NotFoundError
from models.entities import Team
from models.responses import BulkOperationResponse
from services.mongodb import TEAMS

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


class TeamService:
    """Create, update, reset, import, delete and list teams."""

    def __init__(self, store, default_year: int = 2025):
        self.store = store
        self.default_year = default_year

    def _load(self, team_id: str) -> Team:
        document = self.store.get(TEAMS, team_id)
        if document is None:
            raise NotFoundError(f"Team {team_id} not found")
        return Team.model_validate(document)

    def _ensure_unique(self, name: str, year: int, team_id: Optional[str] = None) -> None:
        existing = self.store.find_one(TEAMS, {"year": year, "name": name})
        if existing is not None and existing.get("id") != team_id:
            raise ConflictError(f"Team '{name}' already exists for {year}")

    def _save(self, team: Team) -> Team:
        document = self.store.update(TEAMS, team.id, team.to_document())
        if document is None:
            raise NotFoundError(f"Team {team.id} not found")
        return Team.model_validate(document)

    def _insert(self, team: Team) -> Team:
        return Team.model_validate(self.store.insert(TEAMS, team.to_document(), doc_id=team.id))

    def get_team(self, team_id: str) -> Team:
        with tracer.start_as_current_span("teams.get") as span:
            span.set_attribute("team.id", team_id)
            return self._load(team_id)

    def list_teams(self, year: Optional[int] = None) -> List[Tuple[int, Team]]:
        """Teams of a year ordered by score, each with its rank."""
        year = year or self.default_year
        with tracer.start_as_current_span("teams.list") as span:
            span.set_attribute("team.year", year)
            documents = self.store.find(TEAMS, {"year": year})
            ranked = team_domain.rank_teams(Team.model_validate(doc) for doc in documents)
            span.set_attribute("team.count", len(ranked))
            return ranked

    def create_team(self, fields: Any) -> Team:
        with tracer.start_as_current_span("teams.create") as span:
            request = team_domain.parse_create_request(fields)
            team = team_domain.build_team(request, self.default_year)
            span.set_attributes({"team.name": team.name, "team.year": team.year})

            self._ensure_unique(team.name, team.year)
            created = self._insert(team)

            logger.info(
                "Team created",
                extra={"team_id": created.id, "team_name": created.name, "year": created.year,
                       "total_score": created.total_score}
            )
            return created

    def update_team(self, team_id: str, fields: Any) -> Team:
        """
        Merge a partial update onto a stored team.

        Raises:
            NotFoundError: If the team does not exist
            ValidationError: If a provided field is malformed
            ConflictError: If the new name is taken in the team's year
        """
        with tracer.start_as_current_span("teams.update") as span:
            span.set_attribute("team.id", team_id)
            existing = self._load(team_id)
            changes = team_domain.parse_update_request(fields)
            merged = team_domain.merge_update(existing, changes)

            if (merged.name, merged.year) != (existing.name, existing.year):
                self._ensure_unique(merged.name, merged.year, team_id=existing.id)

            saved = self._save(merged)
            logger.info(
                "Team updated",
                extra={"team_id": saved.id, "fields": sorted(changes), "total_score": saved.total_score}
            )
            return saved

    def reset_team(self, team_id: str) -> Team:
        with tracer.start_as_current_span("teams.reset") as span:
            span.set_attribute("team.id", team_id)
            saved = self._save(team_domain.reset_team(self._load(team_id)))
            logger.info("Team reset", extra={"team_id": saved.id})
            return saved

    def reset_all_teams(self, year: Optional[int] = None) -> BulkOperationResponse:
        """
        Reset every team of a year.

        Store failures propagate; teams already reset stay reset.
        """
        year = year or self.default_year
        with tracer.start_as_current_span("teams.reset_all") as span:
            span.set_attribute("team.year", year)
            processed = 0
            try:
                for document in self.store.find(TEAMS, {"year": year}):
                    self._save(team_domain.reset_team(Team.model_validate(document)))
                    processed += 1
            except Exception as e:
                span.record_exception(e)
                span.set_status(Status(StatusCode.ERROR, str(e)))
                logger.error(
                    "Reset of all teams failed",
                    extra={"year": year, "processed": processed, "error": str(e)}
                )
                raise

            span.set_attribute("team.count", processed)
            logger.info("All teams reset", extra={"year": year, "count": processed})
            return BulkOperationResponse(count=processed)

    def import_teams(self, rows: Any, year: Optional[int] = None) -> BulkOperationResponse:
        """
        Merge a batch of rows into the teams of a year by name.

        All rows are validated before any write. Store failures during the
        write phase propagate and earlier writes are kept.
        """
        year = year or self.default_year
        with tracer.start_as_current_span("teams.import") as span:
            span.set_attribute("team.year", year)
            existing = [Team.model_validate(doc) for doc in self.store.find(TEAMS, {"year": year})]
            plan = team_domain.plan_import(rows, existing, year)
            span.set_attributes({
                "import.rows": len(rows),
                "import.created": plan.created,
                "import.updated": plan.updated,
                "import.skipped": plan.skipped
            })

            written = 0
            try:
                for team in plan.to_create:
                    self._insert(team)
                    written += 1
                for team in plan.to_update:
                    self._save(team)
                    written += 1
            except Exception as e:
                span.record_exception(e)
                span.set_status(Status(StatusCode.ERROR, str(e)))
                logger.error(
                    "Team import failed",
                    extra={"year": year, "written": written, "error": str(e)}
                )
                raise

            logger.info(
                "Teams imported",
                extra={"year": year, "created_count": plan.created, "updated_count": plan.updated,
                       "skipped": plan.skipped}
            )
            return BulkOperationResponse(count=plan.count, created=plan.created, updated=plan.updated)

    def delete_team(self, team_id: str) -> None:
        with tracer.start_as_current_span("teams.delete") as span:
            span.set_attribute("team.id", team_id)
            if not self.store.delete(TEAMS, team_id):
                raise NotFoundError(f"Team {team_id} not found")
            logger.info("Team deleted", extra={"team_id": team_id})

    def seed_teams(self, seed_rows: List[Dict[str, Any]], year: Optional[int] = None) -> int:
        """Insert default teams when the year has none; returns how many were added."""
        year = year or self.default_year
        if self.store.count(TEAMS, {"year": year}) > 0:
            return 0
        for row in seed_rows:
            request = team_domain.parse_create_request(dict(row, year=year))
            self._insert(team_domain.build_team(request, year))
        logger.info("Seeded teams", extra={"year": year, "count": len(seed_rows)})
        return len(seed_rows)
