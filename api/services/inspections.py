# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Safety inspection service.
"""

import logging
from typing import Any, List

from opentelemetry import trace

from domain import inspections as inspection_domain
from domain.errors import NotFoundError
from models.entities import SafetyInspection
from services.mongodb import INSPECTIONS

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


class InspectionService:

    def __init__(self, store):
        self.store = store

    def list_inspections(self) -> List[SafetyInspection]:
        with tracer.start_as_current_span("inspections.list"):
            documents = self.store.find(INSPECTIONS)
            return inspection_domain.sort_inspections(SafetyInspection.model_validate(doc) for doc in documents)

    def get_inspection(self, inspection_id: str) -> SafetyInspection:
        document = self.store.get(INSPECTIONS, inspection_id)
        if document is None:
            raise NotFoundError(f"Inspection {inspection_id} not found")
        return SafetyInspection.model_validate(document)

    def create_inspection(self, fields: Any) -> SafetyInspection:
        with tracer.start_as_current_span("inspections.create") as span:
            inspection = inspection_domain.build_inspection(fields)
            span.set_attribute("inspection.type", inspection.inspection_type)
            created = SafetyInspection.model_validate(
                self.store.insert(INSPECTIONS, inspection.to_document(), doc_id=inspection.id)
            )
            logger.info(
                "Inspection recorded",
                extra={"inspection_id": created.id, "inspection_date": created.inspection_date}
            )
            return created

    def delete_inspection(self, inspection_id: str) -> None:
        with tracer.start_as_current_span("inspections.delete") as span:
            span.set_attribute("inspection.id", inspection_id)
            if not self.store.delete(INSPECTIONS, inspection_id):
                raise NotFoundError(f"Inspection {inspection_id} not found")
            logger.info("Inspection deleted", extra={"inspection_id": inspection_id})
