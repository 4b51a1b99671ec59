# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Notice board service.
"""

import logging
from typing import Any, List, Optional

from opentelemetry import trace
from pymongo import DESCENDING

from domain import notices as notice_domain
from domain.errors import NotFoundError, ValidationError
from models.entities import Notice
from models.enums import NoticeCategory
from models.responses import EquipmentSummaryResponse
from services.mongodb import NOTICES

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

CATEGORIES = {category.value for category in NoticeCategory}


class NoticeService:
    """Notices, equipment requests and equipment inventories."""

    def __init__(self, store):
        self.store = store

    def _load(self, notice_id: str) -> Notice:
        document = self.store.get(NOTICES, notice_id)
        if document is None:
            raise NotFoundError(f"Notice {notice_id} not found")
        return Notice.model_validate(document)

    def _save(self, notice: Notice) -> Notice:
        document = self.store.update(NOTICES, notice.id, notice.to_document())
        if document is None:
            raise NotFoundError(f"Notice {notice.id} not found")
        return Notice.model_validate(document)

    def list_notices(self, category: Optional[str] = None) -> List[Notice]:
        """Notices newest first, optionally limited to one category."""
        if category and category not in CATEGORIES:
            raise ValidationError(f"Unknown notice category '{category}'")
        with tracer.start_as_current_span("notices.list") as span:
            filters = {"category": category} if category else {}
            span.set_attribute("notice.category", category or "all")
            documents = self.store.find(NOTICES, filters, sort_by="createdAt", sort_order=DESCENDING)
            return [Notice.model_validate(doc) for doc in documents]

    def create_notice(self, fields: Any) -> Notice:
        with tracer.start_as_current_span("notices.create") as span:
            notice = notice_domain.build_notice(fields)
            span.set_attribute("notice.category", notice.category)
            created = Notice.model_validate(self.store.insert(NOTICES, notice.to_document(), doc_id=notice.id))
            logger.info("Notice created", extra={"notice_id": created.id, "category": created.category})
            return created

    def update_notice(self, notice_id: str, fields: Any) -> Notice:
        with tracer.start_as_current_span("notices.update") as span:
            span.set_attribute("notice.id", notice_id)
            saved = self._save(notice_domain.merge_notice(self._load(notice_id), fields))
            logger.info("Notice updated", extra={"notice_id": saved.id})
            return saved

    def update_request_status(self, notice_id: str, fields: Any) -> Notice:
        """Issue an equipment request or send it back to requested."""
        with tracer.start_as_current_span("notices.update_request_status") as span:
            span.set_attribute("notice.id", notice_id)
            saved = self._save(notice_domain.apply_request_status(self._load(notice_id), fields))
            logger.info(
                "Equipment request status changed",
                extra={"notice_id": saved.id, "request_status": saved.content.get("status")}
            )
            return saved

    def delete_notice(self, notice_id: str) -> None:
        with tracer.start_as_current_span("notices.delete") as span:
            span.set_attribute("notice.id", notice_id)
            if not self.store.delete(NOTICES, notice_id):
                raise NotFoundError(f"Notice {notice_id} not found")
            logger.info("Notice deleted", extra={"notice_id": notice_id})

    def equipment_summary(self, item_category: Optional[str] = None,
                          team: Optional[str] = None) -> EquipmentSummaryResponse:
        with tracer.start_as_current_span("notices.equipment_summary"):
            documents = self.store.find(NOTICES, {"category": NoticeCategory.EQUIP_STATUS.value})
            return notice_domain.summarize_equipment_status(
                (Notice.model_validate(doc) for doc in documents),
                item_category=item_category,
                team=team
            )

    def seed_notices(self, seed_rows: List[dict]) -> int:
        """Insert starter notices when the board is empty."""
        if self.store.count(NOTICES) > 0:
            return 0
        for row in seed_rows:
            notice = notice_domain.build_notice(row)
            self.store.insert(NOTICES, notice.to_document(), doc_id=notice.id)
        logger.info("Seeded notices", extra={"count": len(seed_rows)})
        return len(seed_rows)
