# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Portal settings service (edit lock).
"""

import logging
from typing import Any

from opentelemetry import trace

from domain import settings as settings_domain
from domain.errors import InvalidPinError
from models.entities import Setting
from services.mongodb import SETTINGS

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


class SettingsService:
    """Read and toggle the portal-wide edit lock."""

    def __init__(self, store, admin_pin: str = "2026"):
        self.store = store
        self.admin_pin = admin_pin

    def get_lock(self) -> bool:
        document = self.store.find_one(SETTINGS, {"key": settings_domain.GLOBAL_LOCK_KEY})
        if document is None:
            return False
        return settings_domain.parse_lock_value(Setting.model_validate(document).value)

    def set_lock(self, fields: Any) -> bool:
        """
        Lock or unlock the portal.

        Raises:
            ValidationError: If the payload is malformed
            InvalidPinError: If the admin PIN is missing or wrong
        """
        with tracer.start_as_current_span("settings.set_lock") as span:
            request = settings_domain.parse_lock_request(fields)
            span.set_attribute("settings.is_locked", request.is_locked)
            try:
                settings_domain.verify_pin(request.pin, self.admin_pin)
            except InvalidPinError:
                logger.warning("Lock change rejected: invalid PIN")
                raise

            self.store.upsert_setting(
                settings_domain.GLOBAL_LOCK_KEY,
                settings_domain.format_lock_value(request.is_locked)
            )
            logger.info("Portal lock changed", extra={"is_locked": request.is_locked})
            return request.is_locked
