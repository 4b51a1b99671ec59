# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Portal edit lock guard for mutating endpoints.
"""

from functools import wraps
from flask import current_app, request
from opentelemetry import trace
import logging

from domain.errors import LockedError

tracer = trace.get_tracer(__name__)
logger = logging.getLogger(__name__)


def require_unlocked(f):
    """Reject the request with 423 while the portal is locked."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        with tracer.start_as_current_span("lock.check") as span:
            locked = current_app.settings_service.get_lock()
            span.set_attribute("portal.locked", locked)
            if locked:
                logger.info(
                    "Mutation rejected while portal is locked",
                    extra={"path": request.path, "method": request.method}
                )
                raise LockedError("The portal is locked for editing")
        return f(*args, **kwargs)
    return decorated_function
