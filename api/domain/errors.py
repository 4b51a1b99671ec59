# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Domain exceptions.

Each exception carries the HTTP status and problem type it maps to so the
error handler can render it without knowing every subclass.
"""

from typing import Any, Dict, List, Optional


class DomainError(Exception):
    """Base class for domain errors."""

    status_code = 500
    error_type = "application-error"
    title = "Application Error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(DomainError):
    """Raised when a payload fails shape checks."""

    status_code = 400
    error_type = "validation-error"
    title = "Validation Error"

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.errors = errors or []


class NotFoundError(DomainError):
    """Raised when the target record does not exist."""

    status_code = 404
    error_type = "resource-not-found"
    title = "Resource Not Found"


class ConflictError(DomainError):
    """Raised when a write would break a uniqueness rule."""

    status_code = 409
    error_type = "resource-conflict"
    title = "Resource Conflict"


class InvalidPinError(DomainError):
    """Raised when the admin PIN does not match."""

    status_code = 401
    error_type = "invalid-pin"
    title = "Invalid PIN"


class LockedError(DomainError):
    """Raised when a mutation is attempted while the portal is locked."""

    status_code = 423
    error_type = "portal-locked"
    title = "Portal Locked"


def from_pydantic(message: str, error, row: Optional[int] = None) -> ValidationError:
    """
    Convert a pydantic ValidationError into a domain ValidationError.

    Args:
        message: Top-level error message
        error: pydantic.ValidationError instance
        row: Optional batch row index prefixed to each field path

    Returns:
        ValidationError with per-field details
    """
    errors = []
    for item in error.errors():
        loc = [str(part) for part in item.get("loc", ())]
        if row is not None:
            loc.insert(0, f"rows[{row}]")
        errors.append({
            "field": ".".join(loc),
            "message": item.get("msg"),
            "type": item.get("type"),
        })

    if errors:
        first = errors[0]
        message = f"{message}: {first['field']}: {first['message']}" if first["field"] else f"{message}: {first['message']}"
    return ValidationError(message, errors)
