# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Portal edit lock rules.
"""

import hmac
from typing import Any, Mapping, Optional

from pydantic import ValidationError as PydanticValidationError

from models.requests import SetLockRequest
from domain.errors import InvalidPinError, ValidationError, from_pydantic

GLOBAL_LOCK_KEY = "global_lock"


def parse_lock_value(value: Optional[str]) -> bool:
    """Stored lock flag; a missing setting means unlocked."""
    return str(value).strip().lower() == "true" if value is not None else False


def format_lock_value(is_locked: bool) -> str:
    return "true" if is_locked else "false"


def verify_pin(pin: Optional[str], admin_pin: str) -> None:
    """
    Check the admin PIN in constant time.

    Raises:
        InvalidPinError: If the PIN is missing or does not match
    """
    if not pin or not hmac.compare_digest(str(pin).encode("utf-8"), str(admin_pin).encode("utf-8")):
        raise InvalidPinError("Invalid PIN")


def parse_lock_request(fields: Any) -> SetLockRequest:
    if not isinstance(fields, Mapping):
        raise ValidationError("Lock payload must be a JSON object")
    try:
        return SetLockRequest.model_validate(fields)
    except PydanticValidationError as e:
        raise from_pydantic("Invalid lock request", e)
