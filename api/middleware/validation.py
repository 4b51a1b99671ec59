# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Request body helpers.
"""

from flask import request
from typing import Any, Dict, Type
from pydantic import BaseModel, ValidationError as PydanticValidationError
import logging

from domain.errors import ValidationError, from_pydantic

logger = logging.getLogger(__name__)


def get_json_body(default: Any = None) -> Any:
    """
    Parse the JSON request body.

    An empty body yields ``default`` (an empty dict unless given). A body
    that is present but not valid JSON is a validation error.

    Raises:
        ValidationError: If the body cannot be parsed
    """
    if not request.get_data(cache=True):
        return {} if default is None else default

    body = request.get_json(silent=True, force=True)
    if body is None:
        logger.warning(
            "Malformed JSON body",
            extra={"path": request.path, "content_type": request.content_type}
        )
        raise ValidationError(
            "Request body must be valid JSON",
            [{"field": "body", "message": "Malformed JSON", "type": "json_invalid"}]
        )
    return body


def get_json_object() -> Dict[str, Any]:
    """Parse a JSON body that must be an object."""
    body = get_json_body()
    if not isinstance(body, dict):
        raise ValidationError(
            "Request body must be a JSON object",
            [{"field": "body", "message": "Expected an object", "type": "dict_type"}]
        )
    return body


def parse_model(model: Type[BaseModel], data: Any, message: str) -> BaseModel:
    """
    Validate data against a pydantic model.

    Raises:
        ValidationError: With per-field details when validation fails
    """
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        raise from_pydantic(message, e)
