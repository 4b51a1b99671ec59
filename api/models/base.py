# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Base entity models with common fields and serialization helpers.
"""

from datetime import date, datetime, timezone
from typing import Annotated, Any, Dict, Optional
from pydantic import AfterValidator, BaseModel, Field, ConfigDict
from pydantic.alias_generators import to_camel
from bson import ObjectId


def generate_object_id() -> str:
    """Generate a new MongoDB ObjectId as string."""
    return str(ObjectId())


def utc_now() -> datetime:
    """Current UTC timestamp."""
    return datetime.now(timezone.utc)


class CamelModel(BaseModel):
    """Model whose wire and storage format uses camelCase keys."""

    model_config = ConfigDict(
        # Allow population by field name or alias
        populate_by_name=True,
        # Use enum values instead of enum objects
        use_enum_values=True,
        # Run defaults through validation so enum defaults are stored as values
        validate_default=True,
        # Validate assignment
        validate_assignment=True,
        alias_generator=to_camel,
    )


class BaseEntity(CamelModel):
    """Base entity with common fields for all stored records."""

    id: str = Field(default_factory=generate_object_id, description="Unique identifier")
    created_at: datetime = Field(default_factory=utc_now, description="Creation timestamp")
    updated_at: datetime = Field(default_factory=utc_now, description="Last update timestamp")
    schema_version: int = Field(default=1, description="Schema version for migrations")

    def update_timestamp(self) -> None:
        """Update the updated_at field."""
        self.updated_at = utc_now()

    def to_document(self) -> Dict[str, Any]:
        """Serialize for storage; the store owns the identifier."""
        return self.model_dump(by_alias=True, exclude={"id"})

    def to_response(self) -> Dict[str, Any]:
        """Serialize for a JSON response."""
        return self.model_dump(mode="json", by_alias=True)


def validate_iso_date(value: Optional[str]) -> Optional[str]:
    """Validate an ISO calendar date (YYYY-MM-DD), keeping it as text."""
    if value is None or value == "":
        return None
    try:
        return date.fromisoformat(value).isoformat()
    except ValueError:
        raise ValueError(f"Invalid date '{value}', expected YYYY-MM-DD")


IsoDate = Annotated[Optional[str], AfterValidator(validate_iso_date)]
