# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Response models for API endpoints with HAL support.
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field
from .base import CamelModel


class HalLink(BaseModel):
    """HAL link representation."""

    href: str = Field(..., description="Link URL")
    method: Optional[str] = Field(None, description="HTTP method")
    type: Optional[str] = Field(None, description="Media type")
    title: Optional[str] = Field(None, description="Link title")


class ErrorResponse(BaseModel):
    """RFC 7807 problem document."""

    type: str = Field(..., description="Problem type URI")
    title: str = Field(..., description="Short summary")
    status: int = Field(..., description="HTTP status code")
    detail: str = Field(..., description="Human readable explanation")
    instance: str = Field(..., description="Request path")
    message: str = Field(..., description="Same as detail, for portal clients")
    errors: Optional[List[Dict[str, Any]]] = Field(None, description="Field level errors")


class BulkOperationResponse(CamelModel):
    """Result of a bulk team operation."""

    success: bool = True
    count: int = Field(..., description="Records processed")
    created: Optional[int] = None
    updated: Optional[int] = None

    def to_response(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class LockStatusResponse(CamelModel):
    """Portal edit lock state; ``success`` is only sent after a change."""

    success: Optional[bool] = None
    is_locked: bool


class FleetStatsResponse(CamelModel):
    """Vehicle counts per status."""

    total: int = 0
    operating: int = 0
    maintenance: int = 0
    idle: int = 0
    scrap_scheduled: int = 0


class EquipmentItemSummary(CamelModel):
    name: str
    category: str
    total_quantity: int = 0
    registered_qty: int = 0
    good_qty: int = 0
    bad_qty: int = 0
    teams: List[str] = Field(default_factory=list)


class EquipmentSummaryResponse(CamelModel):
    """Equipment held across all teams."""

    total_quantity: int = 0
    registered_qty: int = 0
    good_qty: int = 0
    bad_qty: int = 0
    items: List[EquipmentItemSummary] = Field(default_factory=list)
