# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Models package - Pydantic schemas and data models for the safety operations portal.
"""

# Base models
from .base import BaseEntity, CamelModel, generate_object_id, utc_now

# Enumerations
from .enums import (
    NoticeCategory,
    EquipmentRequestStatus,
    EquipmentCondition,
    EquipmentItemCategory,
    VehicleStatus,
    InspectionType
)

# Core entities
from .entities import (
    Team,
    VehicleAccidents,
    Notice,
    Vehicle,
    SafetyInspection,
    ChecklistItem,
    Setting,
    NOTICE_CONTENT_MODELS
)

# Request models
from .requests import (
    CreateTeamRequest,
    UpdateTeamRequest,
    ImportTeamRow,
    ImportTeamsRequest,
    ResetAllTeamsRequest,
    CreateNoticeRequest,
    UpdateNoticeRequest,
    EquipmentRequestStatusUpdate,
    SetLockRequest,
    CreateVehicleRequest,
    UpdateVehicleRequest,
    CreateInspectionRequest,
    VehicleFilters,
    TeamPath,
    NoticePath,
    VehiclePath,
    InspectionPath,
    TeamListQuery,
    NoticeListQuery,
    EquipmentSummaryQuery,
    FleetStatsQuery
)

# Response models
from .responses import (
    HalLink,
    ErrorResponse,
    BulkOperationResponse,
    LockStatusResponse,
    FleetStatsResponse,
    EquipmentItemSummary,
    EquipmentSummaryResponse
)

__all__ = [
    # Base models
    "BaseEntity",
    "CamelModel",
    "generate_object_id",
    "utc_now",

    # Enumerations
    "NoticeCategory",
    "EquipmentRequestStatus",
    "EquipmentCondition",
    "EquipmentItemCategory",
    "VehicleStatus",
    "InspectionType",

    # Core entities
    "Team",
    "VehicleAccidents",
    "Notice",
    "Vehicle",
    "SafetyInspection",
    "ChecklistItem",
    "Setting",
    "NOTICE_CONTENT_MODELS",

    # Request models
    "CreateTeamRequest",
    "UpdateTeamRequest",
    "ImportTeamRow",
    "ImportTeamsRequest",
    "ResetAllTeamsRequest",
    "CreateNoticeRequest",
    "UpdateNoticeRequest",
    "EquipmentRequestStatusUpdate",
    "SetLockRequest",
    "CreateVehicleRequest",
    "UpdateVehicleRequest",
    "CreateInspectionRequest",
    "VehicleFilters",
    "TeamPath",
    "NoticePath",
    "VehiclePath",
    "InspectionPath",
    "TeamListQuery",
    "NoticeListQuery",
    "EquipmentSummaryQuery",
    "FleetStatsQuery",

    # Response models
    "HalLink",
    "ErrorResponse",
    "BulkOperationResponse",
    "LockStatusResponse",
    "FleetStatsResponse",
    "EquipmentItemSummary",
    "EquipmentSummaryResponse"
]
