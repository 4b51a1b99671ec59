# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Enumeration types for the safety operations portal.
"""

from enum import Enum


class NoticeCategory(str, Enum):
    """Board category a notice is published under."""
    NOTICE = "notice"
    RULE = "rule"
    EDU = "edu"
    EQUIPMENT = "equipment"
    DIGITAL_BOARD = "digital_board"
    EQUIP_REQUEST = "equip_request"
    EQUIP_STATUS = "equip_status"
    ACCESS = "access"


class EquipmentRequestStatus(str, Enum):
    """Safety equipment request workflow status."""
    REQUESTED = "requested"
    ISSUED = "issued"


class EquipmentCondition(str, Enum):
    """Condition of an equipment item held by a team."""
    REGISTERED = "registered"
    GOOD = "good"
    BAD = "bad"


class EquipmentItemCategory(str, Enum):
    """Safety equipment item grouping."""
    PROTECTIVE_GEAR = "protective_gear"
    SAFETY_SUPPLIES = "safety_supplies"
    OTHER = "other"


class VehicleStatus(str, Enum):
    """Fleet vehicle status."""
    OPERATING = "operating"
    MAINTENANCE = "maintenance"
    IDLE = "idle"
    SCRAP_SCHEDULED = "scrap_scheduled"


class InspectionType(str, Enum):
    """Kind of safety inspection."""
    SAFETY_INSPECTION = "safety_inspection"
    SPECIAL_INSPECTION = "special_inspection"
    JOINT_INSPECTION = "joint_inspection"
