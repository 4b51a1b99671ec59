# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Core entity models for the safety operations portal.
"""

from datetime import datetime
from typing import Annotated, Any, Dict, List, Optional, Type
from pydantic import BaseModel, Field, field_validator, model_validator, ConfigDict
from .base import BaseEntity, CamelModel, IsoDate
from .enums import (
    NoticeCategory,
    EquipmentRequestStatus,
    EquipmentCondition,
    EquipmentItemCategory,
    VehicleStatus,
    InspectionType,
)

# Stored integers, and the score derived from them, must fit in BSON int64
MAX_COUNT = 1_000_000
MAX_MILEAGE = 10_000_000

Counter = Annotated[int, Field(ge=0, le=MAX_COUNT)]
Mileage = Annotated[int, Field(ge=0, le=MAX_MILEAGE)]


class VehicleAccidents(BaseModel):
    """Vehicle accident counts per at-fault severity band."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    p50_59: Counter = Field(default=0, description="50-59% at fault")
    p60_69: Counter = Field(default=0, description="60-69% at fault")
    p70_79: Counter = Field(default=0, description="70-79% at fault")
    p80_89: Counter = Field(default=0, description="80-89% at fault")
    p90_99: Counter = Field(default=0, description="90-99% at fault")
    p100: Counter = Field(default=0, description="100% at fault")

    @model_validator(mode="before")
    @classmethod
    def null_bands_are_zero(cls, data):
        if isinstance(data, dict):
            return {key: (0 if value is None else value) for key, value in data.items()}
        return data

    def total(self) -> int:
        """Total number of vehicle accidents across bands."""
        return sum(self.model_dump().values())


class Team(BaseEntity):
    """Team safety record for one year."""

    name: str = Field(..., min_length=1, max_length=100, description="Team name, unique within a year")
    year: int = Field(..., ge=2000, le=2100, description="Year partition")
    vehicle_count: Counter = Field(default=0, description="Vehicles operated by the team")
    work_accident: Counter = Field(default=0, description="Industrial accidents")
    fine_speed: Counter = Field(default=0, description="Speeding fines")
    fine_signal: Counter = Field(default=0, description="Signal violation fines")
    fine_lane: Counter = Field(default=0, description="Lane violation fines")
    inspection_miss: Counter = Field(default=0, description="Missed inspections")
    suggestion: Counter = Field(default=0, description="Safety suggestions submitted")
    activity: Counter = Field(default=0, description="Safety activities held")
    vehicle_accidents: VehicleAccidents = Field(default_factory=VehicleAccidents)
    total_score: int = Field(default=100, description="Derived safety score")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        """Validate team name."""
        if not v.strip():
            raise ValueError("Team name cannot be empty")
        return v.strip()


# Notice content variants, selected by notice category

class TextContent(CamelModel):
    """Plain text notice, rule or training material."""

    text: str = Field(default="", max_length=10000)


class MaterialContent(CamelModel):
    """Safety gear material with an optional attached workbook."""

    text: str = Field(default="", max_length=10000)
    excel_url: Optional[str] = None
    excel_name: Optional[str] = None


class BoardSlideContent(CamelModel):
    """Digital board slide."""

    text: str = Field(default="", max_length=2000)
    image_url: Optional[str] = None


class EquipmentRequestItem(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    quantity: int = Field(..., ge=1, le=MAX_COUNT)
    category: EquipmentItemCategory = EquipmentItemCategory.OTHER


class EquipmentRequestContent(CamelModel):
    """Request for safety equipment to be issued to a team."""

    team: str = Field(..., min_length=1, max_length=100)
    requester: str = Field(..., min_length=1, max_length=100)
    items: List[EquipmentRequestItem] = Field(..., min_length=1)
    status: EquipmentRequestStatus = EquipmentRequestStatus.REQUESTED
    signature: Optional[str] = Field(None, description="Recipient signature image (data URL)")
    issued_at: Optional[datetime] = None

    @model_validator(mode="after")
    def validate_issue(self):
        if self.status == EquipmentRequestStatus.ISSUED and not self.signature:
            raise ValueError("An issued request requires a signature")
        return self


class EquipmentStatusItem(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    quantity: int = Field(default=0, ge=0, le=MAX_COUNT)
    category: EquipmentItemCategory = EquipmentItemCategory.OTHER
    condition: EquipmentCondition = EquipmentCondition.REGISTERED


class EquipmentStatusContent(CamelModel):
    """Equipment inventory held by one team."""

    team: str = Field(..., min_length=1, max_length=100)
    items: List[EquipmentStatusItem] = Field(default_factory=list)
    last_updated: Optional[datetime] = None


class AccessPerson(CamelModel):
    applicant_name: str = Field(..., min_length=1, max_length=100)
    company: Optional[str] = None
    phone: Optional[str] = None
    vehicle_number: Optional[str] = None


class AccessRequestContent(CamelModel):
    """Site access request for visitors."""

    visit_start_date: IsoDate = Field(..., description="First visit day")
    visit_start_time: str = Field(default="09:00", pattern=r"^\d{2}:\d{2}$")
    visit_end_date: IsoDate = Field(..., description="Last visit day")
    visit_end_time: str = Field(default="18:00", pattern=r"^\d{2}:\d{2}$")
    visit_purpose: str = Field(..., min_length=1, max_length=200)
    entrance_location: Optional[str] = None
    supervisor_department: Optional[str] = None
    supervisor_name: Optional[str] = None
    people: List[AccessPerson] = Field(..., min_length=1)

    @model_validator(mode="after")
    def validate_period(self):
        if not self.visit_start_date or not self.visit_end_date:
            raise ValueError("Visit start and end dates are required")
        if self.visit_end_date < self.visit_start_date:
            raise ValueError("Visit end date cannot be before start date")
        return self


NOTICE_CONTENT_MODELS: Dict[str, Type[CamelModel]] = {
    NoticeCategory.NOTICE.value: TextContent,
    NoticeCategory.RULE.value: TextContent,
    NoticeCategory.EDU.value: TextContent,
    NoticeCategory.EQUIPMENT.value: MaterialContent,
    NoticeCategory.DIGITAL_BOARD.value: BoardSlideContent,
    NoticeCategory.EQUIP_REQUEST.value: EquipmentRequestContent,
    NoticeCategory.EQUIP_STATUS.value: EquipmentStatusContent,
    NoticeCategory.ACCESS.value: AccessRequestContent,
}


class Notice(BaseEntity):
    """Notice board record; content shape depends on the category."""

    category: NoticeCategory = Field(..., description="Board category")
    title: str = Field(..., min_length=1, max_length=200, description="Notice title")
    content: Dict[str, Any] = Field(default_factory=dict, description="Category specific content")
    image_url: Optional[str] = Field(None, description="Attached image URL")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v):
        if not v.strip():
            raise ValueError("Notice title cannot be empty")
        return v.strip()

    @model_validator(mode="after")
    def validate_content(self):
        """Normalize content through the model for this category."""
        content_model = NOTICE_CONTENT_MODELS[self.category]
        normalized = content_model.model_validate(self.content).model_dump(by_alias=True)
        # Bypass validate_assignment to avoid re-entering this validator
        self.__dict__["content"] = normalized
        return self

    def typed_content(self) -> CamelModel:
        """Content parsed into its category model."""
        return NOTICE_CONTENT_MODELS[self.category].model_validate(self.content)


class Vehicle(BaseEntity):
    """Fleet vehicle."""

    plate_number: str = Field(..., min_length=1, max_length=20, description="License plate")
    vehicle_type: str = Field(default="sedan", max_length=50)
    model: str = Field(default="", max_length=100)
    year: Optional[int] = Field(None, ge=1950, le=2100, description="Model year")
    team: Optional[str] = Field(None, max_length=100)
    driver: Optional[str] = Field(None, max_length=100)
    contact: Optional[str] = Field(None, max_length=50)
    status: VehicleStatus = Field(default=VehicleStatus.OPERATING)
    purchase_date: IsoDate = None
    inspection_date: IsoDate = None
    insurance_expiry: IsoDate = None
    mileage: Mileage = Field(default=0, description="Odometer reading in km")
    notes: Optional[str] = Field(None, max_length=2000)
    image_url: Optional[str] = None

    @field_validator("plate_number")
    @classmethod
    def validate_plate_number(cls, v):
        if not v.strip():
            raise ValueError("Plate number cannot be empty")
        return v.strip()


class ChecklistItem(CamelModel):
    item: str = Field(..., min_length=1, max_length=200)
    checked: bool = False


class SafetyInspection(BaseEntity):
    """Recorded safety inspection."""

    inspection_type: InspectionType = Field(default=InspectionType.SAFETY_INSPECTION)
    title: str = Field(..., min_length=1, max_length=200)
    location: Optional[str] = Field(None, max_length=200)
    inspector: Optional[str] = Field(None, max_length=100)
    inspection_date: IsoDate = Field(..., description="Inspection day")
    checklist: List[ChecklistItem] = Field(default_factory=list)
    notes: Optional[str] = Field(None, max_length=5000)
    images: List[str] = Field(default_factory=list)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v):
        if not v.strip():
            raise ValueError("Inspection title cannot be empty")
        return v.strip()


class Setting(CamelModel):
    """Portal-wide key/value setting."""

    key: str = Field(..., min_length=1, max_length=100)
    value: str = Field(...)
