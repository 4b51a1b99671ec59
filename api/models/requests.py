# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Request models for API endpoints.
"""

from typing import Annotated, Any, Dict, List, Optional, Union
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from .base import CamelModel, IsoDate
from .entities import Counter, Mileage, VehicleAccidents, ChecklistItem
from .enums import NoticeCategory, EquipmentRequestStatus, EquipmentItemCategory, VehicleStatus, InspectionType


class RequestModel(CamelModel):
    """Request body; derived or server-owned keys are dropped silently."""

    model_config = ConfigDict(extra="ignore")


class TeamCounters(RequestModel):
    """Counter fields shared by team create and update requests."""

    vehicle_count: Optional[Counter] = Field(None, description="Vehicles operated by the team")
    work_accident: Optional[Counter] = Field(None, description="Industrial accidents")
    fine_speed: Optional[Counter] = Field(None, description="Speeding fines")
    fine_signal: Optional[Counter] = Field(None, description="Signal violation fines")
    fine_lane: Optional[Counter] = Field(None, description="Lane violation fines")
    inspection_miss: Optional[Counter] = Field(None, description="Missed inspections")
    suggestion: Optional[Counter] = Field(None, description="Safety suggestions")
    activity: Optional[Counter] = Field(None, description="Safety activities")


def _clean_name(v):
    if v is None:
        return v
    if isinstance(v, (int, float)):
        v = str(v)
    if isinstance(v, str):
        if not v.strip():
            raise ValueError("Team name cannot be empty")
        return v.strip()
    return v


TeamName = Annotated[str, BeforeValidator(_clean_name), Field(min_length=1, max_length=100)]


class CreateTeamRequest(TeamCounters):
    """Request model for creating a team."""

    name: TeamName = Field(..., description="Team name")
    year: Optional[int] = Field(None, ge=2000, le=2100, description="Year partition")
    vehicle_accidents: Optional[VehicleAccidents] = Field(None, description="Accidents per severity band")


class UpdateTeamRequest(TeamCounters):
    """Request model for a partial team update."""

    name: Optional[TeamName] = Field(None, description="Team name")
    year: Optional[int] = Field(None, ge=2000, le=2100, description="Year partition")
    vehicle_accidents: Optional[VehicleAccidents] = Field(None, description="Accidents per severity band")


class ImportTeamRow(TeamCounters):
    """One row of a bulk team import; accident bands are never imported."""

    name: TeamName = Field(..., description="Team name")


class ImportTeamsRequest(RequestModel):
    year: Optional[int] = Field(None, ge=2000, le=2100)
    rows: List[Dict[str, Any]] = Field(default_factory=list)


class ResetAllTeamsRequest(RequestModel):
    year: Optional[int] = Field(None, ge=2000, le=2100)


class CreateNoticeRequest(RequestModel):
    """Request model for creating a notice."""

    category: NoticeCategory = Field(..., description="Board category")
    title: str = Field(..., min_length=1, max_length=200, description="Notice title")
    content: Union[Dict[str, Any], str] = Field(default_factory=dict, description="Category specific content")
    image_url: Optional[str] = Field(None, description="Attached image URL")


class UpdateNoticeRequest(RequestModel):
    """Request model for updating a notice."""

    title: Optional[str] = Field(None, min_length=1, max_length=200)
    content: Optional[Union[Dict[str, Any], str]] = None
    image_url: Optional[str] = None


class EquipmentRequestStatusUpdate(RequestModel):
    status: EquipmentRequestStatus = Field(..., description="Target status")
    signature: Optional[str] = Field(None, description="Recipient signature image")


class SetLockRequest(RequestModel):
    is_locked: bool = Field(..., description="Desired lock state")
    pin: Optional[str] = Field(None, description="Admin PIN")


class CreateVehicleRequest(RequestModel):
    """Request model for registering a vehicle."""

    plate_number: str = Field(..., min_length=1, max_length=20)
    vehicle_type: Optional[str] = Field(None, max_length=50)
    model: Optional[str] = Field(None, max_length=100)
    year: Optional[int] = Field(None, ge=1950, le=2100)
    team: Optional[str] = Field(None, max_length=100)
    driver: Optional[str] = Field(None, max_length=100)
    contact: Optional[str] = Field(None, max_length=50)
    status: Optional[VehicleStatus] = None
    purchase_date: IsoDate = None
    inspection_date: IsoDate = None
    insurance_expiry: IsoDate = None
    mileage: Optional[Mileage] = None
    notes: Optional[str] = Field(None, max_length=2000)
    image_url: Optional[str] = None


class UpdateVehicleRequest(CreateVehicleRequest):
    """Request model for a partial vehicle update."""

    plate_number: Optional[str] = Field(None, min_length=1, max_length=20)


class CreateInspectionRequest(RequestModel):
    """Request model for recording a safety inspection."""

    inspection_type: Optional[InspectionType] = None
    title: str = Field(..., min_length=1, max_length=200)
    location: Optional[str] = Field(None, max_length=200)
    inspector: Optional[str] = Field(None, max_length=100)
    inspection_date: IsoDate = Field(..., description="Inspection day")
    checklist: Optional[List[ChecklistItem]] = None
    notes: Optional[str] = Field(None, max_length=5000)
    images: List[str] = Field(default_factory=list)


class VehicleFilters(BaseModel):
    """Query filters for listing vehicles."""

    model_config = ConfigDict(use_enum_values=True)

    team: Optional[str] = None
    status: Optional[VehicleStatus] = None
    search: Optional[str] = None


class TeamPath(BaseModel):
    team_id: str = Field(..., description="Team ID")


class NoticePath(BaseModel):
    notice_id: str = Field(..., description="Notice ID")


class VehiclePath(BaseModel):
    vehicle_id: str = Field(..., description="Vehicle ID")


class InspectionPath(BaseModel):
    inspection_id: str = Field(..., description="Inspection ID")


class TeamListQuery(BaseModel):
    year: Optional[int] = Field(None, ge=2000, le=2100, description="Year partition")


class NoticeListQuery(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    category: Optional[NoticeCategory] = Field(None, description="Board category")


class EquipmentSummaryQuery(BaseModel):
    """Filters for the equipment inventory summary."""

    model_config = ConfigDict(use_enum_values=True)

    category: Optional[EquipmentItemCategory] = Field(None, description="Item category")
    team: Optional[str] = Field(None, description="Team name")


class FleetStatsQuery(BaseModel):
    team: Optional[str] = Field(None, description="Team name")
