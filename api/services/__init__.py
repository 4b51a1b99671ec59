# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Services package - Record store access and side effects.
"""

from .mongodb import MongoDBService, get_mongodb_service, close_mongodb_connection
from .teams import TeamService
from .notices import NoticeService
from .vehicles import VehicleService
from .inspections import InspectionService
from .settings import SettingsService

__all__ = [
    "MongoDBService",
    "get_mongodb_service",
    "close_mongodb_connection",
    "TeamService",
    "NoticeService",
    "VehicleService",
    "InspectionService",
    "SettingsService"
]
