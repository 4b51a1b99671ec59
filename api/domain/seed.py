# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Default records for an empty portal.
"""

SEED_TEAMS = [
    {"name": "Seoul Branch", "vehicleCount": 50, "suggestion": 2, "activity": 1},
    {"name": "Busan Branch", "vehicleCount": 45, "suggestion": 5, "activity": 5},
    {"name": "Daegu Branch", "vehicleCount": 30, "workAccident": 1},
    {"name": "Gwangju Branch", "vehicleCount": 25},
    {"name": "Daejeon Branch", "vehicleCount": 40, "inspectionMiss": 1},
    {"name": "Gyeonggi Headquarters", "vehicleCount": 80, "fineSpeed": 2, "suggestion": 10},
    {"name": "Incheon Branch", "vehicleCount": 35},
    {"name": "Gangwon Branch", "vehicleCount": 20},
    {"name": "Jeju Branch", "vehicleCount": 15},
]

SEED_NOTICES = [
    {
        "category": "notice",
        "title": "January safety inspection schedule",
        "content": "Scheduled safety inspections run from January 25 to 28. "
                   "Every team should check the maintenance state of its vehicles.",
    },
    {
        "category": "rule",
        "title": "Hold a toolbox meeting before work",
        "content": "Identify and share three hazards before starting work.",
    },
    {
        "category": "edu",
        "title": "Fall and falling object prevention",
        "content": "Safety harness required for work at height. Always wear a hard hat.",
    },
]
