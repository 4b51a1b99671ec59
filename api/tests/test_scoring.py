# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for team safety score calculation.
"""

import pytest

from domain.scoring import (
    calculate_score, score_breakdown, score_rules,
    BASE_SCORE, FIELD_WEIGHTS, SEVERITY_BAND_WEIGHTS
)
from models.entities import Team, VehicleAccidents


class TestCalculateScore:
    """Test the score formula."""

    def test_empty_record_scores_base(self):
        assert calculate_score({}) == 100
        assert calculate_score(None) == 100

    def test_none_counters_count_as_zero(self):
        assert calculate_score({"workAccident": None, "vehicleAccidents": None}) == 100

    def test_mixed_scenario(self):
        team = {
            "workAccident": 1,
            "fineSpeed": 2,
            "fineSignal": 1,
            "fineLane": 0,
            "inspectionMiss": 1,
            "suggestion": 1,
            "activity": 0,
            "vehicleAccidents": {"p60_69": 1},
        }
        assert calculate_score(team) == 51

    def test_snake_case_and_model_inputs_agree(self):
        camel = {"fineSpeed": 3, "suggestion": 2, "vehicleAccidents": {"p100": 1}}
        snake = {"fine_speed": 3, "suggestion": 2, "vehicle_accidents": {"p100": 1}}
        model = Team(name="Alpha", year=2025, fine_speed=3, suggestion=2,
                     vehicle_accidents=VehicleAccidents(p100=1))

        assert calculate_score(camel) == calculate_score(snake) == calculate_score(model) == 93

    def test_score_is_not_clamped(self):
        assert calculate_score({"workAccident": 3}) == -20
        assert calculate_score({"suggestion": 10, "activity": 5}) == 145

    def test_deterministic(self):
        team = {"fineLane": 4, "activity": 2, "vehicleAccidents": {"p90_99": 2}}
        assert calculate_score(team) == calculate_score(dict(team))

    @pytest.mark.parametrize("field,alias,weight", FIELD_WEIGHTS)
    def test_each_counter_is_linear(self, field, alias, weight):
        base = {"fineSpeed": 1, "activity": 1, "vehicleAccidents": {"p50_59": 1}}
        before = calculate_score(base)

        for delta in (1, 4):
            changed = dict(base)
            changed[alias] = base.get(alias, 0) + delta
            assert calculate_score(changed) - before == weight * delta

    @pytest.mark.parametrize("band,weight", SEVERITY_BAND_WEIGHTS)
    def test_each_band_is_linear(self, band, weight):
        assert calculate_score({"vehicleAccidents": {band: 2}}) == BASE_SCORE + 2 * weight


class TestScoreBreakdown:

    def test_breakdown_sums_to_score(self):
        team = {"workAccident": 1, "suggestion": 2, "vehicleAccidents": {"p80_89": 1}}
        breakdown = score_breakdown(team)

        assert breakdown["workAccident"] == -40
        assert breakdown["suggestion"] == 6
        assert breakdown["p80_89"] == -8
        assert BASE_SCORE + sum(breakdown.values()) == calculate_score(team)

    def test_score_rules_table(self):
        rules = score_rules()

        assert rules["baseScore"] == 100
        assert rules["fields"]["inspectionMiss"] == -3
        assert rules["vehicleAccidents"]["p100"] == -10
        assert len(rules["vehicleAccidents"]) == 6
