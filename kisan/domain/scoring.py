"""
Additive threshold rules scoring an observation against each risk category.

Each category is scored independently. Within a category only the first
matching primary tier fires; bonus points are awarded only under that tier.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Callable, Dict, Mapping

from ..schemas import WeatherObservation
from .enums import RISK_CATEGORY_ORDER, RiskCategory


ScoreSet = Dict[RiskCategory, float]
ScoreRule = Callable[[WeatherObservation], float]


def score_heat_stress(obs: WeatherObservation) -> float:
    score = 0.0
    if obs.temperature > 40:
        score += 40
        if obs.soil_moisture < 30:
            score += 30
        if obs.rainfall < 30:
            score += 20
    elif obs.temperature > 35:
        score += 20
        if obs.soil_moisture < 40:
            score += 15
    return score


def score_drought_risk(obs: WeatherObservation) -> float:
    score = 0.0
    if obs.soil_moisture < 20:
        score += 40
        if obs.rainfall < 30:
            score += 35
    elif obs.soil_moisture < 30 and obs.rainfall < 50:
        score += 30
        if obs.temperature > 30:
            score += 15
    elif obs.soil_moisture < 40 and obs.rainfall < 80:
        score += 15
    return score


def score_flood_risk(obs: WeatherObservation) -> float:
    score = 0.0
    if obs.rainfall > 350:
        score += 45
        if obs.soil_moisture > 80:
            score += 35
    elif obs.rainfall > 250 and obs.soil_moisture > 70:
        score += 35
        if obs.soil_moisture > 85:
            score += 25
    elif obs.rainfall > 150 and obs.soil_moisture > 80:
        score += 20
    return score


def score_fungus_risk(obs: WeatherObservation) -> float:
    score = 0.0
    if 60 < obs.soil_moisture < 90 and 20 < obs.temperature < 35:
        score += 25
        if 80 < obs.rainfall < 250:
            score += 30
        if obs.soil_moisture > 70:
            score += 15
    return score


def score_optimal_conditions(obs: WeatherObservation) -> float:
    # independent checks, not tiers
    score = 0.0
    if 15 <= obs.temperature <= 32:
        score += 20
    if 35 <= obs.soil_moisture <= 65:
        score += 25
    if 40 <= obs.rainfall <= 150:
        score += 20
    return score


SCORE_RULES: Mapping[RiskCategory, ScoreRule] = MappingProxyType(
    {
        RiskCategory.OPTIMAL_CONDITIONS: score_optimal_conditions,
        RiskCategory.FUNGUS_RISK: score_fungus_risk,
        RiskCategory.DROUGHT_RISK: score_drought_risk,
        RiskCategory.FLOOD_RISK: score_flood_risk,
        RiskCategory.HEAT_STRESS: score_heat_stress,
    }
)


def calculate_scores(obs: WeatherObservation) -> ScoreSet:
    """Score a clamped observation; keys follow ``RISK_CATEGORY_ORDER``."""
    return {category: SCORE_RULES[category](obs) for category in RISK_CATEGORY_ORDER}
