from __future__ import annotations

from typing import Any, Optional

from ..schemas import PredictionResult, WeatherObservation
from .classifier import RandomSource, classify, format_confidence
from .enums import RiskCategory
from .normalizers import normalize_observation
from .recommendations import get_recommendations
from .scoring import calculate_scores


def predict_risk(
    payload: Any,
    *,
    rng: Optional[RandomSource] = None,
) -> PredictionResult:
    """
    Run normalization, scoring, classification and recommendation lookup.

    Raises:
        ValidationError: if a required reading is missing or not numeric.
    """
    observation = normalize_observation(payload)
    scores = calculate_scores(observation)
    result = classify(scores, rng=rng)
    return PredictionResult(
        success=True,
        prediction=result.category,
        confidence=format_confidence(result.confidence),
        recommendations=list(get_recommendations(result.category)),
        input=observation,
    )


def screen_risk(payload: Any) -> RiskCategory:
    """
    Single-pass screening rules; the first matching condition wins.

    Served by ``POST /api/screen`` as a cheaper alternative to ``predict_risk``.
    """
    obs = payload if isinstance(payload, WeatherObservation) else normalize_observation(payload)
    temp, rain, moisture = obs.temperature, obs.rainfall, obs.soil_moisture
    if temp > 40 and moisture < 30:
        return RiskCategory.HEAT_STRESS
    if rain > 300 and moisture > 80:
        return RiskCategory.FLOOD_RISK
    if moisture < 20 and rain < 50:
        return RiskCategory.DROUGHT_RISK
    if moisture > 70 and 25 < temp < 35:
        return RiskCategory.FUNGUS_RISK
    return RiskCategory.OPTIMAL_CONDITIONS
