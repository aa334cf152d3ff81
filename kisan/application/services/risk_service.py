from __future__ import annotations

import random
from typing import Any, Mapping, Optional

from ...domain.classifier import RandomSource
from ...domain.enums import RiskCategory
from ...domain.normalizers import ValidationError, normalize_observation
from ...domain.services import predict_risk, screen_risk
from ...infra.config import get_config
from ...observability.logging_utils import bind_observation, log_event
from ...schemas import PredictionResult


def resolve_random_source() -> Optional[RandomSource]:
    """A freshly seeded generator when ``RISK_RANDOM_SEED`` is set, else the process default."""
    cfg = get_config()
    if cfg.risk_random_seed is None:
        return None
    return random.Random(cfg.risk_random_seed)


def _raw_crop(payload: Any) -> Optional[str]:
    if isinstance(payload, Mapping):
        crop = payload.get("crop")
        return str(crop) if crop is not None else None
    return None


def assess_risk(payload: Any, *, rng: Optional[RandomSource] = None) -> PredictionResult:
    with bind_observation(crop=_raw_crop(payload)):
        try:
            result = predict_risk(payload, rng=rng or resolve_random_source())
        except ValidationError as exc:
            log_event(
                "risk_validation_failed",
                missing=exc.missing_fields,
                invalid=exc.invalid_fields,
            )
            raise
        log_event(
            "risk_assessed",
            prediction=result.prediction.value,
            confidence=result.confidence,
            input=result.input.model_dump(by_alias=True),
        )
    return result


def screen_observation(payload: Any) -> dict:
    """
    Quick screening used by ``POST /api/screen``.

    Applies the single-pass screening rules instead of the scored classifier;
    no confidence is produced.
    """
    with bind_observation(crop=_raw_crop(payload)):
        try:
            observation = normalize_observation(payload)
        except ValidationError as exc:
            log_event(
                "risk_validation_failed",
                missing=exc.missing_fields,
                invalid=exc.invalid_fields,
            )
            raise
        category: RiskCategory = screen_risk(observation)
        log_event("risk_screened", prediction=category.value)
    return {
        "success": True,
        "prediction": category.value,
        "input": observation.model_dump(mode="json", by_alias=True),
    }
