from __future__ import annotations

import random
from typing import Mapping, Optional, Protocol, Tuple

from ..schemas import ClassificationResult
from .enums import RISK_CATEGORY_ORDER, RiskCategory
from .normalizers import clamp


FALLBACK_THRESHOLD = 25.0
CONFIDENCE_RANGE: Tuple[float, float] = (55.0, 95.0)
FALLBACK_CONFIDENCE_RANGE: Tuple[float, float] = (65.0, 80.0)
EMPTY_SCORE_CONFIDENCE_RANGE: Tuple[float, float] = (70.0, 85.0)
CONFIDENCE_BASE_BONUS = 20.0
CONFIDENCE_JITTER: Tuple[float, float] = (0.0, 10.0)


class RandomSource(Protocol):
    def uniform(self, a: float, b: float) -> float: ...


_DEFAULT_RNG = random.Random()


def select_category(
    scores: Mapping[RiskCategory, float],
) -> Tuple[RiskCategory, float]:
    """Ordered argmax: a later category must strictly beat the running maximum."""
    best = RiskCategory.OPTIMAL_CONDITIONS
    best_score = 0.0
    for category in RISK_CATEGORY_ORDER:
        score = scores.get(category, 0.0)
        if score > best_score:
            best = category
            best_score = score
    return best, best_score


def estimate_confidence(
    scores: Mapping[RiskCategory, float],
    max_score: float,
    *,
    fallback: bool,
    rng: Optional[RandomSource] = None,
) -> float:
    rng = rng or _DEFAULT_RNG
    if fallback:
        return rng.uniform(*FALLBACK_CONFIDENCE_RANGE)
    total = sum(scores.values())
    if total > 0:
        ratio = max_score / max(total, 1) * 100
        raw = ratio + CONFIDENCE_BASE_BONUS + rng.uniform(*CONFIDENCE_JITTER)
        return clamp(raw, *CONFIDENCE_RANGE)
    return rng.uniform(*EMPTY_SCORE_CONFIDENCE_RANGE)


def format_confidence(value: float) -> str:
    return f"{value:.1f}"


def classify(
    scores: Mapping[RiskCategory, float],
    *,
    rng: Optional[RandomSource] = None,
) -> ClassificationResult:
    """
    Pick the dominant category and attach a confidence percentage.

    Scores below ``FALLBACK_THRESHOLD`` are treated as no signal: the result is
    forced to optimal conditions and confidence is drawn from the fallback band.
    """
    category, max_score = select_category(scores)
    fallback = max_score < FALLBACK_THRESHOLD
    if fallback:
        category = RiskCategory.OPTIMAL_CONDITIONS
    confidence = estimate_confidence(scores, max_score, fallback=fallback, rng=rng)
    return ClassificationResult(
        category=category,
        confidence=confidence,
        max_score=max_score,
        fallback=fallback,
    )
