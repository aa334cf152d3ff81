"""
Crop risk classification for field weather observations.
"""

from kisan.domain.enums import RISK_CATEGORY_ORDER, RiskCategory
from kisan.domain.normalizers import ValidationError, normalize_observation
from kisan.domain.services import predict_risk, screen_risk
from kisan.schemas import PredictionResult, WeatherObservation

__version__ = "1.0.0"
__all__ = [
    "RISK_CATEGORY_ORDER",
    "RiskCategory",
    "ValidationError",
    "normalize_observation",
    "predict_risk",
    "screen_risk",
    "PredictionResult",
    "WeatherObservation",
]
