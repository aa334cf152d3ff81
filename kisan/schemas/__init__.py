from .models import (
    ClassificationResult,
    CropRecord,
    CropSummary,
    PredictionResult,
    RecommendationEntry,
    WeatherObservation,
)

__all__ = [
    "ClassificationResult",
    "CropRecord",
    "CropSummary",
    "PredictionResult",
    "RecommendationEntry",
    "WeatherObservation",
]
