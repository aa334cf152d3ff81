from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..domain.enums import RiskCategory


class WeatherObservation(BaseModel):
    """Clamped environmental readings for a single field observation."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    temperature: float = Field(
        ..., ge=0.0, le=55.0, description="Ambient temperature in °C."
    )
    rainfall: float = Field(..., ge=0.0, le=500.0, description="Rainfall in mm.")
    soil_moisture: float = Field(
        ...,
        ge=0.0,
        le=100.0,
        alias="soilMoisture",
        description="Soil moisture in percent.",
    )
    crop: Optional[str] = Field(
        default=None,
        description="Crop identifier; carried through, not used for scoring.",
        examples=["wheat", "گندم"],
    )


class RecommendationEntry(BaseModel):
    """One bilingual advisory line."""

    model_config = ConfigDict(frozen=True)

    en: str
    ur: str


class ClassificationResult(BaseModel):
    """Winning category with its confidence percentage."""

    category: RiskCategory
    confidence: float = Field(..., ge=55.0, le=95.0)
    max_score: float = Field(default=0.0, ge=0.0)
    fallback: bool = False


class PredictionResult(BaseModel):
    """Response shape returned to the service layer."""

    success: bool = True
    prediction: RiskCategory
    confidence: str = Field(..., description="Percentage with one decimal place.")
    recommendations: List[RecommendationEntry] = Field(default_factory=list)
    input: WeatherObservation

    @field_validator("confidence", mode="before")
    @classmethod
    def _format_confidence(cls, v):
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return f"{v:.1f}"
        return v

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class CropRecord(BaseModel):
    """Entry of the agriculture dataset; extra keys are preserved."""

    model_config = ConfigDict(extra="allow")

    name: str
    name_urdu: Optional[str] = None
    name_punjabi: Optional[str] = None
    category: Optional[str] = None


class CropSummary(BaseModel):
    name: str
    name_urdu: Optional[str] = None
    name_punjabi: Optional[str] = None
    category: Optional[str] = None
