from __future__ import annotations

import math
import re
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type

from ..schemas import WeatherObservation
from .enums import RiskCategory


TEMPERATURE_RANGE: Tuple[float, float] = (0.0, 55.0)
RAINFALL_RANGE: Tuple[float, float] = (0.0, 500.0)
SOIL_MOISTURE_RANGE: Tuple[float, float] = (0.0, 100.0)

# canonical field -> (accepted payload keys, clamp range)
REQUIRED_FIELDS: Dict[str, Tuple[Tuple[str, ...], Tuple[float, float]]] = {
    "temperature": (("temperature",), TEMPERATURE_RANGE),
    "rainfall": (("rainfall",), RAINFALL_RANGE),
    "soilMoisture": (("soilMoisture", "soil_moisture"), SOIL_MOISTURE_RANGE),
}


class ValidationError(ValueError):
    """Raised when an observation is missing a required field or carries a non-numeric one."""

    def __init__(
        self,
        missing_fields: Optional[List[str]] = None,
        invalid_fields: Optional[List[str]] = None,
    ):
        self.missing_fields = list(missing_fields or [])
        self.invalid_fields = list(invalid_fields or [])
        parts = []
        if self.missing_fields:
            parts.append("missing required fields: " + ", ".join(self.missing_fields))
        if self.invalid_fields:
            parts.append("non-numeric fields: " + ", ".join(self.invalid_fields))
        super().__init__("; ".join(parts) or "invalid observation")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": str(self),
            "missingFields": self.missing_fields,
            "invalidFields": self.invalid_fields,
        }


class EnumNormalizer:
    # alias -> canonical value, one table per enum
    ALIASES: dict[Type[Enum], dict[str, str]] = {
        RiskCategory: {
            "optimal_conditions": "optimal_conditions",
            "optimalconditions": "optimal_conditions",
            "optimal": "optimal_conditions",
            "fungus_risk": "fungus_risk",
            "fungusrisk": "fungus_risk",
            "fungus": "fungus_risk",
            "drought_risk": "drought_risk",
            "droughtrisk": "drought_risk",
            "drought": "drought_risk",
            "flood_risk": "flood_risk",
            "floodrisk": "flood_risk",
            "flood": "flood_risk",
            "heat_stress": "heat_stress",
            "heatstress": "heat_stress",
            "heat": "heat_stress",
        },
    }

    @staticmethod
    def _canon_key(x: Any) -> str:
        s = str(x).strip().lower()
        s = re.sub(r"[\s-]+", "_", s)
        return s

    @classmethod
    def normalize(cls, enum_cls: Type[Enum], value: Any) -> Any:
        if value is None:
            return value

        if isinstance(value, enum_cls):
            return value.value

        key = cls._canon_key(value)
        aliases = cls.ALIASES.get(enum_cls, {})
        if key in aliases:
            return aliases[key]
        return aliases.get(key.replace("_", ""), value)


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def _coerce_number(value: Any) -> Optional[float]:
    """Return a float for numeric input, ``None`` when the value is not a number."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            # ints beyond float range still clamp like any out-of-range reading
            number = math.inf if value > 0 else -math.inf
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number):
        return None
    return number


def _lookup(payload: Mapping[str, Any], keys: Tuple[str, ...]) -> Any:
    for key in keys:
        value = payload.get(key)
        if value is not None:
            return value
    return None


def _normalize_crop(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def normalize_observation(payload: Any) -> WeatherObservation:
    """
    Validate a raw observation payload and clamp its readings into range.

    Accepts a mapping using either ``soilMoisture`` or ``soil_moisture``, or an
    existing ``WeatherObservation`` (which is re-clamped).

    Raises:
        ValidationError: if a required reading is absent or not numeric.
    """
    if isinstance(payload, WeatherObservation):
        payload = payload.model_dump(by_alias=True)
    if not isinstance(payload, Mapping):
        raise ValidationError(missing_fields=list(REQUIRED_FIELDS))

    missing: List[str] = []
    invalid: List[str] = []
    values: Dict[str, float] = {}
    for field, (keys, (lower, upper)) in REQUIRED_FIELDS.items():
        raw = _lookup(payload, keys)
        if raw is None:
            missing.append(field)
            continue
        number = _coerce_number(raw)
        if number is None:
            invalid.append(field)
            continue
        values[field] = clamp(number, lower, upper)

    if missing or invalid:
        raise ValidationError(missing_fields=missing, invalid_fields=invalid)

    return WeatherObservation(
        temperature=values["temperature"],
        rainfall=values["rainfall"],
        soilMoisture=values["soilMoisture"],
        crop=_normalize_crop(payload.get("crop")),
    )
