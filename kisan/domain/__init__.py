from __future__ import annotations

from typing import Any

from .enums import RISK_CATEGORY_ORDER, RiskCategory


# name -> submodule, resolved lazily so schemas can import the enums
_SERVICE_EXPORTS = {
    "ValidationError": "normalizers",
    "normalize_observation": "normalizers",
    "calculate_scores": "scoring",
    "classify": "classifier",
    "get_recommendations": "recommendations",
    "predict_risk": "services",
    "screen_risk": "services",
}

__all__ = sorted(set(_SERVICE_EXPORTS) | {"RISK_CATEGORY_ORDER", "RiskCategory"})


def __getattr__(name: str) -> Any:
    if name in _SERVICE_EXPORTS:
        from importlib import import_module

        module = import_module(f".{_SERVICE_EXPORTS[name]}", __name__)
        return getattr(module, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
