from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping, Tuple

from ..schemas import RecommendationEntry
from .enums import RiskCategory
from .normalizers import EnumNormalizer


def _entries(*pairs: Tuple[str, str]) -> Tuple[RecommendationEntry, ...]:
    return tuple(RecommendationEntry(en=en, ur=ur) for en, ur in pairs)


RECOMMENDATIONS: Mapping[RiskCategory, Tuple[RecommendationEntry, ...]] = MappingProxyType(
    {
        RiskCategory.OPTIMAL_CONDITIONS: _entries(
            ("Conditions are good for farming", "فصل کے لیے موسم اچھا ہے"),
            ("Continue regular irrigation schedule", "باقاعدہ آبپاشی جاری رکھیں"),
            ("Monitor crop growth regularly", "فصل کی نشوونما کو باقاعدگی سے دیکھیں"),
        ),
        RiskCategory.FUNGUS_RISK: _entries(
            ("High risk of fungal disease", "پھپھوندی کی بیماری کا خطرہ زیادہ ہے"),
            ("Apply fungicide spray", "پھپھوندی مار سپرے کریں"),
            ("Reduce irrigation temporarily", "آبپاشی کم کریں"),
            ("Ensure proper drainage", "نکاسی آب کا انتظام کریں"),
        ),
        RiskCategory.DROUGHT_RISK: _entries(
            ("Drought conditions detected", "خشک سالی کے حالات ہیں"),
            ("Increase irrigation immediately", "فوری طور پر آبپاشی بڑھائیں"),
            ("Apply mulch to retain moisture", "نمی برقرار رکھنے کے لیے ملچ لگائیں"),
            ("Consider drought-resistant varieties", "خشکی برداشت کرنے والی اقسام استعمال کریں"),
        ),
        RiskCategory.FLOOD_RISK: _entries(
            ("Flood/waterlogging risk detected", "سیلاب/پانی کھڑا ہونے کا خطرہ ہے"),
            ("Improve field drainage", "کھیت کی نکاسی بہتر کریں"),
            ("Stop irrigation temporarily", "آبپاشی عارضی طور پر روک دیں"),
            ("Raise bed height if possible", "اگر ممکن ہو تو کھیت کی سطح اونچی کریں"),
        ),
        RiskCategory.HEAT_STRESS: _entries(
            ("Heat stress conditions detected", "شدید گرمی کے حالات ہیں"),
            ("Irrigate during evening hours", "شام کے وقت آبپاشی کریں"),
            ("Provide shade if possible", "اگر ممکن ہو تو سایہ فراہم کریں"),
            ("Apply light irrigation frequently", "ہلکی آبپاشی بار بار کریں"),
        ),
    }
)


def get_recommendations(category: Any) -> Tuple[RecommendationEntry, ...]:
    """Advisories for a category or its label; unknown values get the optimal list."""
    value = EnumNormalizer.normalize(RiskCategory, category)
    try:
        key = RiskCategory(value)
    except ValueError:
        key = RiskCategory.OPTIMAL_CONDITIONS
    return RECOMMENDATIONS[key]
