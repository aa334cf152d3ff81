from enum import Enum
from typing import Tuple


class RiskCategory(str, Enum):
    OPTIMAL_CONDITIONS = "optimal_conditions"
    FUNGUS_RISK = "fungus_risk"
    DROUGHT_RISK = "drought_risk"
    FLOOD_RISK = "flood_risk"
    HEAT_STRESS = "heat_stress"


# Evaluation order. Ties in the classifier go to the earlier entry.
RISK_CATEGORY_ORDER: Tuple[RiskCategory, ...] = (
    RiskCategory.OPTIMAL_CONDITIONS,
    RiskCategory.FUNGUS_RISK,
    RiskCategory.DROUGHT_RISK,
    RiskCategory.FLOOD_RISK,
    RiskCategory.HEAT_STRESS,
)
