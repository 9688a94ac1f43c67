# Clearance-difficulty thresholds.
# Every consumer (aggregator, badges, manual overrides, API) reads them from here.

import math

from sampleflow.models.risk_assessment import RiskBadge, RiskLevel
from sampleflow.scoring.utils import round_half_up

HIGH_RISK_MIN = 70
MEDIUM_RISK_MIN = 40

MIN_SCORE = 0
MAX_SCORE = 100

# Interpretation:
# 70 - 100 -> HIGH
# 40 - 69  -> MEDIUM
#  0 - 39  -> LOW


def risk_level_for_score(score: float) -> RiskLevel:
    if score >= HIGH_RISK_MIN:
        return RiskLevel.HIGH
    if score >= MEDIUM_RISK_MIN:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def clamp_score(value: float) -> int:
    """Round and clamp an arbitrary number into the [0, 100] score range."""
    if math.isnan(value):
        return MIN_SCORE
    if math.isinf(value):
        return MAX_SCORE if value > 0 else MIN_SCORE
    return max(MIN_SCORE, min(MAX_SCORE, round_half_up(value)))


_BADGES = {
    RiskLevel.HIGH: RiskBadge(level="High", color="red-500", background="red-100"),
    RiskLevel.MEDIUM: RiskBadge(level="Medium", color="yellow-500", background="yellow-100"),
    RiskLevel.LOW: RiskBadge(level="Low", color="green-500", background="green-100"),
}


def risk_badge(score: float) -> RiskBadge:
    return _BADGES[risk_level_for_score(score)]
