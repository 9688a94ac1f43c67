# sampleflow/scoring/aggregator.py

from typing import Any, Dict, Sequence

from sampleflow.models.risk_factor import RiskFactor
from sampleflow.scoring.thresholds import risk_level_for_score
from sampleflow.scoring.utils import round_half_up


def weighted_score(factors: Sequence[RiskFactor]) -> int:
    """
    Weighted mean of factor scores, rounded half-up.

        total = round(sum(score * weight) / sum(weight))

    Weights come from the factors themselves. No factors -> 0.
    """
    total_weight = sum(f.weight for f in factors)
    if total_weight <= 0:
        return 0

    weighted_sum = sum(f.score * f.weight for f in factors)
    return round_half_up(weighted_sum / total_weight)


def aggregate_factors(factors: Sequence[RiskFactor]) -> Dict[str, Any]:
    total_score = weighted_score(factors)

    return {
        "total_score": total_score,
        "risk_level": risk_level_for_score(total_score),
        "total_weight": sum(f.weight for f in factors),
        "factor_count": len(factors),
        "breakdown": [
            {
                "name": f.name,
                "score": f.score,
                "weight": f.weight,
                "contribution": round(f.score * f.weight, 2),
                "impact": f.impact.value,
            }
            for f in factors
        ],
    }
