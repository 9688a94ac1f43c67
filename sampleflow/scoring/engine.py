from typing import Optional, Sequence

from sampleflow.config import FeatureFlags
from sampleflow.models.analysis import AudioAnalysisResult
from sampleflow.models.risk_assessment import RiskAssessmentResult
from sampleflow.models.risk_factor import RiskFactor
from sampleflow.narrative.generator import (
    collect_mitigation_strategies,
    generate_potential_issues,
)
from sampleflow.risk.assessors import (
    assess_age_risk,
    assess_label_risk,
    assess_popularity_risk,
    assess_previous_usage_risk,
)
from sampleflow.scoring.aggregator import aggregate_factors
from sampleflow.scoring.thresholds import clamp_score, risk_level_for_score


def rescore(factors: Sequence[RiskFactor]) -> RiskAssessmentResult:
    """
    Build a full assessment from an already-assessed factor list.
    Deterministic: same factors in, same result out.
    """
    summary = aggregate_factors(factors)
    risk_level = summary["risk_level"]

    return RiskAssessmentResult(
        total_score=summary["total_score"],
        risk_level=risk_level,
        factors=tuple(factors),
        potential_issues=tuple(generate_potential_issues(risk_level, factors)),
        mitigation_strategies=tuple(collect_mitigation_strategies(factors)),
    )


def calculate_risk_score(
    source_track: str,
    original_artist: str,
    rights_holder: str,
    release_year: int,
    label: str,
    current_year: Optional[int] = None,
) -> RiskAssessmentResult:
    """
    Estimate how hard a sample will be to clear.

    Factors are always assessed in the order label, age, popularity,
    prior usage. `rights_holder` is accepted for callers that pass the full
    identification record but does not influence the score.
    `current_year` pins the track-age calculation; it defaults to today.
    """
    factors = (
        assess_label_risk(label),
        assess_age_risk(release_year, current_year),
        assess_popularity_risk(original_artist),
        assess_previous_usage_risk(source_track),
    )
    return rescore(factors)


def adjust_factor(
    result: RiskAssessmentResult,
    factor_name: str,
    adjustment: float,
) -> RiskAssessmentResult:
    """
    Nudge one factor's score (clamped to 0-100) and recompute everything.
    Unknown factor names leave the factors as they are.
    """
    factors = tuple(
        f.with_score(clamp_score(f.score + adjustment)) if f.name == factor_name else f
        for f in result.factors
    )
    return rescore(factors)


def override_score(score: float) -> RiskAssessmentResult:
    """Manual score with no factor breakdown."""
    total = clamp_score(score)
    return RiskAssessmentResult(total_score=total, risk_level=risk_level_for_score(total))


def assess_identified_sample(
    analysis: AudioAnalysisResult,
    initial_risk_score: Optional[float] = None,
    flags: Optional[FeatureFlags] = None,
    current_year: Optional[int] = None,
) -> RiskAssessmentResult:
    """
    Score an identification result.

    With advanced assessment switched off, a caller-supplied score is taken
    as-is instead of running the factor assessors.
    """
    flags = flags or FeatureFlags.from_env()

    if initial_risk_score is not None and not flags.enable_advanced_risk_assessment:
        return override_score(initial_risk_score)

    return calculate_risk_score(
        source_track=analysis.source_track,
        original_artist=analysis.original_artist,
        rights_holder=analysis.rights_holder,
        release_year=analysis.release_year,
        label=analysis.label,
        current_year=current_year,
    )
