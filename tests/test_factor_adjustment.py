from dataclasses import replace

import pytest

from sampleflow.config import FeatureFlags
from sampleflow.models.risk_assessment import RiskLevel
from sampleflow.scoring.engine import (
    adjust_factor,
    assess_identified_sample,
    calculate_risk_score,
    override_score,
    rescore,
)
from sampleflow.scoring.thresholds import clamp_score
from sampleflow.services.fallbacks import default_analysis_result


def _baseline():
    return calculate_risk_score(
        "Funky Drummer - James Brown", "James Brown", "", 1970, "Polydor Records",
        current_year=2024,
    )


def test_adjusting_a_factor_rescores():
    baseline = _baseline()
    adjusted = adjust_factor(baseline, "Track Age", 20)

    # age 30 -> 50: (240 + 100 + 212.5 + 175) / 10 = 72.75 -> 73
    assert adjusted.factors[1].score == 50
    assert adjusted.total_score == 73
    assert adjusted.risk_level == RiskLevel.HIGH


def test_adjustment_does_not_mutate_original():
    baseline = _baseline()
    adjust_factor(baseline, "Label Ownership", -50)

    assert baseline.factors[0].score == 80
    assert baseline.total_score == 69


def test_adjustment_is_clamped():
    baseline = _baseline()

    assert adjust_factor(baseline, "Artist Popularity", 500).factors[2].score == 100
    assert adjust_factor(baseline, "Artist Popularity", -500).factors[2].score == 0


def test_unknown_factor_leaves_scores_alone():
    baseline = _baseline()
    adjusted = adjust_factor(baseline, "Vibes", 30)

    assert adjusted == baseline


def test_rescore_matches_full_calculation():
    baseline = _baseline()

    assert rescore(baseline.factors) == baseline


def test_override_score_is_clamped_and_levelled():
    assert override_score(120).total_score == 100
    assert override_score(120).risk_level == RiskLevel.HIGH
    assert override_score(-3).total_score == 0
    assert override_score(55).risk_level == RiskLevel.MEDIUM
    assert override_score(55).factors == ()


def test_identified_sample_uses_supplied_score_when_advanced_disabled():
    flags = FeatureFlags(enable_advanced_risk_assessment=False)
    result = assess_identified_sample(
        default_analysis_result(), initial_risk_score=75, flags=flags
    )

    assert result.total_score == 75
    assert result.risk_level == RiskLevel.HIGH
    assert result.factors == ()


def test_identified_sample_runs_assessors_when_advanced_enabled():
    flags = FeatureFlags(enable_advanced_risk_assessment=True)
    result = assess_identified_sample(
        default_analysis_result(), initial_risk_score=75, flags=flags, current_year=2024
    )

    assert result.total_score == 69
    assert len(result.factors) == 4


def test_identified_sample_without_initial_score_always_assesses():
    flags = FeatureFlags(enable_advanced_risk_assessment=False)
    result = assess_identified_sample(default_analysis_result(), flags=flags, current_year=2024)

    assert len(result.factors) == 4


@pytest.mark.parametrize("value,expected", [
    (float("nan"), 0),
    (float("inf"), 100),
    (float("-inf"), 0),
])
def test_clamp_score_handles_non_finite_values(value, expected):
    assert clamp_score(value) == expected


def test_non_finite_adjustment_stays_in_range():
    baseline = _baseline()

    assert adjust_factor(baseline, "Track Age", float("inf")).factors[1].score == 100
    assert adjust_factor(baseline, "Track Age", float("nan")).factors[1].score == 0
    assert override_score(float("nan")).risk_level == RiskLevel.LOW


def test_missing_model_score_does_not_override():
    analysis = replace(default_analysis_result(), risk_score=None)
    flags = FeatureFlags(enable_advanced_risk_assessment=False)

    result = assess_identified_sample(
        analysis, initial_risk_score=analysis.risk_score, flags=flags, current_year=2024
    )

    assert result.total_score == 69
    assert len(result.factors) == 4
