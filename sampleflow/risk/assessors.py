import datetime
from typing import Optional

from sampleflow.models.risk_factor import RiskFactor, RiskImpact
from sampleflow.risk.catalogs import (
    FREQUENTLY_SAMPLED_TRACKS,
    MAJOR_LABELS,
    MODERATELY_SAMPLED_TRACKS,
    POPULAR_ARTISTS,
    VERY_POPULAR_ARTISTS,
    contains_any,
)
from sampleflow.scoring.weights import (
    AGE_WEIGHT,
    INDEPENDENT_LABEL_WEIGHT,
    MAJOR_LABEL_WEIGHT,
    POPULARITY_WEIGHT,
    PRIOR_USAGE_WEIGHT,
)

LABEL_FACTOR = "Label Ownership"
AGE_FACTOR = "Track Age"
POPULARITY_FACTOR = "Artist Popularity"
PRIOR_USAGE_FACTOR = "Previous Sample Usage"


def assess_label_risk(label: str) -> RiskFactor:
    """
    Major labels run stricter clearance processes and charge higher fees.
    """
    if contains_any(label, MAJOR_LABELS):
        return RiskFactor(
            name=LABEL_FACTOR,
            weight=MAJOR_LABEL_WEIGHT,
            score=80,
            impact=RiskImpact.HIGH,
            description=(
                "The sample is owned by a major label, which typically have stricter "
                "clearance processes and higher fees."
            ),
            mitigation="Consider budgeting for higher licensing fees or exploring alternative samples.",
        )

    return RiskFactor(
        name=LABEL_FACTOR,
        weight=INDEPENDENT_LABEL_WEIGHT,
        score=40,
        impact=RiskImpact.MEDIUM,
        description=(
            "The sample is owned by an independent label, which may be more flexible "
            "with clearance terms."
        ),
        mitigation="Reach out directly to the label with a personalized approach.",
    )


# (minimum age, score, impact, description, mitigation), oldest bracket first.
# The first bracket whose minimum age is met wins.
_AGE_BRACKETS = (
    (
        70, 20, RiskImpact.LOW,
        "The track may be approaching public domain in some jurisdictions.",
        "Research public domain status in your jurisdiction, as this may simplify clearance.",
    ),
    (
        50, 30, RiskImpact.LOW,
        "The track has established clearance precedents and may have more accessible rights holders.",
        "Look for previous clearance examples to establish reasonable terms.",
    ),
    (
        30, 40, RiskImpact.MEDIUM,
        "The track is well-established but still actively protected.",
        "Approach with standard clearance procedures and reasonable offer terms.",
    ),
    (
        10, 60, RiskImpact.MEDIUM,
        "The track is relatively recent and likely actively managed by rights holders.",
        "Prepare a compelling case for your creative use and be ready to negotiate terms.",
    ),
)

_RECENT_TRACK = (
    75, RiskImpact.HIGH,
    "The track is very recent and may have heightened protection from rights holders.",
    "Consider offering higher royalty percentages or creative control to increase chances of approval.",
)


def assess_age_risk(release_year: int, current_year: Optional[int] = None) -> RiskFactor:
    """
    Older tracks are easier to clear. Future release years give a negative
    age and land in the most recent bracket.
    """
    if current_year is None:
        current_year = datetime.date.today().year
    age = current_year - release_year

    score, impact, description, mitigation = _RECENT_TRACK
    for min_age, bracket_score, bracket_impact, bracket_description, bracket_mitigation in _AGE_BRACKETS:
        if age >= min_age:
            score, impact = bracket_score, bracket_impact
            description, mitigation = bracket_description, bracket_mitigation
            break

    return RiskFactor(
        name=AGE_FACTOR,
        weight=AGE_WEIGHT,
        score=score,
        impact=impact,
        description=description,
        mitigation=mitigation,
    )


def assess_popularity_risk(artist: str) -> RiskFactor:
    # Static tiers stand in for a real popularity source
    if contains_any(artist, VERY_POPULAR_ARTISTS):
        score, impact = 85, RiskImpact.HIGH
        description = (
            "The artist is highly popular with significant commercial value and likely "
            "strict sample clearance policies."
        )
        mitigation = "Be prepared for higher licensing fees and consider legal representation for negotiations."
    elif contains_any(artist, POPULAR_ARTISTS):
        score, impact = 65, RiskImpact.MEDIUM
        description = (
            "The artist is well-known with established commercial value and standard "
            "clearance procedures."
        )
        mitigation = "Approach with professional clearance request and reasonable offer terms."
    else:
        score, impact = 35, RiskImpact.LOW
        description = "The artist is less mainstream, which may simplify the clearance process."
        mitigation = "Direct contact with the artist or their management may yield more favorable terms."

    return RiskFactor(
        name=POPULARITY_FACTOR,
        weight=POPULARITY_WEIGHT,
        score=score,
        impact=impact,
        description=description,
        mitigation=mitigation,
    )


def assess_previous_usage_risk(track: str) -> RiskFactor:
    if contains_any(track, FREQUENTLY_SAMPLED_TRACKS):
        score, impact = 70, RiskImpact.HIGH
        description = (
            "This track has been frequently sampled, which may indicate established clearance "
            "procedures but also potential fatigue from rights holders."
        )
        mitigation = (
            "Research previous clearance examples to understand typical terms and prepare a "
            "unique creative case for your usage."
        )
    elif contains_any(track, MODERATELY_SAMPLED_TRACKS):
        score, impact = 50, RiskImpact.MEDIUM
        description = (
            "This track has been sampled several times, suggesting clearance is possible but "
            "may require negotiation."
        )
        mitigation = "Look for precedents in similar genres and prepare a professional clearance request."
    else:
        score, impact = 30, RiskImpact.LOW
        description = (
            "This track has not been widely sampled, which may indicate fewer precedents but "
            "potentially more openness from rights holders."
        )
        mitigation = "Emphasize the creative and respectful use of the sample in your clearance request."

    return RiskFactor(
        name=PRIOR_USAGE_FACTOR,
        weight=PRIOR_USAGE_WEIGHT,
        score=score,
        impact=impact,
        description=description,
        mitigation=mitigation,
    )
