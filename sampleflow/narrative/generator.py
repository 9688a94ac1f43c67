from typing import List, Sequence

from sampleflow.models.risk_assessment import RiskLevel
from sampleflow.models.risk_factor import RiskFactor, RiskImpact

BASE_ISSUES = {
    RiskLevel.HIGH: (
        "Major label ownership may require higher licensing fees",
        "Popular track with previous clearance challenges",
        "Multiple rights holders may complicate negotiations",
    ),
    RiskLevel.MEDIUM: (
        "Some negotiation may be required for favorable terms",
        "Rights holder may request creative control over usage",
        "Approval process may take several weeks",
    ),
    RiskLevel.LOW: (
        "Standard clearance process should be straightforward",
        "Reasonable licensing fees expected",
        "Quick turnaround time likely",
    ),
}


def _factor_issue(risk_level: RiskLevel, factor: RiskFactor) -> str:
    if risk_level == RiskLevel.HIGH:
        return f"{factor.name} presents significant challenges: {factor.description}"
    return f"{factor.name} presents challenges: {factor.description}"


def generate_potential_issues(
    risk_level: RiskLevel,
    factors: Sequence[RiskFactor],
) -> List[str]:
    """
    Three canned issues for the risk level, then one line per high-impact factor.
    """
    issues = list(BASE_ISSUES[risk_level])
    issues.extend(
        _factor_issue(risk_level, f)
        for f in factors
        if f.impact == RiskImpact.HIGH
    )
    return issues


def collect_mitigation_strategies(factors: Sequence[RiskFactor]) -> List[str]:
    """Every factor's mitigation, in factor order."""
    return [f.mitigation for f in factors if f.mitigation]
