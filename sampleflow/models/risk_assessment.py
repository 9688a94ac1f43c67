from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple

from .risk_factor import RiskFactor


class RiskLevel(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class RiskAssessmentResult:
    """
    Outcome of a single clearance-risk evaluation.
    Read-only. A new instance is built on every call.
    """
    total_score: int
    risk_level: RiskLevel
    factors: Tuple[RiskFactor, ...] = field(default_factory=tuple)
    potential_issues: Tuple[str, ...] = field(default_factory=tuple)
    mitigation_strategies: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "totalScore": self.total_score,
            "riskLevel": self.risk_level.value,
            "factors": [f.to_dict() for f in self.factors],
            "potentialIssues": list(self.potential_issues),
            "mitigationStrategies": list(self.mitigation_strategies),
        }


@dataclass(frozen=True)
class RiskBadge:
    level: str  # "High" | "Medium" | "Low"
    color: str
    background: str

    def to_dict(self) -> dict:
        return {"level": self.level, "color": self.color, "bg": self.background}
