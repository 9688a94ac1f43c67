from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional


class RiskImpact(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class RiskFactor:
    name: str
    weight: float
    score: int
    impact: RiskImpact
    description: str
    mitigation: Optional[str] = None

    def with_score(self, score: int) -> "RiskFactor":
        return replace(self, score=score)

    def to_dict(self) -> dict:
        data = {
            "name": self.name,
            "weight": self.weight,
            "score": self.score,
            "impact": self.impact.value,
            "description": self.description,
        }
        if self.mitigation is not None:
            data["mitigation"] = self.mitigation
        return data
