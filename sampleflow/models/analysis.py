from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


def _optional_int(value: Any) -> Optional[int]:
    return None if value is None else int(value)


@dataclass(frozen=True)
class MatchSegment:
    start: float
    end: float
    confidence: float

    def to_dict(self) -> dict:
        return {"start": self.start, "end": self.end, "confidence": self.confidence}


@dataclass(frozen=True)
class AudioAnalysisResult:
    """
    Identification of the source track behind an uploaded sample.
    Built either from the language model response or from the offline default.
    """
    source_track: str
    confidence: float
    rights_holder: str
    original_artist: str
    release_year: int
    label: str
    match_segments: Tuple[MatchSegment, ...] = field(default_factory=tuple)
    risk_score: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AudioAnalysisResult":
        segments = tuple(
            MatchSegment(
                start=float(s["start"]),
                end=float(s["end"]),
                confidence=float(s.get("confidence", 0)),
            )
            for s in data.get("matchSegments", [])
        )
        return cls(
            source_track=str(data["sourceTrack"]),
            confidence=float(data.get("confidence", 0)),
            rights_holder=str(data.get("rightsHolder", "")),
            original_artist=str(data.get("originalArtist", "")),
            release_year=int(data["releaseYear"]),
            label=str(data.get("label", "")),
            match_segments=segments,
            risk_score=_optional_int(data.get("riskScore")),
        )

    def to_dict(self) -> dict:
        return {
            "sourceTrack": self.source_track,
            "confidence": self.confidence,
            "rightsHolder": self.rights_holder,
            "originalArtist": self.original_artist,
            "releaseYear": self.release_year,
            "label": self.label,
            "matchSegments": [s.to_dict() for s in self.match_segments],
            "riskScore": self.risk_score,
        }


@dataclass(frozen=True)
class FeatureSegment:
    start: float
    end: float
    type: str
    confidence: float


@dataclass(frozen=True)
class AudioFeatures:
    tempo: float
    key: str
    scale: str
    instruments: Tuple[str, ...] = field(default_factory=tuple)
    segments: Tuple[FeatureSegment, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AudioFeatures":
        return cls(
            tempo=float(data["tempo"]),
            key=str(data["key"]),
            scale=str(data["scale"]),
            instruments=tuple(data.get("instruments", [])),
            segments=tuple(
                FeatureSegment(
                    start=float(s["start"]),
                    end=float(s["end"]),
                    type=str(s["type"]),
                    confidence=float(s["confidence"]),
                )
                for s in data.get("segments", [])
            ),
        )

    def to_dict(self) -> dict:
        return {
            "tempo": self.tempo,
            "key": self.key,
            "scale": self.scale,
            "instruments": list(self.instruments),
            "segments": [
                {"start": s.start, "end": s.end, "type": s.type, "confidence": s.confidence}
                for s in self.segments
            ],
        }


@dataclass(frozen=True)
class SegmentMatch:
    query_start: float
    query_end: float
    reference_start: float
    reference_end: float
    confidence: float


@dataclass(frozen=True)
class SimilarityResult:
    similarity: float
    matched_segments: Tuple[SegmentMatch, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SimilarityResult":
        return cls(
            similarity=float(data["similarity"]),
            matched_segments=tuple(
                SegmentMatch(
                    query_start=float(m["queryStart"]),
                    query_end=float(m["queryEnd"]),
                    reference_start=float(m["referenceStart"]),
                    reference_end=float(m["referenceEnd"]),
                    confidence=float(m["confidence"]),
                )
                for m in data.get("matchedSegments", [])
            ),
        )

    def to_dict(self) -> dict:
        matches: List[dict] = [
            {
                "queryStart": m.query_start,
                "queryEnd": m.query_end,
                "referenceStart": m.reference_start,
                "referenceEnd": m.reference_end,
                "confidence": m.confidence,
            }
            for m in self.matched_segments
        ]
        return {"similarity": self.similarity, "matchedSegments": matches}


class NegotiationSentiment(str, Enum):
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


@dataclass(frozen=True)
class NegotiationAnalysis:
    sentiment: NegotiationSentiment
    next_steps: str
    suggested_reply: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NegotiationAnalysis":
        return cls(
            sentiment=NegotiationSentiment(str(data["sentiment"]).lower()),
            next_steps=str(data["nextSteps"]),
            suggested_reply=str(data["suggestedReply"]),
        )

    def to_dict(self) -> dict:
        return {
            "sentiment": self.sentiment.value,
            "nextSteps": self.next_steps,
            "suggestedReply": self.suggested_reply,
        }
