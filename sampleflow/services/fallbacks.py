"""
Deterministic stand-ins returned whenever an external service is disabled,
unconfigured or failing. Callers always get a well-formed result.
"""
from sampleflow.models.analysis import (
    AudioAnalysisResult,
    AudioFeatures,
    FeatureSegment,
    MatchSegment,
    NegotiationAnalysis,
    NegotiationSentiment,
    SegmentMatch,
    SimilarityResult,
)


def default_analysis_result() -> AudioAnalysisResult:
    return AudioAnalysisResult(
        source_track="Funky Drummer - James Brown",
        confidence=94,
        rights_holder="Universal Music Group",
        original_artist="James Brown",
        release_year=1970,
        label="Polydor Records",
        match_segments=(
            MatchSegment(start=12.5, end=16.8, confidence=94),
            MatchSegment(start=45.2, end=48.1, confidence=89),
        ),
        risk_score=75,
    )


def default_audio_features() -> AudioFeatures:
    return AudioFeatures(
        tempo=96,
        key="C",
        scale="minor",
        instruments=("drums", "bass", "guitar", "vocals"),
        segments=(
            FeatureSegment(start=0, end=12.5, type="intro", confidence=0.95),
            FeatureSegment(start=12.5, end=42.8, type="verse", confidence=0.92),
            FeatureSegment(start=42.8, end=73.1, type="chorus", confidence=0.97),
            FeatureSegment(start=73.1, end=103.4, type="verse", confidence=0.93),
            FeatureSegment(start=103.4, end=133.7, type="chorus", confidence=0.96),
            FeatureSegment(start=133.7, end=164.0, type="outro", confidence=0.91),
        ),
    )


def default_similarity_result() -> SimilarityResult:
    return SimilarityResult(
        similarity=0.87,
        matched_segments=(
            SegmentMatch(
                query_start=12.5, query_end=16.8,
                reference_start=73.2, reference_end=77.5,
                confidence=0.94,
            ),
            SegmentMatch(
                query_start=45.2, query_end=48.1,
                reference_start=103.8, reference_end=106.7,
                confidence=0.89,
            ),
        ),
    )


def default_negotiation_analysis() -> NegotiationAnalysis:
    return NegotiationAnalysis(
        sentiment=NegotiationSentiment.NEUTRAL,
        next_steps="Consider following up in a week if no further response is received.",
        suggested_reply=(
            "Thank you for your response. I appreciate your consideration and look "
            "forward to discussing this further."
        ),
    )


def default_negotiation_template(
    project_name: str,
    sample_info: str,
    rights_holder: str,
    purpose: str,
) -> str:
    return f"""Subject: Sample Clearance Request for "{project_name}"

Dear {rights_holder},

I hope this email finds you well. My name is [Your Name], and I am reaching out regarding a sample clearance request for my upcoming project.

Project Details:
- Track Name: {project_name}
- Sample Used: {sample_info}
- Intended Use: {purpose}

I am interested in obtaining proper clearance for this sample and would like to discuss the terms for licensing. I am prepared to offer [Royalty Percentage/Flat Fee] for the use of this sample.

Please let me know if you require any additional information or if there are specific procedures I should follow for this request.

Thank you for your time and consideration. I look forward to your response.

Best regards,
[Your Name]
[Your Contact Information]
"""
