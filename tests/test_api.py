import datetime

import pytest
from fastapi.testclient import TestClient

from sampleflow.api.main import (
    app,
    get_audio_feature_service,
    get_identification_service,
    get_negotiation_assistant,
)
from sampleflow.config import ElevenLabsConfig, FeatureFlags, OpenAIConfig
from sampleflow.models.analysis import AudioAnalysisResult
from sampleflow.services.audio_features import AudioFeatureService
from sampleflow.services.identification import SampleIdentificationService
from sampleflow.services.negotiation import NegotiationAssistant

client = TestClient(app)

OFFLINE = OpenAIConfig(api_key=None)


@pytest.fixture
def offline_services():
    """Route every external service to its offline default."""
    app.dependency_overrides[get_identification_service] = lambda: SampleIdentificationService(
        config=OFFLINE, flags=FeatureFlags()
    )
    app.dependency_overrides[get_audio_feature_service] = lambda: AudioFeatureService(
        config=ElevenLabsConfig(api_key=None), flags=FeatureFlags()
    )
    app.dependency_overrides[get_negotiation_assistant] = lambda: NegotiationAssistant(config=OFFLINE)
    yield
    app.dependency_overrides.clear()


def _years_ago(n):
    return datetime.date.today().year - n


def test_health_check():
    """Verify the API is alive."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "online"
    assert "RiskScoring" in response.json()["modules"]


def test_assess_major_label_classic():
    payload = {
        "sourceTrack": "Funky Drummer - James Brown",
        "originalArtist": "James Brown",
        "rightsHolder": "Universal Music Group",
        "releaseYear": _years_ago(54),
        "label": "Polydor Records",
    }

    response = client.post("/risk/assess", json=payload)
    assert response.status_code == 200

    data = response.json()
    assert data["totalScore"] == 69
    assert data["riskLevel"] == "medium"
    assert [f["name"] for f in data["factors"]] == [
        "Label Ownership",
        "Track Age",
        "Artist Popularity",
        "Previous Sample Usage",
    ]
    assert len(data["potentialIssues"]) == 3 + 3
    assert len(data["mitigationStrategies"]) == 4


def test_assess_defaults_are_accepted():
    response = client.post("/risk/assess", json={})
    assert response.status_code == 200

    data = response.json()
    assert 0 <= data["totalScore"] <= 100
    # Default release year is ten years back -> 10-29 year bracket
    assert data["factors"][1]["score"] == 60


def test_assess_rejects_non_numeric_year():
    response = client.post("/risk/assess", json={"releaseYear": "last summer"})
    assert response.status_code == 422


def test_adjust_factor_endpoint():
    payload = {
        "sourceTrack": "Funky Drummer - James Brown",
        "originalArtist": "James Brown",
        "releaseYear": _years_ago(54),
        "label": "Polydor Records",
        "factorName": "Track Age",
        "adjustment": 20,
    }

    response = client.post("/risk/adjust", json=payload)
    assert response.status_code == 200

    data = response.json()
    assert data["factors"][1]["score"] == 50
    assert data["totalScore"] == 73
    assert data["riskLevel"] == "high"


def test_adjust_requires_factor_name():
    response = client.post("/risk/adjust", json={"adjustment": 5})
    assert response.status_code == 422


@pytest.mark.parametrize("score,level,color", [
    (85, "High", "red-500"),
    (40, "Medium", "yellow-500"),
    (39, "Low", "green-500"),
    (250, "High", "red-500"),
])
def test_risk_badge(score, level, color):
    response = client.get(f"/risk/badge/{score}")
    assert response.status_code == 200

    data = response.json()
    assert data["level"] == level
    assert data["color"] == color
    assert 0 <= data["score"] <= 100


def test_identify_sample_offline(offline_services):
    files = {"file": ("loop.wav", b"RIFF\x00\x00\x00\x00WAVE", "audio/wav")}

    response = client.post("/samples/identify", files=files)
    assert response.status_code == 200

    data = response.json()
    assert data["fallback"] is True
    assert data["analysis"]["sourceTrack"] == "Funky Drummer - James Brown"
    assert 0 <= data["assessment"]["totalScore"] <= 100
    assert data["assessment"]["riskLevel"] in ("high", "medium", "low")


def test_features_offline(offline_services):
    files = {"file": ("loop.wav", b"data", "audio/wav")}

    response = client.post("/samples/features", files=files)
    assert response.status_code == 200
    assert response.json()["tempo"] == 96
    assert response.json()["key"] == "C"


def test_compare_offline(offline_services):
    files = {
        "query": ("a.wav", b"a", "audio/wav"),
        "reference": ("b.wav", b"b", "audio/wav"),
    }

    response = client.post("/samples/compare", files=files)
    assert response.status_code == 200
    assert response.json()["similarity"] == 0.87
    assert len(response.json()["matchedSegments"]) == 2


def test_negotiation_template_offline(offline_services):
    payload = {
        "projectName": "Night Drive",
        "sampleInfo": "Drum break",
        "rightsHolder": "Universal Music Group",
        "purpose": "Commercial release",
    }

    response = client.post("/negotiation/template", json=payload)
    assert response.status_code == 200
    assert "Dear Universal Music Group," in response.json()["template"]


def test_negotiation_analyze_offline(offline_services):
    response = client.post("/negotiation/analyze", json={"response": "We need more details."})
    assert response.status_code == 200

    data = response.json()
    assert data["sentiment"] == "neutral"
    assert data["nextSteps"]
    assert data["suggestedReply"]


@pytest.mark.parametrize("score", ["nan", "inf", "-inf"])
def test_risk_badge_rejects_non_finite_score(score):
    response = client.get(f"/risk/badge/{score}")
    assert response.status_code == 422


@pytest.mark.parametrize("adjustment", ["NaN", "inf", "-inf"])
def test_adjust_rejects_non_finite_adjustment(adjustment):
    payload = {"factorName": "Track Age", "adjustment": adjustment}

    response = client.post("/risk/adjust", json=payload)
    assert response.status_code == 422


def test_identify_without_model_score_runs_assessors(monkeypatch):
    monkeypatch.setenv("ENABLE_ADVANCED_RISK_ASSESSMENT", "false")
    service = SampleIdentificationService(config=OFFLINE, flags=FeatureFlags())
    service.analyze_sample = lambda audio, filename: AudioAnalysisResult.from_dict({
        "sourceTrack": "Funky Drummer - James Brown",
        "originalArtist": "James Brown",
        "releaseYear": _years_ago(54),
        "label": "Polydor Records",
    })
    app.dependency_overrides[get_identification_service] = lambda: service
    try:
        files = {"file": ("loop.wav", b"data", "audio/wav")}
        response = client.post("/samples/identify", files=files)
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 200
    data = response.json()
    assert data["analysis"]["riskScore"] is None
    assert data["assessment"]["totalScore"] == 69
    assert len(data["assessment"]["factors"]) == 4
