from unittest.mock import MagicMock, patch

import pytest

from sampleflow.telemetry import (
    emit_assessment_telemetry,
    emit_exception_telemetry,
    emit_fallback_telemetry,
    init_telemetry,
    scrub_exception_for_telemetry,
)


def test_emit_assessment_telemetry_does_not_crash():
    """
    With no active span every emitter is a safe no-op (local / tests).
    """
    emit_assessment_telemetry(latency_ms=12, total_score=69, risk_level="medium", fallback_triggered=False)
    emit_assessment_telemetry(latency_ms=3, total_score=75, risk_level="high", fallback_triggered=True)
    emit_fallback_telemetry("identification")
    emit_fallback_telemetry("audio_features", TimeoutError("slow"))
    emit_exception_telemetry(ValueError("boom"))


def test_assessment_telemetry_rejects_bad_types():
    with pytest.raises(AssertionError):
        emit_assessment_telemetry(latency_ms=1.5, total_score=10, risk_level="low", fallback_triggered=False)
    with pytest.raises(AssertionError):
        emit_assessment_telemetry(latency_ms=1, total_score=10, risk_level="severe", fallback_triggered=False)


@patch("sampleflow.telemetry.get_current_span")
def test_recording_span_receives_event(mock_span):
    span = MagicMock()
    span.is_recording.return_value = True
    mock_span.return_value = span

    emit_assessment_telemetry(latency_ms=5, total_score=44, risk_level="medium", fallback_triggered=False)

    span.add_event.assert_called_once()
    kwargs = span.add_event.call_args.kwargs
    assert kwargs["name"] == "sampleflow.assessment"
    assert kwargs["attributes"]["total_score"] == 44


@patch("sampleflow.telemetry.get_current_span")
def test_fallback_event_carries_only_exception_type(mock_span):
    span = MagicMock()
    span.is_recording.return_value = True
    mock_span.return_value = span

    emit_fallback_telemetry("negotiation", RuntimeError("prompt text: Funky Drummer"))

    attributes = span.add_event.call_args.kwargs["attributes"]
    assert attributes == {"service": "negotiation", "exception_type": "RuntimeError"}


def test_scrub_exception_drops_message():
    assert scrub_exception_for_telemetry(KeyError("secret")) == "KeyError"


def test_init_telemetry_disabled_without_connection_string(monkeypatch):
    monkeypatch.delenv("AZURE_APPINSIGHTS_CONNECTION_STRING", raising=False)

    assert init_telemetry() is False
