"""
Operational telemetry for clearance assessments.

Only categorical and numeric attributes are emitted. No audio, no track
metadata, no negotiation text.
"""
import logging
import os
from typing import Literal

from azure.monitor.opentelemetry import configure_azure_monitor
from opentelemetry.trace import get_current_span

logger = logging.getLogger("sampleflow.telemetry")

FallbackService = Literal["identification", "negotiation", "audio_features"]


def init_telemetry() -> bool:
    """
    Initialize Azure Application Insights via OpenTelemetry.
    Returns False (and does nothing) when no connection string is configured.
    """
    connection_string = os.getenv("AZURE_APPINSIGHTS_CONNECTION_STRING")

    if not connection_string:
        return False  # Telemetry disabled (local / tests)

    configure_azure_monitor(connection_string=connection_string)
    logger.info("Azure Monitor telemetry configured")
    return True


def emit_assessment_telemetry(
    latency_ms: int,
    total_score: int,
    risk_level: Literal["high", "medium", "low"],
    fallback_triggered: bool,
):
    """
    Emit a single event per risk assessment.
    """
    assert isinstance(latency_ms, int), "latency_ms must be int"
    assert isinstance(total_score, int), "total_score must be int"
    assert risk_level in ("high", "medium", "low"), f"risk_level must be high/medium/low, got {risk_level}"
    assert isinstance(fallback_triggered, bool), "fallback_triggered must be bool"

    span = get_current_span()
    if not span or not span.is_recording():
        return

    span.add_event(
        name="sampleflow.assessment",
        attributes={
            "latency_ms": latency_ms,
            "total_score": total_score,
            "risk_level": risk_level,
            "fallback_triggered": fallback_triggered,
        },
    )


def scrub_exception_for_telemetry(exception: Exception) -> str:
    """
    Never ship str(e): provider errors can echo prompts or track metadata.
    Log only the exception class name.
    """
    return type(exception).__name__


def emit_fallback_telemetry(service: FallbackService, exception: Exception = None):
    """
    Record that a service answered with its offline default.
    """
    span = get_current_span()
    if not span or not span.is_recording():
        return

    attributes = {"service": service}
    if exception is not None:
        attributes["exception_type"] = scrub_exception_for_telemetry(exception)

    span.add_event(name="sampleflow.fallback", attributes=attributes)


def emit_exception_telemetry(exception: Exception):
    """
    Emit exception type as telemetry event (no stack trace, no text).
    """
    span = get_current_span()
    if not span or not span.is_recording():
        return

    span.add_event(
        name="sampleflow.exception",
        attributes={
            "exception_type": scrub_exception_for_telemetry(exception)
        }
    )
