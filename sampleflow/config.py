"""
Environment-driven configuration for the SampleFlow services.

Values are read from the process environment (a local .env file is loaded
first). Nothing here is required: with no keys configured every external
service answers with its offline default.
"""
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUTHY


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class FeatureFlags:
    use_real_audio_analysis: bool = False
    enable_advanced_risk_assessment: bool = True

    @classmethod
    def from_env(cls) -> "FeatureFlags":
        return cls(
            use_real_audio_analysis=_env_flag("USE_REAL_AUDIO_ANALYSIS", False),
            enable_advanced_risk_assessment=_env_flag("ENABLE_ADVANCED_RISK_ASSESSMENT", True),
        )


@dataclass(frozen=True)
class OpenAIConfig:
    api_key: Optional[str] = None
    base_url: str = "https://api.openai.com/v1"
    model: str = "gpt-4"
    audio_model: str = "whisper-1"
    timeout: float = 30.0
    max_retries: int = 3

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key) and "PLACEHOLDER" not in self.api_key

    @classmethod
    def from_env(cls) -> "OpenAIConfig":
        return cls(
            api_key=os.getenv("OPENAI_API_KEY"),
            base_url=os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1"),
            model=os.getenv("OPENAI_MODEL", "gpt-4"),
            audio_model=os.getenv("OPENAI_AUDIO_MODEL", "whisper-1"),
            timeout=_env_float("OPENAI_TIMEOUT_SECONDS", 30.0),
            max_retries=_env_int("OPENAI_MAX_RETRIES", 3),
        )


@dataclass(frozen=True)
class ElevenLabsConfig:
    api_key: Optional[str] = None
    base_url: str = "https://api.elevenlabs.io"
    timeout: float = 60.0
    max_retries: int = 3

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key) and "PLACEHOLDER" not in self.api_key

    @classmethod
    def from_env(cls) -> "ElevenLabsConfig":
        return cls(
            api_key=os.getenv("ELEVENLABS_API_KEY"),
            base_url=os.getenv("ELEVENLABS_BASE_URL", "https://api.elevenlabs.io"),
            timeout=_env_float("ELEVENLABS_TIMEOUT_SECONDS", 60.0),
            max_retries=_env_int("ELEVENLABS_MAX_RETRIES", 3),
        )


def sample_confidence_threshold() -> float:
    """Minimum identification confidence (0-100) for a match to count as strong."""
    return _env_float("SAMPLE_CONFIDENCE_THRESHOLD", 70.0)


def audit_log_path() -> str:
    return os.getenv("SAMPLEFLOW_AUDIT_LOG", "audit.log")
