import base64
import logging
from typing import Optional

from sampleflow.config import ElevenLabsConfig, FeatureFlags
from sampleflow.models.analysis import AudioFeatures, SimilarityResult
from sampleflow.services.fallbacks import default_audio_features, default_similarity_result
from sampleflow.services.http_client import ApiClient
from sampleflow.telemetry import emit_fallback_telemetry

logger = logging.getLogger("sampleflow.services.audio_features")


class AudioFeatureService:
    """
    Tempo/key/structure extraction and sample similarity via the ElevenLabs
    audio analysis endpoints.
    """

    def __init__(
        self,
        config: Optional[ElevenLabsConfig] = None,
        flags: Optional[FeatureFlags] = None,
        client: Optional[ApiClient] = None,
    ):
        self.config = config or ElevenLabsConfig.from_env()
        self.flags = flags or FeatureFlags.from_env()
        self.client = client or ApiClient(
            base_url=self.config.base_url,
            default_headers={
                "xi-api-key": self.config.api_key or "",
                "Content-Type": "application/json",
            },
            timeout=self.config.timeout,
            max_retries=self.config.max_retries,
        )

    @property
    def enabled(self) -> bool:
        return self.flags.use_real_audio_analysis and self.config.is_configured

    def extract_audio_features(self, audio: bytes, filename: str = "sample.wav") -> AudioFeatures:
        if not self.enabled:
            return default_audio_features()

        try:
            response = self.client.post(
                "/v1/audio/analysis",
                json={
                    "audio": base64.b64encode(audio).decode("ascii"),
                    "audio_name": filename,
                },
            )
            return AudioFeatures.from_dict(response)
        except Exception as e:
            logger.error(f"Audio feature extraction failed: {type(e).__name__}: {e}")
            emit_fallback_telemetry("audio_features", e)
            return default_audio_features()

    def compare_samples(self, query_audio: bytes, reference_audio: bytes) -> SimilarityResult:
        if not self.enabled:
            return default_similarity_result()

        try:
            response = self.client.post(
                "/v1/audio/compare",
                json={
                    "query_audio": base64.b64encode(query_audio).decode("ascii"),
                    "reference_audio": base64.b64encode(reference_audio).decode("ascii"),
                },
            )
            return SimilarityResult.from_dict(response)
        except Exception as e:
            logger.error(f"Sample comparison failed: {type(e).__name__}: {e}")
            emit_fallback_telemetry("audio_features", e)
            return default_similarity_result()
