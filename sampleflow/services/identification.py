import json
import logging
import re
from typing import Any, Dict, Optional

from openai import OpenAI

from sampleflow.config import FeatureFlags, OpenAIConfig, sample_confidence_threshold
from sampleflow.models.analysis import AudioAnalysisResult
from sampleflow.services.fallbacks import default_analysis_result
from sampleflow.telemetry import emit_fallback_telemetry

IDENTIFICATION_PROMPT = """You are an expert music sample identifier. Analyze the following audio transcription and identify:
1. The original source track
2. The artist
3. The release year
4. The record label
5. The rights holder
6. The specific segments that match (timestamps)
7. A risk score (0-100) for clearance difficulty

Transcription: {transcription}

Respond in JSON format with the following structure:
{{
  "sourceTrack": "Track Name",
  "confidence": 85,
  "originalArtist": "Artist Name",
  "releaseYear": 1990,
  "label": "Record Label",
  "rightsHolder": "Rights Holder Company",
  "matchSegments": [
    {{ "start": 12.5, "end": 16.8, "confidence": 90 }}
  ],
  "riskScore": 75
}}"""


def extract_json_object(text: str) -> Dict[str, Any]:
    """
    Parse the first JSON object in a model reply.
    Tolerates markdown code fences and leading prose.
    """
    cleaned = re.sub(r"```(?:json)?", "", text).strip()
    start = cleaned.find("{")
    end = cleaned.rfind("}")
    if start == -1 or end <= start:
        raise ValueError("No JSON object found in model response")
    return json.loads(cleaned[start:end + 1])


def build_openai_client(config: OpenAIConfig) -> Optional[OpenAI]:
    if not config.is_configured:
        return None
    # The SDK retries 5xx / connection errors with exponential backoff
    # and does not retry other 4xx responses.
    return OpenAI(
        api_key=config.api_key,
        base_url=config.base_url,
        timeout=config.timeout,
        max_retries=config.max_retries,
    )


class SampleIdentificationService:
    """
    Identifies the source track of an uploaded sample.

    The language model is assistive only: any failure (no key, network,
    bad JSON) yields the offline default identification instead of an error.
    """

    def __init__(
        self,
        config: Optional[OpenAIConfig] = None,
        flags: Optional[FeatureFlags] = None,
        client: Optional[OpenAI] = None,
    ):
        self.logger = logging.getLogger("sampleflow.services.identification")
        self.config = config or OpenAIConfig.from_env()
        self.flags = flags or FeatureFlags.from_env()
        self.client = client if client is not None else self._initialize_client()
        self.last_used_fallback = False

    def _initialize_client(self) -> Optional[OpenAI]:
        try:
            client = build_openai_client(self.config)
        except Exception as e:
            self.logger.error(f"OpenAI client init failed: {e}")
            return None
        if client is None:
            self.logger.warning("OPENAI_API_KEY missing or placeholder. Identification will use defaults.")
        return client

    def analyze_sample(self, audio: bytes, filename: str = "sample.wav") -> AudioAnalysisResult:
        if not self.flags.use_real_audio_analysis:
            return self._fallback("Real audio analysis disabled")

        if self.client is None:
            return self._fallback("Service Offline - OpenAI Unavailable")

        try:
            transcription = self.client.audio.transcriptions.create(
                model=self.config.audio_model,
                file=(filename, audio),
                response_format="json",
            )

            response = self.client.chat.completions.create(
                model=self.config.model,
                messages=[
                    {"role": "system", "content": "You are a music sample identification expert."},
                    {"role": "user", "content": IDENTIFICATION_PROMPT.format(transcription=transcription.text)},
                ],
                temperature=0.2,
                max_tokens=1000,
            )

            result = AudioAnalysisResult.from_dict(
                extract_json_object(response.choices[0].message.content)
            )
        except Exception as e:
            self.logger.error(f"Sample identification error: {type(e).__name__}: {e}")
            return self._fallback(f"AI Error: {type(e).__name__}", e)

        threshold = sample_confidence_threshold()
        if result.confidence < threshold:
            self.logger.info(
                f"Weak identification match (confidence {result.confidence} < {threshold})"
            )

        self.last_used_fallback = False
        return result

    def _fallback(self, reason: str, exception: Exception = None) -> AudioAnalysisResult:
        self.logger.info(f"Using default identification: {reason}")
        self.last_used_fallback = True
        emit_fallback_telemetry("identification", exception)
        return default_analysis_result()
