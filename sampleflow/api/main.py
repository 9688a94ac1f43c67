import datetime
import logging
import time
from typing import Any, Dict, List, Optional

from fastapi import Depends, FastAPI, File, HTTPException, Path, Request, UploadFile
from pydantic import BaseModel, ConfigDict, Field

from sampleflow.config import FeatureFlags, audit_log_path
from sampleflow.models.risk_assessment import RiskAssessmentResult
from sampleflow.scoring.engine import adjust_factor, assess_identified_sample, calculate_risk_score
from sampleflow.scoring.thresholds import clamp_score, risk_badge
from sampleflow.services.audio_features import AudioFeatureService
from sampleflow.services.identification import SampleIdentificationService
from sampleflow.services.negotiation import NegotiationAssistant
from sampleflow.telemetry import emit_assessment_telemetry, emit_exception_telemetry, init_telemetry

# --- AUDIT LOGGING ---
logging.basicConfig(
    filename=audit_log_path(),
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
audit_logger = logging.getLogger("audit")

tags_metadata = [
    {
        "name": "Risk",
        "description": "Deterministic clearance-risk scoring for identified samples.",
    },
    {
        "name": "Samples",
        "description": "Sample identification and audio feature extraction.",
    },
    {
        "name": "Negotiation",
        "description": "Clearance request drafting and reply analysis.",
    },
    {
        "name": "System",
        "description": "Health checks and operational metadata.",
    },
]

app = FastAPI(
    title="SampleFlow Clearance Engine",
    description="""
    **Sample clearance assistant** for remix artists.

    * **Risk Scoring:** weighted label / age / popularity / prior-usage heuristic.
    * **Identification:** language-model assisted, with deterministic fallbacks.
    * **Negotiation:** drafted clearance requests and reply analysis.
    """,
    version="1.0.0",
    openapi_tags=tags_metadata,
    docs_url="/docs",
    redoc_url="/redoc"
)

init_telemetry()


@app.middleware("http")
async def audit_middleware(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time

    client_host = request.client.host if request.client else "unknown"
    audit_logger.info(
        f"METHOD={request.method} PATH={request.url.path} "
        f"STATUS={response.status_code} CLIENT={client_host} "
        f"DURATION={process_time:.4f}s"
    )
    return response


# --- DATA MODELS ---
def _default_release_year() -> int:
    return datetime.date.today().year - 10


class AssessmentRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    source_track: str = Field("", alias="sourceTrack")
    original_artist: str = Field("", alias="originalArtist")
    rights_holder: str = Field("", alias="rightsHolder")
    release_year: int = Field(default_factory=_default_release_year, alias="releaseYear")
    label: str = ""


class AdjustmentRequest(AssessmentRequest):
    factor_name: str = Field(..., alias="factorName")
    adjustment: float = Field(..., allow_inf_nan=False)


class FactorResponse(BaseModel):
    name: str
    weight: float
    score: int
    impact: str
    description: str
    mitigation: Optional[str] = None


class AssessmentResponse(BaseModel):
    totalScore: int
    riskLevel: str
    factors: List[FactorResponse]
    potentialIssues: List[str]
    mitigationStrategies: List[str]


class TemplateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    project_name: str = Field(..., alias="projectName")
    sample_info: str = Field(..., alias="sampleInfo")
    rights_holder: str = Field(..., alias="rightsHolder")
    purpose: str


class ReplyAnalysisRequest(BaseModel):
    response: str


# --- DEPENDENCIES ---
def get_identification_service() -> SampleIdentificationService:
    return SampleIdentificationService()


def get_audio_feature_service() -> AudioFeatureService:
    return AudioFeatureService()


def get_negotiation_assistant() -> NegotiationAssistant:
    return NegotiationAssistant()


def _score(request: AssessmentRequest) -> RiskAssessmentResult:
    return calculate_risk_score(
        source_track=request.source_track,
        original_artist=request.original_artist,
        rights_holder=request.rights_holder,
        release_year=request.release_year,
        label=request.label,
    )


# --- ENDPOINTS ---

@app.post("/risk/assess", response_model=AssessmentResponse, tags=["Risk"])
def assess_risk(request: AssessmentRequest):
    """
    Score how hard an identified sample will be to clear.
    """
    try:
        start_time = time.perf_counter()
        result = _score(request)
        latency_ms = int((time.perf_counter() - start_time) * 1000)

        emit_assessment_telemetry(
            latency_ms=latency_ms,
            total_score=result.total_score,
            risk_level=result.risk_level.value,
            fallback_triggered=False,
        )
        return result.to_dict()

    except Exception as e:
        audit_logger.error(f"ENGINE_ERROR: {str(e)}")
        emit_exception_telemetry(e)
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/risk/adjust", response_model=AssessmentResponse, tags=["Risk"])
def adjust_risk(request: AdjustmentRequest):
    """
    Re-score after nudging one factor up or down.
    """
    try:
        result = adjust_factor(_score(request), request.factor_name, request.adjustment)
        return result.to_dict()
    except Exception as e:
        audit_logger.error(f"ENGINE_ERROR: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/risk/badge/{score}", tags=["Risk"])
def get_risk_badge(score: float = Path(..., allow_inf_nan=False)):
    clamped = clamp_score(score)
    return {"score": clamped, **risk_badge(clamped).to_dict()}


@app.post("/samples/identify", tags=["Samples"])
def identify_sample(
    file: UploadFile = File(...),
    service: SampleIdentificationService = Depends(get_identification_service),
):
    """
    Identify the source of an uploaded sample and score its clearance risk.
    """
    try:
        start_time = time.perf_counter()
        audio = file.file.read()
        analysis = service.analyze_sample(audio, file.filename or "sample.wav")
        assessment = assess_identified_sample(
            analysis,
            initial_risk_score=analysis.risk_score,
            flags=FeatureFlags.from_env(),
        )
        latency_ms = int((time.perf_counter() - start_time) * 1000)

        emit_assessment_telemetry(
            latency_ms=latency_ms,
            total_score=assessment.total_score,
            risk_level=assessment.risk_level.value,
            fallback_triggered=service.last_used_fallback,
        )

        return {
            "analysis": analysis.to_dict(),
            "assessment": assessment.to_dict(),
            "fallback": service.last_used_fallback,
        }

    except Exception as e:
        audit_logger.error(f"ENGINE_ERROR: {str(e)}")
        emit_exception_telemetry(e)
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/samples/features", tags=["Samples"])
def extract_features(
    file: UploadFile = File(...),
    service: AudioFeatureService = Depends(get_audio_feature_service),
) -> Dict[str, Any]:
    features = service.extract_audio_features(file.file.read(), file.filename or "sample.wav")
    return features.to_dict()


@app.post("/samples/compare", tags=["Samples"])
def compare_samples(
    query: UploadFile = File(...),
    reference: UploadFile = File(...),
    service: AudioFeatureService = Depends(get_audio_feature_service),
) -> Dict[str, Any]:
    result = service.compare_samples(query.file.read(), reference.file.read())
    return result.to_dict()


@app.post("/negotiation/template", tags=["Negotiation"])
def negotiation_template(
    request: TemplateRequest,
    assistant: NegotiationAssistant = Depends(get_negotiation_assistant),
):
    template = assistant.generate_negotiation_template(
        project_name=request.project_name,
        sample_info=request.sample_info,
        rights_holder=request.rights_holder,
        purpose=request.purpose,
    )
    return {"template": template}


@app.post("/negotiation/analyze", tags=["Negotiation"])
def negotiation_analyze(
    request: ReplyAnalysisRequest,
    assistant: NegotiationAssistant = Depends(get_negotiation_assistant),
):
    return assistant.analyze_negotiation_response(request.response).to_dict()


@app.get("/health", tags=["System"])
def health():
    return {
        "status": "online",
        "modules": ["RiskScoring", "Identification", "AudioFeatures", "Negotiation"]
    }
