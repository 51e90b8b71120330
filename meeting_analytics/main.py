"""FastAPI application exposing the analysis endpoints and the single-page upload UI."""

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from fastapi import Depends, FastAPI, File, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse

from . import prompts
from .config import Settings, get_settings
from .errors import AnalysisError, ConfigurationError, InputValidationError, UpstreamError
from .gemini_service import GeminiService
from .normalizer import normalize_response

logger = logging.getLogger(__name__)

INDEX_HTML = Path(__file__).resolve().parent / "index.html"


@dataclass(frozen=True)
class AnalysisVariant:
    """How one upload endpoint talks to Gemini and reads the reply."""

    media_kind: str
    prompt: str
    split_on_missing_json: bool = False


VIDEO = AnalysisVariant("video", prompts.MEETING_VIDEO_PROMPT)
AUDIO = AnalysisVariant("audio", prompts.MEETING_AUDIO_PROMPT)
VIDEO_INTELLIGENCE = AnalysisVariant("video", prompts.MEETING_INTELLIGENCE_PROMPT, split_on_missing_json=True)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(level=settings.log_level)
    logging.getLogger().setLevel(settings.log_level)
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).setLevel(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(get_settings())
    yield


app = FastAPI(title="Meeting Analytics", lifespan=lifespan)


@app.exception_handler(AnalysisError)
async def analysis_error_handler(request: Request, exc: AnalysisError) -> JSONResponse:
    logger.error("%s %s failed (%d): %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render malformed uploads (e.g. a text value in the file field) as input errors."""
    errors = exc.errors()
    message = "Invalid request"
    for error in errors:
        loc = error.get("loc", ())
        if len(loc) == 2 and loc[0] == "body" and loc[1] in ("video", "audio"):
            message = f"No {loc[1]} file provided"
            break
    details = "; ".join(str(error.get("msg", "")) for error in errors)
    return await analysis_error_handler(request, InputValidationError(message, details=details))


def human_size(size: int) -> str:
    return f"{size / (1024 * 1024):.2f} MB"


def build_metadata(upload: UploadFile, size: int) -> dict:
    return {
        "fileName": upload.filename,
        "fileSize": human_size(size),
        "mimeType": upload.content_type,
        "duration": "N/A",
    }


async def run_analysis(upload: Optional[UploadFile], variant: AnalysisVariant, settings: Settings) -> dict:
    """Validate the upload, send it to Gemini and normalize the reply."""
    kind = variant.media_kind
    if not settings.configured:
        raise ConfigurationError(
            "Gemini API key is not configured. Please add GEMINI_API_KEY to your .env file."
        )
    if upload is None:
        raise InputValidationError(f"No {kind} file provided")

    limit_mb = f"{settings.max_upload_mb:g}MB"
    if upload.size is not None and upload.size > settings.max_upload_bytes:
        raise InputValidationError(f"File size too large. Please upload a {kind} smaller than {limit_mb}.")
    data = await upload.read()
    if len(data) > settings.max_upload_bytes:
        raise InputValidationError(f"File size too large. Please upload a {kind} smaller than {limit_mb}.")

    mime_type = upload.content_type or "application/octet-stream"
    logger.info("Analyzing %s %r (%s, %s)", kind, upload.filename, mime_type, human_size(len(data)))

    try:
        service = GeminiService(settings.gemini_api_key, model=settings.gemini_model)
        reply = await service.analyze(data, mime_type, variant.prompt)
    except Exception as e:
        logger.exception("Error processing %s", kind)
        raise UpstreamError(
            str(e) or f"Failed to process {kind}",
            details=f"{type(e).__name__}: {e}",
        ) from e

    normalized = normalize_response(
        reply,
        media_kind=kind,
        split_on_missing_json=variant.split_on_missing_json,
    )
    logger.info("Parsed %s reply with strategy=%s", kind, normalized.strategy.value)

    body = {
        "transcript": normalized.transcript,
        "analytics": normalized.analytics,
        "metadata": build_metadata(upload, len(data)),
        "success": True,
    }
    if normalized.analysis is not None:
        body["analysis"] = normalized.analysis.to_response()
    return body


@app.get("/")
async def get_index(settings: Settings = Depends(get_settings)) -> HTMLResponse:
    """Serve the index.html single-page upload UI."""
    with open(INDEX_HTML, encoding="utf-8") as f:
        html = f.read()
    return HTMLResponse(html.replace("{{MAX_UPLOAD_MB}}", f"{settings.max_upload_mb:g}"))


@app.get("/health")
async def health() -> dict:
    return {"status": "ok"}


@app.get("/api/test-key")
async def test_key(settings: Settings = Depends(get_settings)) -> dict:
    """Report whether a Gemini API key is configured, without revealing it."""
    return {"configured": settings.configured, "keyPrefix": settings.key_prefix}


@app.post("/api/analyze-video")
async def analyze_video(
    video: Optional[UploadFile] = File(None),
    settings: Settings = Depends(get_settings),
) -> dict:
    return await run_analysis(video, VIDEO, settings)


@app.post("/api/analyze-audio")
async def analyze_audio(
    audio: Optional[UploadFile] = File(None),
    settings: Settings = Depends(get_settings),
) -> dict:
    return await run_analysis(audio, AUDIO, settings)


@app.post("/api/video-analytics")
async def video_analytics(
    video: Optional[UploadFile] = File(None),
    settings: Settings = Depends(get_settings),
) -> dict:
    """Meeting intelligence report: verified names, emotions, topics and key moments."""
    return await run_analysis(video, VIDEO_INTELLIGENCE, settings)


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    settings = get_settings()
    configure_logging(settings)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
