import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .ai_service.service import OpenAITextModel
from .config import Settings
from .db import init_event_store
from .pipeline.orchestrator import AnalysisError, Analyzer
from .pipeline.telemetry import TelemetryRecorder
from .routers import analyze, health
from .routers.deps import UnauthorizedError

logger = logging.getLogger(__name__)

# API metadata for OpenAPI documentation
description = """
## Teger Message Risk API

Phishing and social-engineering risk judgment for a single email, delegated to
a generative model and returned as structured JSON.

### Key Features

* **Bounded input:** body text capped at 12,000 characters, links at 30
* **Structured verdict:** risk score, verdict, cues with evidence, recommended actions
* **Tolerant parsing:** JSON is recovered from prose-wrapped model output; unparseable answers come back tagged with the raw text
* **Privacy-first telemetry:** only a SHA-256 of the sender domain is stored, and telemetry never affects the response

### Quick Start

1. **Health Check:** `GET /health`
2. **Analyze:** `POST /api/analyze` (requires OPENAI_API_KEY; `x-teger-secret` header when TEGER_SHARED_SECRET is set)
"""


def build_analyzer(settings: Settings) -> Analyzer:
    if not settings.openai_api_key:
        logger.warning("OPENAI_API_KEY is not set. /api/analyze will fail until it is configured.")

    store = init_event_store(settings.database_url) if settings.telemetry_enabled else None
    if store is None:
        logger.info("Telemetry disabled")
    return Analyzer(
        model=OpenAITextModel(settings),
        recorder=TelemetryRecorder(store),
        model_name=settings.model,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = app.state.settings
    app.state.analyzer = build_analyzer(settings)
    yield


settings = Settings.from_env()
logging.basicConfig(level=settings.log_level)

app = FastAPI(
    title="Teger Message Risk API",
    description=description,
    version="0.2.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "health", "description": "Liveness probe"},
        {"name": "analyze", "description": "Model-backed phishing risk analysis"},
    ],
)
app.state.settings = settings

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def limit_body_size(request: Request, call_next):
    """Reject bodies over the configured limit before they are read."""
    length = request.headers.get("content-length")
    if length and length.isdigit() and int(length) > request.app.state.settings.max_body_bytes:
        return JSONResponse(status_code=413, content={"error": True, "message": "payload too large"})
    return await call_next(request)


@app.exception_handler(AnalysisError)
async def analysis_error_handler(request: Request, exc: AnalysisError):
    return JSONResponse(status_code=500, content={"error": True, "message": exc.message})


@app.exception_handler(UnauthorizedError)
async def unauthorized_handler(request: Request, exc: UnauthorizedError):
    return JSONResponse(status_code=401, content={"error": "unauthorized"})


app.include_router(health.router, prefix="/health", tags=["health"])
app.include_router(analyze.router, prefix="/api", tags=["analyze"])


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=settings.port, log_level=settings.log_level.lower())
