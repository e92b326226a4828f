"""
FastAPI backend for the Code Playground.

Thin HTTP surface over the playground engine: execute a snippet, analyze its
complexity, and generate insights.
"""

import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field, field_validator

from playground import __version__
from playground.analyzer import CodePlayground
from playground.config import logger, settings
from playground.languages import Language
from playground.models import ComplexityProfile, ExecutionResult, ExecutionStatus, Insight

# Load environment variables
load_dotenv()


# Request/Response Models
class CodeRequest(BaseModel):
    """Snippet plus its language tag. Empty code is allowed and reported as an error result."""
    code: str = Field(default="", max_length=50_000, description="Source snippet")
    language: Language = Field(..., description="Language tag (python, java, cpp, c, javascript)")

    @field_validator("language", mode="before")
    @classmethod
    def normalize_language(cls, v):
        if isinstance(v, str):
            return Language.parse(v)
        return v


class InsightsRequest(CodeRequest):
    """Snippet, language and the complexity profile to tailor insights to."""
    profile: ComplexityProfile


class InsightsResponse(BaseModel):
    insights: list[Insight]


class RunResponse(BaseModel):
    """Execution result, followed by analysis and insights when it succeeded."""
    execution: ExecutionResult
    complexity: Optional[ComplexityProfile] = None
    insights: Optional[list[Insight]] = None


engine = CodePlayground()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management."""
    logger.info("Code Playground v%s starting", __version__)
    logger.info("Execution budget: %d ms", settings.EXECUTION_TIMEOUT_MS)
    yield
    logger.info("Shutting down...")


# Initialize FastAPI
app = FastAPI(
    title="Code Playground",
    description="Simulated code execution, complexity analysis and improvement insights",
    version=__version__,
    lifespan=lifespan,
)

# CORS
cors_origins = settings.cors_origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials="*" not in cors_origins,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


def _request_id() -> str:
    return datetime.now().strftime("%Y%m%d-%H%M%S-%f")


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Code Playground API",
        "version": __version__,
        "languages": [language.value for language in Language],
        "endpoints": {
            "/execute": "POST - Simulate running a snippet",
            "/analyze": "POST - Time and space complexity",
            "/insights": "POST - Improvement insights for a snippet and its profile",
            "/run": "POST - Execute, then analyze and generate insights on success",
            "/health": "GET - Health check",
        },
    }


@app.get("/health")
async def health():
    """Health check."""
    return {
        "status": "healthy",
        "version": __version__,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@app.post("/execute", response_model=ExecutionResult)
async def execute(request: CodeRequest):
    """Simulate running the snippet."""
    request_id = _request_id()
    start_time = time.time()
    logger.info(f"[{request_id}] EXECUTE - {request.language.value}, {len(request.code)} chars")

    result = await engine.execute(request.code, request.language)

    elapsed_time = time.time() - start_time
    logger.info(f"[{request_id}] EXECUTE DONE - {elapsed_time:.3f}s - Status: {result.status.value}")
    return result


@app.post("/analyze", response_model=ComplexityProfile)
async def analyze(request: CodeRequest):
    """Classify time and space complexity."""
    request_id = _request_id()
    logger.info(f"[{request_id}] ANALYZE - {request.language.value}, {len(request.code)} chars")

    profile = await engine.analyze(request.code, request.language)

    logger.info(
        f"[{request_id}] ANALYZE DONE - Result: {profile.timeComplexity.worst.value}, {profile.spaceComplexity.value}"
    )
    return profile


@app.post("/insights", response_model=InsightsResponse)
async def insights(request: InsightsRequest):
    """Generate ordered improvement insights."""
    request_id = _request_id()
    logger.info(f"[{request_id}] INSIGHTS - {request.language.value}, {len(request.code)} chars")

    items = await engine.get_insights(request.code, request.language, request.profile)

    logger.info(f"[{request_id}] INSIGHTS DONE - {len(items)} insights")
    return InsightsResponse(insights=items)


@app.post("/run", response_model=RunResponse)
async def run(request: CodeRequest):
    """
    Execute the snippet; on success also analyze complexity and generate insights.
    """
    request_id = _request_id()
    start_time = time.time()
    logger.info(f"[{request_id}] RUN - {request.language.value}, {len(request.code)} chars")

    result = await engine.execute(request.code, request.language)
    if result.status is not ExecutionStatus.SUCCESS:
        logger.info(f"[{request_id}] RUN STOPPED - Status: {result.status.value}")
        return RunResponse(execution=result)

    profile = await engine.analyze(request.code, request.language)
    items = await engine.get_insights(request.code, request.language, profile)

    elapsed_time = time.time() - start_time
    logger.info(f"[{request_id}] RUN DONE - {elapsed_time:.3f}s - {profile.timeComplexity.worst.value}")
    return RunResponse(execution=result, complexity=profile, insights=items)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("backend:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)
