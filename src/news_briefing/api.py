"""
FastAPI surface: one endpoint that builds a briefing video and returns it inline.

  POST /api/generate-video  {"category": "national", "secondsPerSlide": 30}
"""

import logging
from typing import Any

from fastapi import Depends, FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field, field_validator

from news_briefing import __version__
from news_briefing.adapters import default_adapters
from news_briefing.application.pipeline import BriefingPipeline
from news_briefing.config import (
    DEFAULT_CATEGORY,
    DEFAULT_SECONDS_PER_SLIDE,
    MAX_SECONDS_PER_SLIDE,
    MIN_SECONDS_PER_SLIDE,
)
from news_briefing.errors import BriefingError

logger = logging.getLogger(__name__)

app = FastAPI(
    title="News Briefing Video API",
    description="Builds a narrated India news briefing video from the latest headlines",
    version=__version__,
)


class BriefingRequest(BaseModel):
    """Request body. Anything unusable falls back to the defaults."""
    model_config = ConfigDict(populate_by_name=True)

    category: str = DEFAULT_CATEGORY
    seconds_per_slide: float = Field(DEFAULT_SECONDS_PER_SLIDE, alias="secondsPerSlide")

    @field_validator("category", mode="before")
    @classmethod
    def _normalize_category(cls, value: Any) -> str:
        if isinstance(value, str) and value.strip():
            return value.strip().lower()
        return DEFAULT_CATEGORY

    @field_validator("seconds_per_slide", mode="before")
    @classmethod
    def _limit_seconds_per_slide(cls, value: Any) -> float:
        if isinstance(value, (int, float)) and not isinstance(value, bool) \
                and value >= MIN_SECONDS_PER_SLIDE:
            return min(value, MAX_SECONDS_PER_SLIDE)
        return DEFAULT_SECONDS_PER_SLIDE


def get_pipeline() -> BriefingPipeline:
    """A fresh pipeline per request, so in-flight encodes are never shared."""
    return BriefingPipeline(**default_adapters())


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.post("/api/generate-video")
async def generate_video(request: Request, pipeline: BriefingPipeline = Depends(get_pipeline)):
    try:
        payload = await request.json()
    except ValueError:
        payload = {}
    if not isinstance(payload, dict):
        payload = {}
    body = BriefingRequest.model_validate(payload)

    try:
        result = await run_in_threadpool(
            pipeline.run, body.category, body.seconds_per_slide
        )
    except BriefingError as exc:
        logger.error("[generate-video] %s", exc)
        return JSONResponse({"error": str(exc)}, status_code=500)
    except Exception:
        logger.exception("[generate-video] unexpected failure")
        return JSONResponse({"error": "Failed to build the requested video."}, status_code=500)

    return result.to_response()


def serve(host: str = "0.0.0.0", port: int = 8000) -> None:
    import uvicorn
    uvicorn.run(app, host=host, port=port)
