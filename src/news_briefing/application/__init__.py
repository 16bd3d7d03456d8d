"""Application layer – use cases and pipeline orchestration."""

from news_briefing.application.pipeline import BriefingPipeline, BriefingRun, Stage

__all__ = ["BriefingPipeline", "BriefingRun", "Stage"]
