"""Domain models and pure pipeline logic."""

from news_briefing.domain.models import DurationPlan, GenerationResult, NewsItem, Segment

__all__ = ["DurationPlan", "GenerationResult", "NewsItem", "Segment"]
