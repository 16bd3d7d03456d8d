"""Domain models – immutable values passed between pipeline stages."""

import base64
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class NewsItem:
    """A news item as delivered by the feed. Never mutated after fetch."""
    title: str
    content: str
    author: Optional[str] = None
    read_more_url: Optional[str] = None
    date: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NewsItem":
        return cls(
            title=str(data.get("title") or ""),
            content=str(data.get("content") or ""),
            author=data.get("author") or None,
            read_more_url=data.get("readMoreUrl") or None,
            date=data.get("date") or None,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Feed-shaped dict (camelCase keys, optional fields omitted)."""
        data: Dict[str, Any] = {"title": self.title, "content": self.content}
        if self.author:
            data["author"] = self.author
        if self.read_more_url:
            data["readMoreUrl"] = self.read_more_url
        if self.date:
            data["date"] = self.date
        return data


@dataclass(frozen=True)
class Segment:
    """A time-bounded slide bound to one news item."""
    item: NewsItem
    start: float
    end: float
    index: int

    @property
    def duration(self) -> float:
        return self.end - self.start


@dataclass(frozen=True)
class DurationPlan:
    """Final video length and the silence needed to reach it."""
    target_duration_seconds: int
    padding_seconds: int = 0

    @property
    def needs_padding(self) -> bool:
        return self.padding_seconds > 0


@dataclass(frozen=True)
class GenerationResult:
    """Everything one run hands back to its caller."""
    video_bytes: bytes = field(repr=False)
    mime_type: str
    title: str
    description: str
    script: str
    duration_seconds: int
    slide_count: int
    seconds_per_slide: float
    news_items: Tuple[NewsItem, ...]

    def to_response(self) -> Dict[str, Any]:
        """JSON body for the HTTP surface."""
        news_items: List[Dict[str, Any]] = [item.to_dict() for item in self.news_items]
        return {
            "videoBase64": base64.b64encode(self.video_bytes).decode("ascii"),
            "mimeType": self.mime_type,
            "title": self.title,
            "description": self.description,
            "script": self.script,
            "durationSeconds": self.duration_seconds,
            "slideCount": self.slide_count,
            "secondsPerSlide": self.seconds_per_slide,
            "newsItems": news_items,
        }
