"""Narration script, video title and description for a briefing."""

from datetime import datetime
from typing import Optional, Sequence
from zoneinfo import ZoneInfo

from news_briefing.domain.models import NewsItem
from news_briefing.domain.text import sanitize_text

BRIEFING_TIMEZONE = ZoneInfo("Asia/Kolkata")

OUTRO = "Thanks for watching. Subscribe for more daily updates from across India."
FOOTER = "Generated automatically by the India Update Generator."


def format_briefing_date(now: Optional[datetime] = None) -> str:
    """e.g. 'Sunday, 18 October 2026' (India time)."""
    now = now or datetime.now(BRIEFING_TIMEZONE)
    if now.tzinfo is not None:
        now = now.astimezone(BRIEFING_TIMEZONE)
    return f"{now:%A}, {now.day} {now:%B} {now.year}"


def briefing_title(formatted_date: str) -> str:
    return f"India News Briefing • {formatted_date}"


def _as_sentence(text: str) -> str:
    return text if not text or text[-1] in ".!?" else text + "."


def build_script(items: Sequence[NewsItem], formatted_date: str) -> str:
    intro = f"Welcome to your India news briefing for {formatted_date}."
    updates = [
        f"Update {number}: {item.title}. {_as_sentence(sanitize_text(item.content))}"
        for number, item in enumerate(items, 1)
    ]
    return " ".join([intro, *updates, OUTRO])


def build_description(items: Sequence[NewsItem], formatted_date: str) -> str:
    lines = [f"Latest national updates from India on {formatted_date}.", ""]
    for number, item in enumerate(items, 1):
        line = f"{number}. {item.title}"
        if item.read_more_url:
            line += f" More: {item.read_more_url}"
        lines.append(line)
    lines += ["", FOOTER]
    return "\n".join(lines)
