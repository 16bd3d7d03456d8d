"""
Slide timing: how long the video runs and which item is on screen when.

Both functions are pure; the pipeline feeds the output of
``adjust_duration`` into ``plan_segments``.
"""

import math
from typing import List, Sequence

from news_briefing.config import (
    MAX_SECONDS_PER_SLIDE,
    MIN_SECONDS_PER_SLIDE,
    MINIMUM_VIDEO_SECONDS,
)
from news_briefing.domain.models import DurationPlan, NewsItem, Segment
from news_briefing.errors import InvalidInputError


def adjust_duration(
    measured_duration_seconds: float,
    minimum_total_seconds: float = MINIMUM_VIDEO_SECONDS,
) -> DurationPlan:
    """
    Decide the final video length for a narration track.

    The target is never shorter than the narration (no truncation) and never
    shorter than ``minimum_total_seconds``. Padding is only requested when the
    gap is over a second, so rounding noise does not trigger a re-encode.
    """
    measured = max(0.0, float(measured_duration_seconds or 0.0))
    target = int(max(math.ceil(minimum_total_seconds), math.ceil(measured)))
    if measured < target - 1:
        return DurationPlan(target, int(math.ceil(target - measured)))
    return DurationPlan(target, 0)


def plan_segments(
    items: Sequence[NewsItem],
    seconds_per_slide: float,
    total_duration_seconds: float,
) -> List[Segment]:
    """
    Cut ``total_duration_seconds`` into slides of ``seconds_per_slide``.

    Every item gets at least one slide; when there are more slides than
    items the items repeat in order (slide ``i`` shows ``items[i % n]``).
    The last slide is clipped to the total duration.
    """
    if not items:
        raise InvalidInputError("Cannot plan slides without news items.")
    if not MIN_SECONDS_PER_SLIDE <= seconds_per_slide <= MAX_SECONDS_PER_SLIDE:
        raise InvalidInputError(
            f"secondsPerSlide must be between {MIN_SECONDS_PER_SLIDE} and "
            f"{MAX_SECONDS_PER_SLIDE}, got {seconds_per_slide}."
        )
    if total_duration_seconds <= 0:
        raise InvalidInputError("Total duration must be positive.")
    if (len(items) - 1) * seconds_per_slide >= total_duration_seconds:
        raise InvalidInputError(
            f"{len(items)} items at {seconds_per_slide}s per slide do not fit "
            f"in {total_duration_seconds}s."
        )

    segment_count = max(
        len(items), math.ceil(total_duration_seconds / seconds_per_slide)
    )
    segments = []
    for index in range(segment_count):
        start = index * seconds_per_slide
        end = min((index + 1) * seconds_per_slide, total_duration_seconds)
        segments.append(
            Segment(item=items[index % len(items)], start=start, end=end, index=index)
        )
    return segments
