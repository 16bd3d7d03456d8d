import math

import pytest

from news_briefing.domain.models import NewsItem
from news_briefing.domain.timeline import adjust_duration, plan_segments
from news_briefing.errors import InvalidInputError


def _items(n):
    return [NewsItem(title=f"Story {i}", content=f"Body {i}") for i in range(n)]


def test_end_to_end_numbers():
    plan = adjust_duration(50)
    assert plan.target_duration_seconds == 240
    assert plan.padding_seconds == 190
    assert plan.needs_padding

    items = _items(3)
    segments = plan_segments(items, 30, plan.target_duration_seconds)
    assert len(segments) == 8
    assert [(s.start, s.end) for s in segments] == [(i * 30, i * 30 + 30) for i in range(8)]
    assert [items.index(s.item) for s in segments] == [0, 1, 2, 0, 1, 2, 0, 1]
    assert [s.index for s in segments] == list(range(8))


@pytest.mark.parametrize("count", [1, 2, 5, 12])
@pytest.mark.parametrize("seconds_per_slide", [10, 12.3, 17.5, 30, 45])
@pytest.mark.parametrize("total", [240, 251, 333.3, 600])
def test_segments_cover_duration(count, seconds_per_slide, total):
    # the pipeline always stretches the video so each item gets a full slide
    total = max(total, count * seconds_per_slide)
    items = _items(count)
    segments = plan_segments(items, seconds_per_slide, total)

    assert segments[0].start == 0
    assert segments[-1].end == total
    for current, following in zip(segments, segments[1:]):
        assert current.end == following.start
    for i, segment in enumerate(segments):
        assert segment.item is items[i % count]
        assert 0 < segment.end - segment.start <= seconds_per_slide + 1e-9
    assert len(segments) == max(count, math.ceil(total / seconds_per_slide))


def test_last_segment_is_clipped():
    segments = plan_segments(_items(2), 45, 100)
    assert [(s.start, s.end) for s in segments] == [(0, 45), (45, 90), (90, 100)]


def test_every_item_gets_a_slide_when_items_outnumber_slots():
    items = _items(5)
    segments = plan_segments(items, 30, 130)
    assert [s.item for s in segments] == items


@pytest.mark.parametrize("kwargs", [
    dict(items=[], seconds_per_slide=30, total_duration_seconds=240),
    dict(items=_items(1), seconds_per_slide=0, total_duration_seconds=240),
    dict(items=_items(1), seconds_per_slide=-5, total_duration_seconds=240),
    dict(items=_items(1), seconds_per_slide=9.9, total_duration_seconds=240),
    dict(items=_items(1), seconds_per_slide=46, total_duration_seconds=240),
    dict(items=_items(1), seconds_per_slide=30, total_duration_seconds=0),
    dict(items=_items(12), seconds_per_slide=45, total_duration_seconds=240),
])
def test_plan_rejects_invalid_input(kwargs):
    with pytest.raises(InvalidInputError):
        plan_segments(**kwargs)


@pytest.mark.parametrize("measured", [0, 0.4, 12.3, 238.5, 239, 239.5, 240, 240.01, 612.7])
def test_target_meets_minimum_and_never_truncates(measured):
    plan = adjust_duration(measured)
    assert plan.target_duration_seconds >= 240
    assert plan.target_duration_seconds >= math.ceil(measured)
    assert plan.target_duration_seconds >= measured


def test_no_padding_within_rounding_noise():
    assert adjust_duration(239.5).padding_seconds == 0
    assert adjust_duration(612.7).padding_seconds == 0
    assert adjust_duration(612.7).target_duration_seconds == 613


def test_padding_rounds_up():
    plan = adjust_duration(238.5)
    assert plan.target_duration_seconds == 240
    assert plan.padding_seconds == 2


def test_missing_duration_treated_as_zero():
    plan = adjust_duration(None)
    assert plan.target_duration_seconds == 240
    assert plan.padding_seconds == 240


def test_custom_minimum():
    plan = adjust_duration(50, minimum_total_seconds=360)
    assert plan.target_duration_seconds == 360
    assert plan.padding_seconds == 310
