import itertools

import pytest

from conftest import FakeAudio, FakeEncoder, FakeNewsSource, FakeTTS
from news_briefing.application.pipeline import BriefingPipeline, BriefingRun, Stage
from news_briefing.domain.models import NewsItem
from news_briefing.errors import (
    AssetMissingError,
    EncodeError,
    NoContentError,
    RunTimeoutError,
    SynthesisError,
    UploadError,
)
from news_briefing.ports.interfaces import IUploader


def make_pipeline(items, tmp_path, fonts_dir, fixed_now, duration=50.0, **overrides):
    scratch = tmp_path / "scratch"
    scratch.mkdir(exist_ok=True)
    kwargs = dict(
        news_source=FakeNewsSource(items),
        tts_provider=FakeTTS(),
        audio_toolkit=FakeAudio(duration),
        video_encoder=FakeEncoder(),
        fonts_dir=fonts_dir,
        scratch_root=str(scratch),
        now=lambda: fixed_now,
    )
    kwargs.update(overrides)
    return BriefingPipeline(**kwargs)


def test_end_to_end_scenario(news_items, tmp_path, fonts_dir, fixed_now):
    pipeline = make_pipeline(news_items, tmp_path, fonts_dir, fixed_now)
    run = BriefingRun(pipeline, "national", 30)

    result = run.execute()

    assert result.duration_seconds == 240
    assert result.slide_count == 8
    assert result.seconds_per_slide == 30
    assert result.mime_type == "video/mp4"
    assert result.video_bytes.startswith(b"\x00\x00\x00\x18ftyp")
    assert result.news_items == tuple(news_items)
    assert result.title == "India News Briefing • Sunday, 18 October 2026"

    assert pipeline.audio.pad_calls == [(190, 240)]
    call = pipeline.encoder.calls[0]
    assert call["duration_seconds"] == 240
    assert call["audio_path"].endswith("narration-padded.mp3")
    assert call["audio_exists"]
    assert call["size"] == (1280, 720)
    assert 0 < call["timeout"] <= 300
    graph = call["filter_complex"]
    assert "UPDATE 8" in graph and "UPDATE 9" not in graph
    assert "between(t\\,210\\,240)" in graph

    assert run.stage is Stage.DONE
    assert run.history == [
        Stage.IDLE, Stage.FETCHING, Stage.SCRIPT_ASSEMBLED, Stage.NARRATING,
        Stage.DURATION_MEASURED, Stage.PADDING, Stage.SEGMENTS_PLANNED,
        Stage.GRAPH_BUILT, Stage.ENCODING, Stage.DONE,
    ]
    assert list((tmp_path / "scratch").iterdir()) == []


def test_script_and_description(news_items, tmp_path, fonts_dir, fixed_now):
    pipeline = make_pipeline(news_items, tmp_path, fonts_dir, fixed_now)
    result = pipeline.run("national", 30)

    assert result.script.startswith(
        "Welcome to your India news briefing for Sunday, 18 October 2026. "
        "Update 1: Monsoon arrives early in Kerala. The IMD said the monsoon arrived three days early. "
    )
    assert "Update 3: ISRO plans new launch. A 'heavy' payload" in result.script
    assert result.script.endswith("Subscribe for more daily updates from across India.")
    assert pipeline.tts.calls == [(result.script, "en")]

    lines = result.description.split("\n")
    assert lines[0] == "Latest national updates from India on Sunday, 18 October 2026."
    assert lines[2] == "1. Monsoon arrives early in Kerala More: https://example.org/monsoon"
    assert lines[3] == "2. RBI keeps repo rate unchanged"
    assert lines[-1] == "Generated automatically by the India Update Generator."


def test_long_narration_is_not_padded(news_items, tmp_path, fonts_dir, fixed_now):
    pipeline = make_pipeline(news_items, tmp_path, fonts_dir, fixed_now, duration=300.4)
    run = BriefingRun(pipeline, "national", 45)
    result = run.execute()

    assert result.duration_seconds == 301
    assert result.slide_count == 7
    assert pipeline.audio.pad_calls == []
    assert Stage.PADDING not in run.history
    assert pipeline.encoder.calls[0]["audio_exists"]


def test_many_items_stretch_video(tmp_path, fonts_dir, fixed_now):
    items = [NewsItem(title=f"Story {i}", content=f"Body {i}") for i in range(15)]
    pipeline = make_pipeline(items, tmp_path, fonts_dir, fixed_now)
    result = pipeline.run("national", 45)

    assert len(result.news_items) == 12
    assert result.slide_count == 12
    assert result.duration_seconds == 540


def test_filters_items_without_title_or_content(tmp_path, fonts_dir, fixed_now):
    items = [
        NewsItem(title="", content="orphan body"),
        NewsItem(title="Headline only", content="  "),
        NewsItem(title="Kept", content="Body"),
    ]
    pipeline = make_pipeline(items, tmp_path, fonts_dir, fixed_now)
    assert pipeline.fetch_items("national") == [items[2]]


def test_empty_fetch_fails_before_synthesis(tmp_path, fonts_dir, fixed_now):
    items = [NewsItem(title="", content="")]
    pipeline = make_pipeline(items, tmp_path, fonts_dir, fixed_now)
    run = BriefingRun(pipeline, "sports", 30)

    with pytest.raises(NoContentError):
        run.execute()

    assert pipeline.news.categories == ["sports"]
    assert pipeline.tts.calls == []
    assert run.history == [Stage.IDLE, Stage.FETCHING, Stage.ERROR]
    assert list((tmp_path / "scratch").iterdir()) == []


def test_missing_font_fails_before_narration(news_items, tmp_path, fixed_now):
    empty_fonts = tmp_path / "no-fonts"
    empty_fonts.mkdir()
    pipeline = make_pipeline(news_items, tmp_path, empty_fonts, fixed_now)
    run = BriefingRun(pipeline, "national", 30)

    with pytest.raises(AssetMissingError):
        run.execute()

    assert pipeline.tts.calls == []
    assert pipeline.encoder.calls == []
    assert run.history == [Stage.IDLE, Stage.FETCHING, Stage.ERROR]
    assert list((tmp_path / "scratch").iterdir()) == []


def test_unusable_ffmpeg_fails_before_narration(news_items, tmp_path, fonts_dir, fixed_now):
    encoder = FakeEncoder(prepare_error=AssetMissingError("FFmpeg build lacks drawtext"))
    pipeline = make_pipeline(news_items, tmp_path, fonts_dir, fixed_now, video_encoder=encoder)
    run = BriefingRun(pipeline, "national", 30)

    with pytest.raises(AssetMissingError, match="drawtext"):
        run.execute()

    assert pipeline.tts.calls == []
    assert encoder.calls == []
    assert run.history == [Stage.IDLE, Stage.FETCHING, Stage.ERROR]


def test_synthesis_failure(news_items, tmp_path, fonts_dir, fixed_now):
    pipeline = make_pipeline(news_items, tmp_path, fonts_dir, fixed_now, tts_provider=FakeTTS(fail=True))
    with pytest.raises(SynthesisError):
        pipeline.run()
    assert pipeline.encoder.calls == []


def test_unexpected_tts_exception_becomes_synthesis_error(news_items, tmp_path, fonts_dir, fixed_now):
    class Broken(FakeTTS):
        def synthesize(self, text, output_path, language="en"):
            raise ConnectionError("reset by peer")

    pipeline = make_pipeline(news_items, tmp_path, fonts_dir, fixed_now, tts_provider=Broken())
    with pytest.raises(SynthesisError, match="reset by peer"):
        pipeline.run()


def test_encode_failure_cleans_up(news_items, tmp_path, fonts_dir, fixed_now):
    encoder = FakeEncoder(error=EncodeError("ffmpeg exit code 1"))
    pipeline = make_pipeline(news_items, tmp_path, fonts_dir, fixed_now, video_encoder=encoder)
    run = BriefingRun(pipeline, "national", 30)

    with pytest.raises(EncodeError):
        run.execute()

    assert run.stage is Stage.ERROR
    assert list((tmp_path / "scratch").iterdir()) == []


def test_wall_clock_budget(news_items, tmp_path, fonts_dir, fixed_now):
    ticks = itertools.count(0, 100)
    pipeline = make_pipeline(
        news_items, tmp_path, fonts_dir, fixed_now,
        run_timeout=250, clock=lambda: next(ticks),
    )
    run = BriefingRun(pipeline, "national", 30)

    with pytest.raises(RunTimeoutError):
        run.execute()

    assert pipeline.encoder.calls == []
    assert run.stage is Stage.ERROR


class RecordingUploader(IUploader):
    def __init__(self):
        self.calls = []

    def upload_video(self, video_path, title, description="", tags=None,
                     category_id="25", privacy_status="public"):
        with open(video_path, "rb") as fh:
            self.calls.append((fh.read(), title, description, category_id, privacy_status))
        return {"video_id": "abc123", "url": "https://www.youtube.com/watch?v=abc123"}


def test_publish_uploads_video_bytes(news_items, tmp_path, fonts_dir, fixed_now):
    uploader = RecordingUploader()
    pipeline = make_pipeline(news_items, tmp_path, fonts_dir, fixed_now, uploader=uploader)
    result = pipeline.run()

    published = pipeline.publish(result, category_id="25", privacy_status="unlisted")

    assert published["url"].endswith("abc123")
    data, title, description, category_id, privacy = uploader.calls[0]
    assert data == result.video_bytes
    assert title == result.title
    assert description == result.description
    assert (category_id, privacy) == ("25", "unlisted")
    assert list((tmp_path / "scratch").iterdir()) == []


def test_publish_without_uploader(news_items, tmp_path, fonts_dir, fixed_now):
    pipeline = make_pipeline(news_items, tmp_path, fonts_dir, fixed_now)
    with pytest.raises(UploadError):
        pipeline.publish(pipeline.run())
