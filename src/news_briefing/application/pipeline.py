"""
Briefing pipeline – orchestrate fetch → script → narration → duration → slides → render graph → encode.
Depends only on port interfaces (SOLID – Dependency Inversion).
"""

import logging
import shutil
import time
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from news_briefing.application.scratch import scratch_directory
from news_briefing.config import (
    DEFAULT_CATEGORY,
    DEFAULT_SECONDS_PER_SLIDE,
    FONT_BOLD,
    FONT_REGULAR,
    FONTS_DIR,
    MAX_NEWS_ITEMS,
    MINIMUM_VIDEO_SECONDS,
    RUN_TIMEOUT_SECONDS,
    TTS_LANGUAGE,
    VIDEO_HEIGHT,
    VIDEO_WIDTH,
    YOUTUBE_CATEGORY_ID,
    YOUTUBE_PRIVACY_STATUS,
)
from news_briefing.domain.models import GenerationResult, NewsItem
from news_briefing.domain.render_graph import FontSet, RenderGraphBuilder
from news_briefing.domain.script import (
    briefing_title,
    build_description,
    build_script,
    format_briefing_date,
)
from news_briefing.domain.timeline import adjust_duration, plan_segments
from news_briefing.errors import (
    BriefingError,
    NoContentError,
    RunTimeoutError,
    SynthesisError,
    UploadError,
)
from news_briefing.ports.interfaces import (
    IAudioToolkit,
    INewsSource,
    ITTSProvider,
    IUploader,
    IVideoEncoder,
)

logger = logging.getLogger(__name__)

VIDEO_FILENAME = "india-updates.mp4"


class Stage(str, Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    SCRIPT_ASSEMBLED = "script_assembled"
    NARRATING = "narrating"
    DURATION_MEASURED = "duration_measured"
    PADDING = "padding"
    SEGMENTS_PLANNED = "segments_planned"
    GRAPH_BUILT = "graph_built"
    ENCODING = "encoding"
    DONE = "done"
    ERROR = "error"


class BriefingRun:
    """
    One generation run. Holds the run's stage and deadline so concurrent runs
    sharing a pipeline never see each other's state.
    """

    def __init__(
        self,
        pipeline: "BriefingPipeline",
        category: str,
        seconds_per_slide: float,
    ):
        self.pipeline = pipeline
        self.category = category
        self.seconds_per_slide = seconds_per_slide
        self.stage = Stage.IDLE
        self.history: List[Stage] = [Stage.IDLE]
        self._deadline = pipeline.clock() + pipeline.run_timeout

    def _enter(self, stage: Stage) -> None:
        if stage not in (Stage.DONE, Stage.ERROR):
            self._check_deadline()
        logger.info("[%s] %s -> %s", self.category, self.stage.value, stage.value)
        self.stage = stage
        self.history.append(stage)

    def _remaining(self) -> float:
        return self._deadline - self.pipeline.clock()

    def _check_deadline(self) -> None:
        if self._remaining() <= 0:
            raise RunTimeoutError(
                f"Briefing generation exceeded {self.pipeline.run_timeout:.0f} seconds."
            )

    def execute(self) -> GenerationResult:
        try:
            with scratch_directory(self.pipeline.scratch_root) as workdir:
                return self._execute(workdir)
        except BriefingError as exc:
            logger.error("Briefing run failed during %s: %s", self.stage.value, exc)
            self._enter(Stage.ERROR)
            raise
        except Exception:
            logger.exception("Unexpected failure during %s", self.stage.value)
            self._enter(Stage.ERROR)
            raise

    def _execute(self, workdir: Path) -> GenerationResult:
        p = self.pipeline

        self._enter(Stage.FETCHING)
        items = p.fetch_items(self.category)
        logger.info("Selected %d stories", len(items))
        fonts = FontSet.locate(p.fonts_dir, p.font_regular, p.font_bold)
        p.encoder.prepare()

        formatted_date = format_briefing_date(p.now())
        title = briefing_title(formatted_date)
        script = build_script(items, formatted_date)
        self._enter(Stage.SCRIPT_ASSEMBLED)
        logger.info("Script length: %d characters", len(script))

        self._enter(Stage.NARRATING)
        narration_path = workdir / "narration.mp3"
        try:
            p.tts.synthesize(script, str(narration_path), language=p.language)
        except SynthesisError:
            raise
        except Exception as exc:
            raise SynthesisError(f"Narration could not be synthesized: {exc}") from exc

        measured = p.audio.duration_seconds(str(narration_path)) or 0.0
        self._enter(Stage.DURATION_MEASURED)
        minimum = max(p.minimum_video_seconds, len(items) * self.seconds_per_slide)
        plan = adjust_duration(measured, minimum)
        logger.info(
            "Narration %.1fs -> video %ds (padding %ds)",
            measured, plan.target_duration_seconds, plan.padding_seconds,
        )

        padded_path = workdir / "narration-padded.mp3"
        if plan.needs_padding:
            self._enter(Stage.PADDING)
            p.audio.pad_with_silence(
                str(narration_path),
                str(padded_path),
                plan.padding_seconds,
                plan.target_duration_seconds,
            )
        else:
            shutil.copyfile(narration_path, padded_path)

        segments = plan_segments(items, self.seconds_per_slide, plan.target_duration_seconds)
        self._enter(Stage.SEGMENTS_PLANNED)

        graph = RenderGraphBuilder(fonts, canvas_size=p.canvas_size).build(segments, title)
        self._enter(Stage.GRAPH_BUILT)
        logger.info("Render graph: %d instructions for %d slides", len(graph), len(segments))

        self._enter(Stage.ENCODING)
        video_path = workdir / VIDEO_FILENAME
        p.encoder.encode(
            str(padded_path),
            graph.to_filter_complex(),
            plan.target_duration_seconds,
            str(video_path),
            size=(graph.width, graph.height),
            timeout=self._remaining(),
        )

        result = GenerationResult(
            video_bytes=video_path.read_bytes(),
            mime_type="video/mp4",
            title=title,
            description=build_description(items, formatted_date),
            script=script,
            duration_seconds=plan.target_duration_seconds,
            slide_count=len(segments),
            seconds_per_slide=self.seconds_per_slide,
            news_items=tuple(items),
        )
        self._enter(Stage.DONE)
        return result


class BriefingPipeline:
    """
    Builds news briefing videos.
    All collaborators are injected (ports); no concrete implementations here.
    """

    def __init__(
        self,
        *,
        news_source: INewsSource,
        tts_provider: ITTSProvider,
        audio_toolkit: IAudioToolkit,
        video_encoder: IVideoEncoder,
        uploader: Optional[IUploader] = None,
        fonts_dir=FONTS_DIR,
        font_regular: str = FONT_REGULAR,
        font_bold: str = FONT_BOLD,
        canvas_size: tuple = (VIDEO_WIDTH, VIDEO_HEIGHT),
        minimum_video_seconds: float = MINIMUM_VIDEO_SECONDS,
        max_items: int = MAX_NEWS_ITEMS,
        language: str = TTS_LANGUAGE,
        run_timeout: float = RUN_TIMEOUT_SECONDS,
        scratch_root: Optional[str] = None,
        clock: Callable[[], float] = time.monotonic,
        now: Callable[[], Optional[datetime]] = lambda: None,
    ):
        self.news = news_source
        self.tts = tts_provider
        self.audio = audio_toolkit
        self.encoder = video_encoder
        self.uploader = uploader
        self.fonts_dir = fonts_dir
        self.font_regular = font_regular
        self.font_bold = font_bold
        self.canvas_size = canvas_size
        self.minimum_video_seconds = minimum_video_seconds
        self.max_items = max_items
        self.language = language
        self.run_timeout = run_timeout
        self.scratch_root = scratch_root
        self.clock = clock
        self.now = now

    def run(
        self,
        category: str = DEFAULT_CATEGORY,
        seconds_per_slide: float = DEFAULT_SECONDS_PER_SLIDE,
    ) -> GenerationResult:
        """Generate one briefing. Raises a BriefingError subclass on failure."""
        return BriefingRun(self, category, seconds_per_slide).execute()

    def fetch_items(self, category: str) -> List[NewsItem]:
        """Items with a title and content, at most ``max_items``."""
        items = [
            item for item in self.news.fetch_news(category)
            if item.title.strip() and item.content.strip()
        ][: self.max_items]
        if not items:
            raise NoContentError("No current updates are available right now.")
        return items

    def publish(
        self,
        result: GenerationResult,
        category_id: str = YOUTUBE_CATEGORY_ID,
        privacy_status: str = YOUTUBE_PRIVACY_STATUS,
    ) -> Dict[str, Any]:
        """Upload a finished briefing; returns the uploader's result (with 'url')."""
        if self.uploader is None:
            raise UploadError("No uploader configured.")
        with scratch_directory(self.scratch_root) as workdir:
            video_path = workdir / VIDEO_FILENAME
            video_path.write_bytes(result.video_bytes)
            return self.uploader.upload_video(
                video_path=str(video_path),
                title=result.title,
                description=result.description,
                category_id=category_id,
                privacy_status=privacy_status,
            )
