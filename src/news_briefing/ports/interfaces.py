"""
Port interfaces (SOLID – Dependency Inversion).
Implement these in adapters; the pipeline depends only on these abstractions.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from news_briefing.domain.models import NewsItem


class INewsSource(ABC):
    """News feed for one category."""

    @abstractmethod
    def fetch_news(self, category: str) -> List[NewsItem]:
        """Fetch raw items; raise UpstreamUnavailableError if the feed is down."""
        pass


class ITTSProvider(ABC):
    """Text-to-speech."""

    @abstractmethod
    def synthesize(self, text: str, output_path: str, language: str = "en") -> str:
        """Write narration audio to output_path and return it; raise SynthesisError on failure."""
        pass


class IAudioToolkit(ABC):
    """Audio metadata and silence padding."""

    @abstractmethod
    def duration_seconds(self, audio_path: str) -> float:
        """Duration in seconds; 0.0 when unknown."""
        pass

    @abstractmethod
    def pad_with_silence(
        self,
        audio_path: str,
        output_path: str,
        padding_seconds: float,
        total_seconds: float,
    ) -> str:
        """Append silence, hard-trim to total_seconds, write to output_path."""
        pass


class IVideoEncoder(ABC):
    """Batch encoder consuming a render graph."""

    def prepare(self) -> None:
        """Fail early (AssetMissingError) when the encoder cannot run at all."""

    @abstractmethod
    def encode(
        self,
        audio_path: str,
        filter_complex: str,
        duration_seconds: float,
        output_path: str,
        size: tuple = (1280, 720),
        background: str = "0x020617",
        timeout: Optional[float] = None,
    ) -> str:
        """Render the video; raise EncodeError / AssetMissingError / RunTimeoutError."""
        pass

    def cancel(self) -> None:
        """Abort an in-flight encode (optional)."""


class IUploader(ABC):
    """Publish video (e.g. YouTube)."""

    @abstractmethod
    def upload_video(
        self,
        video_path: str,
        title: str,
        description: str = "",
        tags: Optional[List[str]] = None,
        category_id: str = "25",
        privacy_status: str = "public",
    ) -> Dict[str, Any]:
        """Upload video; return dict with 'video_id' and 'url'. Raise UploadError on failure."""
        pass
