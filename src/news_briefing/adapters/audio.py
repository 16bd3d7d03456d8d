"""IAudioToolkit adapter using pydub (ffmpeg under the hood)."""

import logging
from pathlib import Path
from typing import Optional

from pydub import AudioSegment
from pydub.exceptions import CouldntDecodeError, CouldntEncodeError

from news_briefing.adapters.video import resolve_ffmpeg
from news_briefing.config import FFMPEG_BINARY
from news_briefing.errors import EncodeError, SynthesisError
from news_briefing.ports.interfaces import IAudioToolkit

logger = logging.getLogger(__name__)


class PydubAudioToolkit(IAudioToolkit):
    """
    Decodes through the same ffmpeg the encoder resolves. Naming the decoder
    keeps pydub from asking ffprobe for stream info, which imageio-ffmpeg
    does not ship.
    """

    def __init__(self, converter: Optional[str] = None):
        self._converter = converter
        self._resolved: Optional[str] = None

    @property
    def converter(self) -> str:
        """Resolved once; a missing binary raises AssetMissingError."""
        if self._resolved is None:
            self._resolved = resolve_ffmpeg(
                self._converter or FFMPEG_BINARY, require_drawtext=False
            )
        return self._resolved

    def _load(self, audio_path: str) -> AudioSegment:
        AudioSegment.converter = self.converter
        fmt = Path(audio_path).suffix.lstrip(".").lower() or None
        codec = "mp3" if fmt == "mp3" else None
        return AudioSegment.from_file(audio_path, format=fmt, codec=codec)

    def duration_seconds(self, audio_path: str) -> float:
        try:
            audio = self._load(audio_path)
        except (CouldntDecodeError, OSError) as exc:
            raise SynthesisError(f"Narration audio could not be read: {exc}") from exc
        return len(audio) / 1000.0

    def pad_with_silence(
        self,
        audio_path: str,
        output_path: str,
        padding_seconds: float,
        total_seconds: float,
    ) -> str:
        logger.info("Padding narration with %.0fs of silence", padding_seconds)
        try:
            audio = self._load(audio_path)
            silence = AudioSegment.silent(
                duration=int(padding_seconds * 1000), frame_rate=audio.frame_rate
            )
            padded = (audio + silence)[: int(total_seconds * 1000)]
            padded.export(output_path, format="mp3")
        except (CouldntDecodeError, CouldntEncodeError, OSError) as exc:
            raise EncodeError(f"Could not pad narration audio: {exc}") from exc
        return output_path
