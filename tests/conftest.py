from datetime import datetime
from pathlib import Path
from typing import List

import pytest

from news_briefing.domain.models import NewsItem
from news_briefing.domain.render_graph import FontSet
from news_briefing.errors import SynthesisError
from news_briefing.ports.interfaces import (
    IAudioToolkit,
    INewsSource,
    ITTSProvider,
    IVideoEncoder,
)


class FakeNewsSource(INewsSource):
    def __init__(self, items: List[NewsItem]):
        self.items = items
        self.categories = []

    def fetch_news(self, category):
        self.categories.append(category)
        return list(self.items)


class FakeTTS(ITTSProvider):
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.calls = []

    def synthesize(self, text, output_path, language="en"):
        self.calls.append((text, language))
        if self.fail:
            raise SynthesisError("tts down")
        Path(output_path).write_bytes(b"ID3narration")
        return output_path


class FakeAudio(IAudioToolkit):
    def __init__(self, duration: float):
        self.duration = duration
        self.pad_calls = []

    def duration_seconds(self, audio_path):
        return self.duration

    def pad_with_silence(self, audio_path, output_path, padding_seconds, total_seconds):
        self.pad_calls.append((padding_seconds, total_seconds))
        Path(output_path).write_bytes(Path(audio_path).read_bytes() + b"silence")
        return output_path


class FakeEncoder(IVideoEncoder):
    def __init__(self, error: Exception = None, prepare_error: Exception = None):
        self.error = error
        self.prepare_error = prepare_error
        self.calls = []

    def prepare(self):
        if self.prepare_error:
            raise self.prepare_error

    def encode(self, audio_path, filter_complex, duration_seconds, output_path,
               size=(1280, 720), background="0x020617", timeout=None):
        self.calls.append({
            "audio_path": audio_path,
            "filter_complex": filter_complex,
            "duration_seconds": duration_seconds,
            "size": size,
            "timeout": timeout,
            "audio_exists": Path(audio_path).exists(),
        })
        if self.error:
            raise self.error
        Path(output_path).write_bytes(b"\x00\x00\x00\x18ftypmp42")
        return output_path


@pytest.fixture
def news_items():
    return [
        NewsItem(title="Monsoon arrives early in Kerala", content="The IMD said the  monsoon\n arrived three days early.",
                 read_more_url="https://example.org/monsoon"),
        NewsItem(title="RBI keeps repo rate unchanged", content="The central bank held rates at 6.5%."),
        NewsItem(title="ISRO plans new launch", content="A “heavy” payload is scheduled for next month."),
    ]


@pytest.fixture
def fonts_dir(tmp_path):
    fonts = tmp_path / "fonts"
    fonts.mkdir()
    (fonts / "Manrope-Regular.ttf").write_bytes(b"font")
    (fonts / "Manrope-Bold.ttf").write_bytes(b"font")
    return fonts


@pytest.fixture
def fonts(fonts_dir):
    return FontSet.locate(fonts_dir, "Manrope-Regular.ttf", "Manrope-Bold.ttf")


@pytest.fixture
def fixed_now():
    return datetime(2026, 10, 18, 9, 30)
