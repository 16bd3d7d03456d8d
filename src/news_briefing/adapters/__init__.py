"""
Adapters – concrete implementations of ports.
Swap one in through default_adapters(news_source=...) to change a collaborator.
"""

from news_briefing.adapters.audio import PydubAudioToolkit
from news_briefing.adapters.news import InshortsNewsSource
from news_briefing.adapters.tts import GTTSProvider
from news_briefing.adapters.video import FFmpegEncoder


def default_adapters(**overrides):
    """
    Build default adapter instances (use package config).
    Overrides: news_source=..., tts_provider=..., etc. for testing or another feed.
    The uploader is created lazily by the caller since it needs OAuth credentials.
    """
    defaults = {
        "news_source": InshortsNewsSource(),
        "tts_provider": GTTSProvider(),
        "audio_toolkit": PydubAudioToolkit(),
        "video_encoder": FFmpegEncoder(),
    }
    defaults.update(overrides)
    return defaults
