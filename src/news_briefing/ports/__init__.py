"""Ports (interfaces) – depend on these, implement in adapters."""

from news_briefing.ports.interfaces import (
    IAudioToolkit,
    INewsSource,
    ITTSProvider,
    IUploader,
    IVideoEncoder,
)

__all__ = [
    "IAudioToolkit",
    "INewsSource",
    "ITTSProvider",
    "IUploader",
    "IVideoEncoder",
]
