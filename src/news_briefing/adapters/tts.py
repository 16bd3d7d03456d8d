"""ITTSProvider adapter using gTTS."""

import logging

from gtts import gTTS
from gtts.tts import gTTSError

from news_briefing.errors import SynthesisError
from news_briefing.ports.interfaces import ITTSProvider

logger = logging.getLogger(__name__)


class GTTSProvider(ITTSProvider):
    """Google Translate TTS. Single voice; `tld` picks the accent."""

    def __init__(self, slow: bool = False, tld: str = "co.in"):
        self.slow = slow
        self.tld = tld

    def synthesize(self, text: str, output_path: str, language: str = "en") -> str:
        logger.info("Synthesizing %d characters of narration (%s)", len(text), language)
        try:
            tts = gTTS(text=text, lang=language, slow=self.slow, tld=self.tld)
            tts.save(output_path)
        except (gTTSError, AssertionError, ValueError, OSError) as exc:
            raise SynthesisError(f"Narration could not be synthesized: {exc}") from exc
        return output_path
