import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

PROJECT_ROOT = Path(__file__).resolve().parents[2]

# News feed (Inshorts-compatible JSON: {"data": [...]})
NEWS_API_URL = os.getenv("NEWS_API_URL", "https://inshorts.deta.dev/news")
NEWS_REQUEST_TIMEOUT = float(os.getenv("NEWS_REQUEST_TIMEOUT", "15"))
DEFAULT_CATEGORY = os.getenv("DEFAULT_CATEGORY", "national")
MAX_NEWS_ITEMS = 12

# Slide timing
DEFAULT_SECONDS_PER_SLIDE = 30
MIN_SECONDS_PER_SLIDE = 10
MAX_SECONDS_PER_SLIDE = 45
MINIMUM_VIDEO_SECONDS = int(os.getenv("MINIMUM_VIDEO_SECONDS", "240"))  # platform minimum

# TTS Configuration
TTS_LANGUAGE = os.getenv("TTS_LANGUAGE", "en")

# Video Configuration (16:9 landscape)
VIDEO_WIDTH = 1280
VIDEO_HEIGHT = 720
FPS = 30

# Fonts (Manrope by default)
FONTS_DIR = Path(os.getenv("FONTS_DIR", str(PROJECT_ROOT / "public" / "fonts")))
FONT_REGULAR = os.getenv("FONT_REGULAR", "Manrope-Regular.ttf")
FONT_BOLD = os.getenv("FONT_BOLD", "Manrope-Bold.ttf")

# Encoder; empty means use the binary bundled with imageio-ffmpeg
FFMPEG_BINARY = os.getenv("FFMPEG_BINARY", "")
RUN_TIMEOUT_SECONDS = float(os.getenv("RUN_TIMEOUT_SECONDS", "300"))

# YouTube Upload Configuration
YOUTUBE_CREDENTIALS_FILE = os.getenv("YOUTUBE_CREDENTIALS_FILE", "client_secret.json")
YOUTUBE_TOKEN_FILE = os.getenv("YOUTUBE_TOKEN_FILE", "token.pickle")
YOUTUBE_AUTO_UPLOAD = os.getenv("YOUTUBE_AUTO_UPLOAD", "false").lower() == "true"
YOUTUBE_PRIVACY_STATUS = os.getenv("YOUTUBE_PRIVACY_STATUS", "public")  # public, unlisted, private
YOUTUBE_CATEGORY_ID = os.getenv("YOUTUBE_CATEGORY_ID", "25")  # 25 = News & Politics

# Output
OUTPUT_DIR = os.getenv("OUTPUT_DIR", "output")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
