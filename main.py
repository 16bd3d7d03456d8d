#!/usr/bin/env python3
"""
Generate a narrated India news briefing video.
Uses the pipeline in src/news_briefing; run from project root.
"""

import sys
from pathlib import Path

# Ensure src is on path when running without `pip install -e .`
_SRC = Path(__file__).resolve().parent / "src"
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))

from news_briefing.cli import main  # noqa: E402

if __name__ == "__main__":
    sys.exit(main())
