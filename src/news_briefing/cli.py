"""
CLI entrypoint:
  python -m news_briefing [--category national] [--seconds-per-slide 30] [--upload]
  python -m news_briefing --serve [--port 8000]
"""

import argparse
import logging
import os
import sys
from datetime import datetime
from pathlib import Path

from news_briefing.config import (
    DEFAULT_CATEGORY,
    DEFAULT_SECONDS_PER_SLIDE,
    LOG_LEVEL,
    OUTPUT_DIR,
    YOUTUBE_AUTO_UPLOAD,
    YOUTUBE_CATEGORY_ID,
    YOUTUBE_PRIVACY_STATUS,
)
from news_briefing.errors import BriefingError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate a narrated India news briefing video"
    )
    parser.add_argument("--category", default=DEFAULT_CATEGORY, help="News category (default: national)")
    parser.add_argument(
        "--seconds-per-slide",
        type=float,
        default=DEFAULT_SECONDS_PER_SLIDE,
        help="Seconds each slide stays on screen (10-45)",
    )
    parser.add_argument("--output", type=str, help="Where to write the MP4 (default: output/<timestamp>.mp4)")
    parser.add_argument("--upload", action="store_true", help="Upload video to YouTube after generation")
    parser.add_argument("--privacy", default=YOUTUBE_PRIVACY_STATUS, choices=["public", "unlisted", "private"])
    parser.add_argument("--serve", action="store_true", help="Run the HTTP API instead")
    parser.add_argument("--port", type=int, default=8000)
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.serve:
        from news_briefing.api import serve
        serve(port=args.port)
        return 0

    from news_briefing.adapters import default_adapters
    from news_briefing.application.pipeline import BriefingPipeline

    upload_after = args.upload or YOUTUBE_AUTO_UPLOAD
    uploader = None
    if upload_after:
        from news_briefing.adapters.upload import YouTubeUploader
        uploader = YouTubeUploader()

    pipeline = BriefingPipeline(**default_adapters(), uploader=uploader)

    print("=" * 60)
    print(f"Generating '{args.category}' news briefing...")
    print("=" * 60)
    try:
        result = pipeline.run(args.category, args.seconds_per_slide)
    except BriefingError as exc:
        print(f"\n❌ {exc}")
        return 1

    output = Path(args.output) if args.output else (
        Path(OUTPUT_DIR) / f"india_briefing_{datetime.now().strftime('%Y%m%d_%H%M%S')}.mp4"
    )
    os.makedirs(output.parent, exist_ok=True)
    output.write_bytes(result.video_bytes)

    print(f"\n✅ Success! Video saved to: {output}")
    print(f"   Title: {result.title}")
    print(f"   Duration: {result.duration_seconds}s, {result.slide_count} slides")

    if upload_after:
        print("\n📤 Uploading to YouTube...")
        try:
            published = pipeline.publish(
                result, category_id=YOUTUBE_CATEGORY_ID, privacy_status=args.privacy
            )
        except BriefingError as exc:
            print(f"\n⚠️  YouTube upload failed ({exc}), but video is saved locally")
            return 1
        print(f"\n🎉 Video published successfully!\n   Watch it here: {published['url']}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
