"""
News Briefing – turns a fetched news feed into a narrated slide-deck video.

Typical use:
  from news_briefing.application.pipeline import BriefingPipeline
  from news_briefing.adapters import default_adapters
  pipeline = BriefingPipeline(**default_adapters())
  result = pipeline.run(category="national", seconds_per_slide=30)

Collaborators (news feed, TTS, audio, encoder, uploader) are ports; swap
an adapter to change where news comes from or how video is encoded.
"""

__version__ = "0.3.0"
