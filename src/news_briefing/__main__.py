import sys

from news_briefing.cli import main

sys.exit(main())
