"""Entry point for ``python -m leaderboard_bot``."""

import sys

from .cli import main

sys.exit(main())
