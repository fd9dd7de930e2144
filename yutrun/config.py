"""
Configuration - Environment defaults and logging setup.

Environment:
- YUTRUN_STICK_NODES: STICK nodes placed at game start (default 3)
- YUTRUN_REFRESH_NODES: REFRESH nodes placed at game start (default 2)
- YUTRUN_LOG_LEVEL: CLI log level (default WARNING)
"""

import os
import sys

from loguru import logger


YUTRUN_STICK_NODES = int(os.getenv("YUTRUN_STICK_NODES", "3"))
YUTRUN_REFRESH_NODES = int(os.getenv("YUTRUN_REFRESH_NODES", "2"))
YUTRUN_LOG_LEVEL = os.getenv("YUTRUN_LOG_LEVEL", "WARNING")


def configure_logging(level: str | None = None) -> None:
    """Replace loguru's default sink with a stderr sink at the given level."""
    logger.remove()
    logger.add(sys.stderr, level=(level or YUTRUN_LOG_LEVEL).upper())
