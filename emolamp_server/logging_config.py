from __future__ import annotations

import logging
import os
from typing import Optional, Union

logger = logging.getLogger("emolamp.server")


def _level_from_env(default: int = logging.INFO) -> int:
    name = os.getenv("EMOLAMP_LOG_LEVEL", "").strip().upper()
    level = logging.getLevelName(name) if name else default
    return level if isinstance(level, int) else default


def configure_logging(level: Optional[Union[int, str]] = None) -> None:
    """Configure root logging once; ``EMOLAMP_LOG_LEVEL`` picks the level when none is given."""
    if logger.handlers or logging.getLogger().handlers:
        return

    logging.basicConfig(
        level=level if level is not None else _level_from_env(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Request logging middleware replaces the access log
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
