import logging
import os
from typing import Union


def configure_logging(default_level: Union[int, str] = logging.INFO) -> None:
    """Configure root logger with a sane default format.

    Accepts a level number or name (e.g. ``Settings.log_level``) and respects
    the PHASEBANK_LOG_LEVEL env var if present.
    """
    level_name = os.getenv("PHASEBANK_LOG_LEVEL")
    level = default_level
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    if level_name:
        level = getattr(logging, level_name.upper(), level)
    logging.basicConfig(
        level=level,
        format="[%(asctime)s] [%(levelname)s] %(name)s: %(message)s",
    )
