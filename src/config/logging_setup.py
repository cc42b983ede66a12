"""Console logging for the whole application (configured once, at startup)"""

import logging
from typing import Optional

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: int | str = logging.INFO, format_string: Optional[str] = None) -> None:
    """
    Install a single console handler on the root logger.

    Existing root handlers are removed first, so calling this twice does not duplicate output.
    Modules keep logging through their own logging.getLogger(__name__).
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    formatter = logging.Formatter(
        format_string or DEFAULT_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)
