import logging

from ..config import get_settings


LOG_FORMAT = '%(levelname)s:%(name)s: %(message)s'


def configure_logging(level: str | int | None = None) -> None:
    """Configure root logging for hosts that embed the editor engine."""
    if level is None:
        level = get_settings().log_level
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        force=True
    )
