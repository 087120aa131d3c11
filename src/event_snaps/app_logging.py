"""Logging configuration helpers."""

import logging

_FORMAT = "%(asctime)s %(levelname)s: %(name)s: %(message)s"


def configure_logging(level: int | str = logging.INFO) -> None:
    """Route ``event_snaps`` logs to a single stream handler at ``level``.

    Safe to call repeatedly; later calls only change the level. The Supabase
    client's HTTP transport logs every request at INFO, so it is held at
    WARNING.
    """
    logger = logging.getLogger("event_snaps")
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
