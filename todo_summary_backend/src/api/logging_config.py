from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


# PUBLIC_INTERFACE
def configure_logging(log_level: str = "INFO") -> None:
    """
    Configure root logging for the service.

    Unknown level names fall back to INFO. Calling this more than once keeps
    the first handler configuration (logging.basicConfig semantics).
    """
    level = getattr(logging, log_level.upper(), None)
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
