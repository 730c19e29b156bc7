import logging

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

# Libraries that log every connection or statement at INFO.
_NOISY_LOGGERS = ("httpx", "httpcore", "sqlalchemy.engine", "asyncio")


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for the API and worker processes."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
