import logging
from app.core.config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level: str | int = LOG_LEVEL) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)
    # uvicorn handlers keep their own output, only the format is shared
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        for handler in logging.getLogger(name).handlers:
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
