import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from .config import LoggingConfig, get_config

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

# Paths polled by health checks and the review UI's progress badge
QUIET_PATHS = ("GET /health", "GET /api/srs/stats")


class QuietPathFilter(logging.Filter):
    """Drops access-log lines for frequently polled endpoints."""

    def __init__(self, paths: tuple[str, ...] = QUIET_PATHS) -> None:
        super().__init__()
        self.paths = paths

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        return not any(path in message for path in self.paths)


def setup_logging(settings: LoggingConfig | None = None) -> None:
    settings = settings or get_config().logging
    level = getattr(logging, settings.level.upper(), logging.INFO)

    log_file = Path(settings.file)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    handlers: list[logging.Handler] = [
        RotatingFileHandler(log_file, maxBytes=5_000_000, backupCount=5),
        logging.StreamHandler(),
    ]
    for handler in handlers:
        handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = handlers

    access_logger = logging.getLogger("uvicorn.access")
    if not any(isinstance(f, QuietPathFilter) for f in access_logger.filters):
        access_logger.addFilter(QuietPathFilter())
