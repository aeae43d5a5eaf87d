import logging
from logging.handlers import RotatingFileHandler
from app.core.config import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_MAX_BYTES = 10_000_000
LOG_BACKUP_COUNT = 3

# third-party loggers raised to WARNING; httpx logs every Razorpay URL at INFO
QUIET_LOGGERS = ("uvicorn.access", "httpx")


def build_handlers(log_file: str) -> list[logging.Handler]:
    formatter = logging.Formatter(LOG_FORMAT)
    handlers = [
        logging.StreamHandler(),
        RotatingFileHandler(log_file, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUP_COUNT),
    ]
    for handler in handlers:
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(formatter)
    return handlers


def setup_logging():
    """Console and rotating-file output on the root logger. Safe to call more than once."""
    root_logger = logging.getLogger()
    if getattr(root_logger, "_checkout_configured", False):
        return

    root_logger.setLevel(logging.DEBUG if settings.debug else logging.INFO)
    for handler in build_handlers(settings.log_file):
        root_logger.addHandler(handler)
    root_logger._checkout_configured = True

    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).propagate = True
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    engine_logger = logging.getLogger("sqlalchemy.engine")
    engine_logger.setLevel(logging.WARNING)
    engine_logger.handlers = []
    engine_logger.propagate = False
