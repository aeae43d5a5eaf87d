import logging
from logging.handlers import RotatingFileHandler

from app.core.logging_config import LOG_FORMAT, build_handlers, setup_logging


def test_build_handlers_console_and_rotating_file(tmp_path):
    handlers = build_handlers(str(tmp_path / "app.log"))
    try:
        console, rotating = handlers
        assert type(console) is logging.StreamHandler
        assert isinstance(rotating, RotatingFileHandler)
        assert rotating.maxBytes == 10_000_000
        assert rotating.backupCount == 3
        for handler in handlers:
            assert handler.level == logging.DEBUG
            assert handler.formatter._fmt == LOG_FORMAT
    finally:
        for handler in handlers:
            handler.close()


def test_setup_logging_runs_once():
    root_logger = logging.getLogger()
    setup_logging()
    count = len(root_logger.handlers)

    setup_logging()

    assert len(root_logger.handlers) == count
    assert logging.getLogger("httpx").level == logging.WARNING
    assert logging.getLogger("uvicorn.access").level == logging.WARNING
    assert logging.getLogger("sqlalchemy.engine").propagate is False
