import logging
import sys

from user_directory.logger import get_logger, setup_logger


def test_setup_logger_is_idempotent() -> None:
    setup_logger()
    logger = setup_logger()
    handlers = [h for h in logger.handlers if isinstance(h, logging.StreamHandler) and h.stream is sys.stderr]
    assert len(handlers) == 1
    assert logger.propagate is False


def test_env_level_override(monkeypatch) -> None:
    monkeypatch.setenv("USER_DIRECTORY_LOG_LEVEL", "debug")
    assert setup_logger().level == logging.DEBUG
    monkeypatch.setenv("USER_DIRECTORY_LOG_LEVEL", "error")
    assert setup_logger().level == logging.ERROR
    monkeypatch.delenv("USER_DIRECTORY_LOG_LEVEL")
    setup_logger()


def test_category_filter(monkeypatch) -> None:
    monkeypatch.setenv("USER_DIRECTORY_LOG_CATS", "optimizer, upload")
    logger = setup_logger()
    handler = next(h for h in logger.handlers if getattr(h, "stream", None) is sys.stderr)

    def _record(name: str) -> logging.LogRecord:
        return logging.LogRecord(name, logging.INFO, __file__, 1, "msg", None, None)

    assert handler.filter(_record("user_directory.optimizer"))
    assert not handler.filter(_record("user_directory.repository"))

    monkeypatch.delenv("USER_DIRECTORY_LOG_CATS")
    setup_logger()
    assert handler.filter(_record("user_directory.repository"))


def test_get_logger_returns_child() -> None:
    assert get_logger("upload").name == "user_directory.upload"
    assert get_logger().name == "user_directory"
