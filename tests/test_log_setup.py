import logging

from atsconvert.log_setup import LEVEL_ENV, LOGGER_NAME, configure_logging


def _own_handlers(logger):
    return [h for h in logger.handlers if getattr(h, "_atsconvert_handler", False)]


def test_configure_logging_is_idempotent():
    logger = configure_logging("DEBUG")
    try:
        configure_logging("DEBUG")
        assert len(_own_handlers(logger)) == 1
        assert logger.level == logging.DEBUG
    finally:
        for h in _own_handlers(logger):
            logger.removeHandler(h)
        logger.setLevel(logging.NOTSET)


def test_level_from_environment(monkeypatch):
    monkeypatch.setenv(LEVEL_ENV, "warning")
    logger = configure_logging()
    try:
        assert logger.name == LOGGER_NAME
        assert logger.level == logging.WARNING
    finally:
        for h in _own_handlers(logger):
            logger.removeHandler(h)
        logger.setLevel(logging.NOTSET)


def test_unknown_level_falls_back_to_info(monkeypatch):
    monkeypatch.setenv(LEVEL_ENV, "chatty")
    logger = configure_logging()
    try:
        assert logger.level == logging.INFO
    finally:
        for h in _own_handlers(logger):
            logger.removeHandler(h)
        logger.setLevel(logging.NOTSET)
