import logging

from triadpicker.logging_config import setup_logging


def test_setup_logging_replaces_handlers(tmp_path):
    log_file = tmp_path / "picker.log"
    setup_logging(level=logging.DEBUG, log_file=str(log_file))
    logger = setup_logging(level=logging.DEBUG, log_file=str(log_file))

    assert logger is logging.getLogger("triadpicker")
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 2

    logging.getLogger("triadpicker.model").debug("hello from the model")
    for handler in logger.handlers:
        handler.flush()
    assert "hello from the model" in log_file.read_text(encoding="utf-8")

    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
