import io
import logging

from cardbook.utils.logger import (
    ROOT_LOGGER_NAME,
    ColoredFormatter,
    get_logger,
    set_level,
    setup_logger,
)


def test_loggers_share_the_package_namespace():
    assert get_logger("cardbook.storage.base").name == "cardbook.storage.base"
    assert get_logger("__main__").name == "cardbook.__main__"
    assert get_logger("cardbookish").name == "cardbook.cardbookish"


def test_setup_replaces_handlers(tmp_path):
    stream = io.StringIO()
    setup_logger(level="INFO", stream=stream)
    logger = setup_logger(level="INFO", stream=stream, log_file=str(tmp_path / "logs" / "app.log"))

    assert len(logger.handlers) == 2
    get_logger("tests").info("hello")
    assert stream.getvalue().count("hello") == 1
    assert (tmp_path / "logs" / "app.log").exists()

    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()


def test_non_terminal_output_is_not_colored():
    stream = io.StringIO()
    setup_logger(level="DEBUG", stream=stream, colorize=True)

    get_logger("tests").warning("plain")

    assert "\x1b[" not in stream.getvalue()
    assert "WARNING  | cardbook.tests | plain" in stream.getvalue()


def test_colored_formatter_wraps_level_name_only():
    formatter = ColoredFormatter("%(levelname)s|%(message)s")
    record = logging.LogRecord("x", logging.ERROR, __file__, 1, "boom", None, None)

    output = formatter.format(record)

    assert output.endswith("|boom")
    assert "\x1b[" in output
    assert record.levelname == "ERROR"


def test_set_level():
    setup_logger(level="INFO", stream=io.StringIO())
    set_level("WARNING")
    assert logging.getLogger(ROOT_LOGGER_NAME).level == logging.WARNING
