import logging

from xspec_harness.core.logging import ColoredFormatter, LOG_FORMAT, verbosity_to_level


def test_verbosity_levels() -> None:
    assert verbosity_to_level(0) == logging.WARNING
    assert verbosity_to_level(1) == logging.INFO
    assert verbosity_to_level(2) == logging.INFO
    assert verbosity_to_level(3) == logging.DEBUG


def test_colored_formatter_leaves_record_untouched() -> None:
    record = logging.LogRecord("xspec_harness.core.runner", logging.ERROR, __file__, 1, "boom", None, None)

    colored = ColoredFormatter(LOG_FORMAT).format(record)
    plain = logging.Formatter(LOG_FORMAT).format(record)

    assert "\033[91mERROR" in colored
    assert " - ERROR - boom" in plain
    assert record.levelname == "ERROR"
    assert record.msg == "boom"
