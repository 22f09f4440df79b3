# tests/test_logging_config.py
import logging
import pytest

from wqscreen.services.logging_config import WarningMessageFilter, setup_main_logging


def _record(msg, args=(), level=logging.WARNING):
    return logging.LogRecord("py.warnings", level, __file__, 1, msg, args, None)


def test_filter_drops_known_openpyxl_noise():
    text = "/site-packages/openpyxl/styles/stylesheet.py:237: UserWarning: Workbook contains no default style, apply openpyxl's default\n  warn(...)"
    assert WarningMessageFilter().filter(_record("%s", (text,))) is False


def test_filter_shortens_captured_warning():
    text = "/app/wqscreen/x.py:12: FutureWarning: something changed\n  code line"
    record = _record("%s", (text,))

    assert WarningMessageFilter().filter(record) is True
    assert record.getMessage() == "FutureWarning: something changed"


def test_filter_leaves_info_messages():
    record = _record("Read %d rows", (5,), level=logging.INFO)
    assert WarningMessageFilter().filter(record) is True
    assert record.getMessage() == "Read 5 rows"


@pytest.mark.parametrize("verbosity, expected", [
    (0, logging.WARNING),
    (1, logging.INFO),
    (2, logging.DEBUG),
    (5, logging.DEBUG),
])
def test_setup_main_logging_levels(tmp_path, verbosity, expected):
    level, path = setup_main_logging(verbosity, "run", log_dir=str(tmp_path))
    assert level == expected
    assert path.startswith(str(tmp_path))


def test_setup_main_logging_never_overwrites(tmp_path):
    _, first = setup_main_logging(0, "run", log_dir=str(tmp_path))
    _, second = setup_main_logging(0, "run", log_dir=str(tmp_path))

    assert first.endswith("run.log")
    assert second.endswith("run(1).log")


def test_filter_keeps_numeric_runtime_warnings():
    """Numeric warnings are silenced at their source, so any that arrive are real."""
    text = "/app/wqscreen/x.py:40: RuntimeWarning: divide by zero encountered in log\n  y = np.log(x)"
    record = _record("%s", (text,))

    assert WarningMessageFilter().filter(record) is True
    assert record.getMessage() == "RuntimeWarning: divide by zero encountered in log"
