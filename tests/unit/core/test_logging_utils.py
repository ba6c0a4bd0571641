"""Unit tests for structured logging helpers."""

import logging

from stats_logger.core.logging_config import configure_logging
from stats_logger.core.logging_utils import (
    StructuredLogger,
    ensure_structured_logger,
    get_module_logger,
)


class TestStructuredLogger:

    def test_module_logger_is_namespaced(self):
        logger = get_module_logger("stats_logger.core.session_logger")

        assert logger.name == "stats_logger.core.session_logger"
        assert logger.component == "session_logger"

    def test_short_name_is_prefixed(self):
        logger = get_module_logger("SessionLogger")

        assert logger.name == "stats_logger.SessionLogger"
        assert logger.component == "SessionLogger"

    def test_messages_carry_component(self, caplog):
        logger = get_module_logger("Widget")

        with caplog.at_level(logging.INFO, logger="stats_logger"):
            logger.info("value %d", 3)

        assert caplog.records[-1].getMessage() == "[Widget] value 3"

    def test_bad_format_args_are_kept(self, caplog):
        logger = get_module_logger("Widget")

        with caplog.at_level(logging.INFO, logger="stats_logger"):
            logger.info("no placeholder", "extra")

        assert caplog.records[-1].getMessage() == "[Widget] no placeholder | args=extra"

    def test_child_component(self):
        child = get_module_logger("Widget").getChild("part")

        assert child.component == "Widget.part"


class TestEnsureStructuredLogger:

    def test_passthrough(self):
        logger = get_module_logger("A")
        assert ensure_structured_logger(logger) is logger

    def test_wraps_plain_logger(self):
        wrapped = ensure_structured_logger(logging.getLogger("plain"), component="Plain")

        assert isinstance(wrapped, StructuredLogger)
        assert wrapped.component == "Plain"

    def test_fallback_name(self):
        assert ensure_structured_logger(None, fallback_name="Fallback").component == "Fallback"


def test_configure_logging_writes_file(tmp_path):
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    log_file = tmp_path / "logs" / "diag.log"

    try:
        configure_logging("debug", force=True, console=False, log_file=log_file)
        get_module_logger("Diag").info("hello")
        for handler in root.handlers:
            handler.flush()

        assert "[Diag] hello" in log_file.read_text(encoding="utf-8")
        assert logging.getLogger("asyncio").level == logging.ERROR
    finally:
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()
        for handler in saved_handlers:
            root.addHandler(handler)
        root.setLevel(saved_level)
