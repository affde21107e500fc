"""
日志辅助工具测试
"""

import logging
import logging.handlers

import pytest
from pydantic import ValidationError

from pwt.collections.circular_list import CircularList
from pwt.collections.log.config import Handler, Log, get_handler, get_logger
from pwt.collections.log.console import (
    StyledStandardHandler,
    get_styled_standard_logger_adapter,
)
from pwt.collections.log.helpers import (
    EnhancedFormatter,
    StandardHandler,
    get_logger_adapter,
    get_standard_logger_adapter,
)


def make_record(msg, level=logging.INFO, **extra):
    record = logging.LogRecord("test", level, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestEnhancedFormatter:
    """测试格式化器"""

    def test_brace_style_message(self):
        formatter = EnhancedFormatter("{levelname}: {message}")
        record = make_record("moved {count} node(s)", _style="{", count=3)
        assert formatter.format(record) == "INFO: moved 3 node(s)"

    def test_percent_style_message(self):
        formatter = EnhancedFormatter("{message}")
        record = logging.LogRecord("test", logging.INFO, __file__, 1, "%d", (5,), None)
        assert formatter.format(record) == "5"

    def test_bad_format_falls_back_to_raw(self):
        formatter = EnhancedFormatter("{message}")
        record = make_record("missing {field}", _style="{")
        assert formatter.format(record) == "missing {field}"


class TestLoggerAdapter:
    """测试日志适配器"""

    def test_brace_style_extra(self, caplog):
        adapter = get_logger_adapter("pwt.collections.test_log", component="list")
        with caplog.at_level(logging.DEBUG, logger="pwt.collections.test_log"):
            adapter.debugf("moved {count}", count=2)
        record = caplog.records[-1]
        assert record.count == 2
        assert record.component == "list"
        assert record._style == "{"

    def test_percent_style(self, caplog):
        adapter = get_logger_adapter("pwt.collections.test_log")
        with caplog.at_level(logging.INFO, logger="pwt.collections.test_log"):
            adapter.info("value %s", "x")
        assert caplog.records[-1].getMessage() == "value x"

    def test_list_operations_log(self, caplog):
        lst = CircularList([1, 2, 3, 4])
        with caplog.at_level(logging.DEBUG, logger="pwt.collections"):
            lst.remove_range(1, 3)
            lst.clear()
        messages = [record.getMessage() for record in caplog.records]
        assert "remove_range moved 2 node(s)" in messages
        assert "cleared 2 node(s)" in messages
        range_record = caplog.records[0]
        assert (range_record.start, range_record.stop) == (1, 3)

    def test_concurrent_modification_warning(self, caplog):
        lst = CircularList([1, 2])
        cursor = lst.cursor()
        lst.add(3)
        with caplog.at_level(logging.WARNING, logger="pwt.collections"):
            with pytest.raises(RuntimeError):
                cursor.next()
        assert caplog.records[-1].levelno == logging.WARNING


class TestStandardHandler:
    """测试标准输出处理器"""

    def test_routes_by_level(self, capsys):
        handler = StandardHandler()
        handler.setFormatter(EnhancedFormatter("{message}"))
        handler.emit(make_record("info line"))
        handler.emit(make_record("warn line", level=logging.WARNING))
        captured = capsys.readouterr()
        assert captured.out == "info line\n"
        assert captured.err == "warn line\n"


class TestLogConfig:
    """测试日志配置模型"""

    def test_handler_normalization(self):
        handler = Handler(output="STDOUT", level="debug")
        assert handler.output == "stdout"
        assert handler.level == "DEBUG"

    def test_handler_empty_values_use_defaults(self):
        handler = Handler(output="", text_format="")
        assert handler.output == "std"
        assert handler.text_format == "{asctime} {levelname} {name}: {message}"

    def test_invalid_text_format(self):
        with pytest.raises(ValidationError):
            Handler(text_format="no fields")

    def test_invalid_level(self):
        with pytest.raises(ValidationError):
            Log(level="verbose")

    def test_get_handler_outputs(self, tmp_path):
        assert isinstance(get_handler(Handler(output="std")), StandardHandler)
        assert isinstance(get_handler(Handler(output="console")), StyledStandardHandler)
        stream = get_handler(Handler(output="stderr"))
        assert type(stream) is logging.StreamHandler

        file_handler = get_handler(Handler(output=str(tmp_path / "list.log")))
        try:
            assert isinstance(file_handler, logging.handlers.WatchedFileHandler)
        finally:
            file_handler.close()

    def test_get_logger_replaces_handlers(self):
        name = "pwt.collections.test_get_logger"
        logger = logging.getLogger(name)
        logger.addHandler(logging.NullHandler())
        try:
            result = get_logger(Log(name=name, handlers=[Handler(output="stdout")]))
            assert result is logger
            assert len(logger.handlers) == 1
            assert type(logger.handlers[0]) is logging.StreamHandler
        finally:
            for handler in logger.handlers[:]:
                logger.removeHandler(handler)


class TestLoggerFactories:
    """测试预配置的日志适配器"""

    def test_standard_logger_adapter(self, capsys):
        name = "pwt.collections.test_standard"
        adapter = get_standard_logger_adapter(name)
        try:
            adapter.infof("size={size}", size=4)
            adapter.error("failed")
            captured = capsys.readouterr()
            assert captured.out.endswith("INFO: size=4\n")
            assert captured.err.endswith("ERROR: failed\n")
        finally:
            for handler in adapter.logger.handlers[:]:
                adapter.logger.removeHandler(handler)

    def test_styled_logger_adapter(self):
        name = "pwt.collections.test_styled"
        adapter = get_styled_standard_logger_adapter(name, keywords=["node"])
        try:
            handlers = adapter.logger.handlers
            assert len(handlers) == 1
            assert isinstance(handlers[0], StyledStandardHandler)
            assert adapter.logger.level == logging.DEBUG
        finally:
            for handler in adapter.logger.handlers[:]:
                adapter.logger.removeHandler(handler)
