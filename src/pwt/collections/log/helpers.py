from __future__ import annotations

import logging
import sys
from typing import Any, Literal


def get_logger_adapter(name: str | None = None, **extra: Any) -> LoggerAdapter:
    return LoggerAdapter(logging.getLogger(name), **extra)


def get_standard_logger_adapter(name: str | None = None) -> LoggerAdapter:
    """
    获取日志记录器并进行基本配置.

    参数:
        name (str | None): 日志记录器的名称.

    返回:
        LoggerAdapter: 配置好的日志适配器.
    """

    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    handler = StandardHandler()
    handler.setFormatter(EnhancedFormatter())
    logger.addHandler(handler)
    return LoggerAdapter(logger)


class StandardHandler(logging.Handler):
    """
    标准日志处理器, 低于 WARNING 的日志输出到标准输出流, 其余输出到标准错误流.
    """

    def __init__(self) -> None:
        super().__init__()
        self.stdout = sys.stdout
        self.stderr = sys.stderr

    def flush(self) -> None:
        with self.lock:  # type: ignore
            self.stdout.flush()
            self.stderr.flush()

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
            stream = self.stdout if record.levelno < logging.WARNING else self.stderr
            stream.write(msg + "\n")
            stream.flush()
        except RecursionError:
            raise
        except Exception:
            self.handleError(record)

    def __repr__(self) -> str:
        level = logging.getLevelName(self.level)
        cls = type(self).__name__
        return f"<{cls} <stdout> <stderr> ({level})>"


class EnhancedFormatter(logging.Formatter):
    """
    扩展的日志格式化器

    按记录上的 `_style` 字段渲染消息, 使 `{}` 风格的日志调用可以直接引用
    extra 中的字段, 例如 `logger.debugf("moved {count} nodes", count=3)`.
    """

    def __init__(
        self,
        textfmt: str | None = "{asctime} {levelname}: {message}",
        datefmt: str | None = "%Y-%m-%d %H:%M:%S",
        style: Literal["%", "{", "$"] = "{",
        validate: bool = True,
    ) -> None:
        super().__init__(textfmt, datefmt, style, validate)

    def format(self, record: logging.LogRecord) -> str:
        record.message = self.getMessage(record)
        record.asctime = self.formatTime(record, self.datefmt)
        text = self.formatMessage(record)
        if record.exc_info:
            if not record.exc_text:
                record.exc_text = self.formatException(record.exc_info)
        if record.exc_text:
            text = f"{text}\n{record.exc_text}"
        return text

    def getMessage(self, record: logging.LogRecord) -> str:
        msg = str(record.msg)
        style = getattr(record, "_style", "%")

        try:
            if style == "{":
                return msg.format(*(record.args or ()), **vars(record))
            return record.getMessage()
        except Exception:
            return msg


class LoggerAdapter:
    """
    日志适配器, 封装标准库 `logging.Logger`

    提供两种日志格式化风格:
    - `log`: `%` 占位符格式(默认 logging 行为)
    - `logf`: `{}` 格式化(`str.format` 风格)

    每种风格均提供完整的日志级别方法(`debug`/`info`/`warning`/`error`/`critical`)

    通过构造函数传入的 `extra` 字段会自动合并到每条日志记录的 `extra` 中.
    对于 `{}` 风格, 调用时的关键字参数会作为 `extra` 字段注入记录,
    并在 `extra` 中注入 `_style` 字段.
    """

    def __init__(self, logger: logging.Logger, **extra: Any) -> None:
        self.logger = logger
        self.extra = extra

    def process(
        self,
        level: int,
        msg: str,
        style: Literal["%", "{"],
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> tuple[int, str, tuple[Any, ...], dict[str, Any]]:
        """
        预处理日志调用参数, 统一合并并调整 `extra` 字段.

        - 对于 `%` 风格:
            直接在现有 `extra` 基础上合并适配器实例的 `extra`.
        - 对于 `{` 风格:
            将原本的 `kwargs` 作为新的 `extra` 值嵌入, 并把原 `extra` 的键提升到顶层.
        """
        if style != "%":
            extra = kwargs.pop("extra", {})
            kwargs = {**extra, "extra": kwargs}
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {}), "_style": style}
        return level, msg, args, kwargs

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.log(logging.DEBUG, msg, *args, **kwargs)

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.log(logging.INFO, msg, *args, **kwargs)

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.log(logging.WARNING, msg, *args, **kwargs)

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.log(logging.ERROR, msg, *args, **kwargs)

    def critical(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.log(logging.CRITICAL, msg, *args, **kwargs)

    def log(self, level: int, msg: str, *args: Any, **kwargs: Any) -> None:
        level, msg, args, kwargs = self.process(level, msg, "%", args, kwargs)
        self.logger.log(level, msg, *args, **kwargs)

    def debugf(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.logf(logging.DEBUG, msg, *args, **kwargs)

    def infof(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.logf(logging.INFO, msg, *args, **kwargs)

    def warningf(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.logf(logging.WARNING, msg, *args, **kwargs)

    def errorf(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.logf(logging.ERROR, msg, *args, **kwargs)

    def criticalf(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.logf(logging.CRITICAL, msg, *args, **kwargs)

    def logf(self, level: int, msg: str, *args: Any, **kwargs: Any) -> None:
        level, msg, args, kwargs = self.process(level, msg, "{", args, kwargs)
        self.logger.log(level, msg, *args, **kwargs)
