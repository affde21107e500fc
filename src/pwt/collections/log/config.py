from __future__ import annotations

import logging
import logging.handlers
import sys
from datetime import datetime
from types import EllipsisType
from typing import Annotated, Literal

from pwt.collections.log.console import StyledStandardHandler
from pwt.collections.log.helpers import EnhancedFormatter, StandardHandler
from pwt.collections.pydantic_utils import BaseModelEx, check, convert

OUTPUT_DEFAULT = "std"
OUTPUT_OPTIONS = ("std", "stdout", "stderr", "console")
OUTPUT_TYPE = Literal["std", "stdout", "stderr", "console"]

TEXT_FORMAT_DEFAULT = "{asctime} {levelname} {name}: {message}"
DATE_FORMAT_DEFAULT = "%Y-%m-%d %H:%M:%S"

LEVEL_DEFAULT = "INFO"
LEVEL_TYPE = Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]


class Handler(BaseModelEx):
    """
    单个日志处理器的配置.

    output 为 std/stdout/stderr/console 之一, 其余值视为日志文件路径.
    console 使用 rich 渲染.
    """

    output: Annotated[
        str | OUTPUT_TYPE,
        convert(lambda v: vl if (vl := v.lower()) in OUTPUT_OPTIONS else v),
    ] = OUTPUT_DEFAULT
    text_format: Annotated[
        str,
        check(lambda value: logging.StrFormatStyle(value).validate()),
    ] = TEXT_FORMAT_DEFAULT
    date_format: Annotated[
        str | None,
        check(datetime.now().strftime),
    ] = DATE_FORMAT_DEFAULT
    level: Annotated[
        LEVEL_TYPE,
        convert(str.upper),
    ] = LEVEL_DEFAULT


class Log(BaseModelEx):
    """日志记录器的配置, name 为空时使用 `pwt.collections`."""

    name: str | None = None
    level: Annotated[
        LEVEL_TYPE,
        convert(str.upper),
    ] = LEVEL_DEFAULT
    propagate: bool = True
    handlers: list[Handler] | None = None


def get_handler(log: Handler) -> logging.Handler:
    """
    根据给定的处理器配置创建日志处理器.

    参数:
        log (Handler): 处理器配置的实例.

    返回:
        logging.Handler: 根据配置创建的日志处理器.

    异常:
        FileNotFoundError, PermissionError: 读写文件错误
    """
    if log.output == "std":
        handler: logging.Handler = StandardHandler()
    elif log.output == "stdout":
        handler = logging.StreamHandler(sys.stdout)
    elif log.output == "stderr":
        handler = logging.StreamHandler(sys.stderr)
    elif log.output == "console":
        handler = StyledStandardHandler()
    else:
        handler = logging.handlers.WatchedFileHandler(log.output)

    if log.output == "console":
        handler.setFormatter(EnhancedFormatter("{message}"))
    else:
        handler.setFormatter(EnhancedFormatter(log.text_format, log.date_format))

    handler.setLevel(log.level)
    return handler


def get_logger(
    log: Log, *, logger: logging.Logger | str | None | EllipsisType = ...
) -> logging.Logger:
    """
    按配置重置并返回日志记录器, 原有的处理器会被移除.
    """
    if logger is ...:
        logger = logging.getLogger(log.name or "pwt.collections")
    elif not isinstance(logger, logging.Logger):
        logger = logging.getLogger(logger)

    logger.setLevel(log.level)
    logger.propagate = log.propagate

    for h in logger.handlers[:]:
        logger.removeHandler(h)
        h.close()
    if log.handlers is not None:
        for handler in log.handlers:
            logger.addHandler(get_handler(handler))

    return logger
