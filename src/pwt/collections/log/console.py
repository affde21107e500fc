from __future__ import annotations

import logging
import sys

from rich.console import ConsoleRenderable
from rich.logging import RichHandler
from rich.text import Text

from pwt.collections.log.helpers import EnhancedFormatter, LoggerAdapter


def get_styled_standard_logger_adapter(
    name: str | None = None,
    show_time: bool = False,
    show_level: bool = False,
    keywords: list[str] | None = None,
) -> LoggerAdapter:
    """
    获取风格化的日志记录器并进行基本配置.

    参数:
        name (str | None): 日志记录器的名称.
        show_time (bool): 是否显示时间.
        show_level (bool): 是否显示日志级别.
        keywords (list[str] | None): 高亮的关键词列表.

    返回:
        LoggerAdapter: 配置好的日志适配器.
    """

    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    handler = StyledStandardHandler(show_time, show_level, keywords)
    handler.setFormatter(EnhancedFormatter(textfmt="{message}"))
    logger.addHandler(handler)
    return LoggerAdapter(logger)


class StyledStandardHandler(RichHandler):
    """
    基于 rich 的终端日志处理器.

    与 StandardHandler 一样按级别选择 stdout/stderr,
    不显示级别列时用颜色区分级别.
    """

    def __init__(
        self,
        show_time: bool = False,
        show_level: bool = False,
        keywords: list[str] | None = None,
    ) -> None:
        super().__init__(
            show_time=show_time,
            show_level=show_level,
            show_path=False,
            markup=False,
            rich_tracebacks=False,
            log_time_format="%Y-%m-%d %H:%M:%S",
            keywords=keywords,
        )
        self.show_level = show_level

    def emit(self, record: logging.LogRecord) -> None:
        self.console.file = sys.stdout if record.levelno < logging.WARNING else sys.stderr
        super().emit(record)

    def render_message(
        self, record: logging.LogRecord, message: str
    ) -> ConsoleRenderable:
        text = super().render_message(record, message)

        if not self.show_level and isinstance(text, Text):
            if record.levelno == logging.DEBUG:
                text.stylize("dim")
            elif record.levelno == logging.WARNING:
                text.stylize("yellow")
            elif record.levelno == logging.ERROR:
                text.stylize("red")
            elif record.levelno == logging.CRITICAL:
                text.stylize("bold white on red")

        return text
