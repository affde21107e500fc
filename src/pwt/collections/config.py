"""
全局设置.

- fail_fast: 新建链表的默认值. 开启后, 游标在链表被其他句柄修改结构后
  的下一次操作会抛出 ConcurrentModificationError.
- log: 可选的日志配置, 由 `configure()` 应用到 `pwt.collections` 日志记录器.

示例:
    >>> settings = configure(
    ...     fail_fast=False, log={"level": "debug", "handlers": [{"output": "console"}]}
    ... )
    >>> settings.log.level
    'DEBUG'
"""

from __future__ import annotations

from typing import Any

from pydantic import ConfigDict, ValidationError

from pwt.collections.errors import ConfigurationError
from pwt.collections.log.config import Log, get_logger
from pwt.collections.log.helpers import get_logger_adapter
from pwt.collections.pydantic_utils import BaseModelEx, format_validation_error

logger = get_logger_adapter(__name__)


class Settings(BaseModelEx):
    model_config = ConfigDict(extra="forbid", frozen=True)

    fail_fast: bool = True
    log: Log | None = None


_settings = Settings()


def get_settings() -> Settings:
    """返回当前生效的设置."""
    return _settings


def configure(**values: Any) -> Settings:
    """
    校验并安装新的设置, 未给出的字段使用默认值.

    Raises:
        ConfigurationError: 校验失败, `errors` 中为结构化错误列表.
    """
    global _settings

    try:
        settings = Settings.model_validate(values)
    except ValidationError as ex:
        raise ConfigurationError(
            "Invalid collections settings", errors=format_validation_error(ex), cause=ex
        )

    if settings.log is not None:
        get_logger(settings.log)

    _settings = settings
    logger.debugf("settings applied: fail_fast={fail_fast}", fail_fast=settings.fail_fast)
    return settings


def reset_settings() -> Settings:
    """恢复默认设置, 不会改动已配置的日志记录器."""
    global _settings

    _settings = Settings()
    return _settings
