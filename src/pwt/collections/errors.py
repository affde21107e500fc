"""
定义链表容器使用的异常体系, 支持错误链追踪.

异常层级结构如下:
    - CollectionError: 所有异常的统一基类, 支持嵌套链式追踪.
        - IndexRangeError: 索引超出操作允许的闭区间.
        - NoSuchElementError: 游标越过首尾继续遍历.
        - InvalidCursorStateError: 游标在未遍历时执行 set/remove.
        - ConcurrentModificationError: 游标持有期间链表被其他句柄修改结构.
        - ConfigurationError: 配置校验失败.

所有异常都属于调用方的编程错误, 在任何结构修改之前立即抛出,
失败的调用不会留下部分修改.

为兼容标准库习惯, 各异常同时继承对应的内置异常,
例如 `IndexRangeError` 也是 `IndexError`, 可被 `except IndexError` 捕获.
"""

from __future__ import annotations

from typing import Any


class CollectionError(Exception):
    """
    所有容器异常的基类,具备错误链追踪能力.

    参数:
    - `*args`: 异常消息内容;
    - `cause`: 可选的原始异常,用于记录异常链(自动赋值给 `__cause__`).
    """

    def __init__(self, *args: Any, cause: Exception | None = None) -> None:
        super().__init__(*args)
        self.cause: Exception | None = cause
        self.__cause__ = cause


class IndexRangeError(CollectionError, IndexError):
    """
    索引越界.

    消息中包含越界的索引和允许的闭区间, 例如空链表调用 `get_at(0)`:
    `The index (0) is outside the allowed range: [0..-1].`
    """

    def __init__(self, index: int, maximum: int, minimum: int = 0) -> None:
        super().__init__(
            f"The index ({index}) is outside the allowed range: [{minimum}..{maximum}]."
        )
        self.index = index
        self.minimum = minimum
        self.maximum = maximum


class NoSuchElementError(CollectionError, LookupError):
    """游标在末尾调用 `next()` 或在开头调用 `previous()`."""


class InvalidCursorStateError(CollectionError, RuntimeError):
    """
    游标状态不允许当前操作.

    `set()`/`remove()` 之前必须有一次成功的 `next()`/`previous()`,
    且两次修改之间必须重新遍历.
    """

    def __init__(self, operation: str, state: Any) -> None:
        super().__init__(
            f"Cannot {operation}() in cursor state {state}: "
            "call next() or previous() first"
        )
        self.operation = operation
        self.state = state


class ConcurrentModificationError(CollectionError, RuntimeError):
    """游标创建后, 链表结构被游标之外的句柄修改."""


class ConfigurationError(CollectionError, ValueError):
    """
    配置校验失败.

    `errors` 为结构化错误列表, 每项包含 field/message/type/input.
    """

    def __init__(
        self,
        *args: Any,
        errors: list[dict[str, Any]] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(*args, cause=cause)
        self.errors = errors or []
