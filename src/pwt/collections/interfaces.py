"""
定义有序容器对外暴露的协议接口.

这些协议用于实现组件解耦, 支持类型检查与行为契约:
    - OrderedSequence: 有序序列能力, 提供长度/下标读写/双向遍历.
    - SupportsCursor: 获取双向游标的能力, 供基于委托构建的集合类型使用.
    - SupportsRangeRemoval: 零拷贝摘取一段元素的能力.
    - BidirectionalCursor: 双向游标协议.
"""

from __future__ import annotations

from typing import Any, Iterator, Protocol, runtime_checkable


@runtime_checkable
class OrderedSequence(Protocol):
    """有序序列, 相等性与哈希由元素顺序决定."""

    def __len__(self) -> int: ...

    def __getitem__(self, index: Any) -> Any: ...

    def __setitem__(self, index: Any, value: Any) -> None: ...

    def __iter__(self) -> Iterator[Any]: ...

    def __reversed__(self) -> Iterator[Any]: ...

    def hash_code(self) -> int: ...


@runtime_checkable
class BidirectionalCursor(Protocol):
    """双向游标, 支持基于当前位置的读取/插入/删除/替换."""

    def has_next(self) -> bool: ...

    def has_previous(self) -> bool: ...

    def next(self) -> Any: ...

    def previous(self) -> Any: ...

    def next_index(self) -> int: ...

    def previous_index(self) -> int: ...

    def insert(self, value: Any) -> None: ...

    def set(self, value: Any) -> Any: ...

    def remove(self) -> None: ...

    def seek_to_start(self) -> None: ...

    def seek_to(self, index: int) -> None: ...

    def seek_to_end(self) -> None: ...


@runtime_checkable
class SupportsCursor(Protocol):
    """可在指定位置(默认 0)获取双向游标."""

    def cursor(self, index: int = 0) -> BidirectionalCursor: ...


@runtime_checkable
class SupportsRangeRemoval(Protocol):
    """可摘除 `[start, stop)` 区间并以同类型容器返回."""

    def remove_range(self, start: int, stop: int) -> Any: ...
