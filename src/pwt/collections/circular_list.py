"""
CircularList 模块

提供基于循环双向链表(无哨兵节点)的有序可变容器.
兼容 Python 可变序列协议, 支持增/删/查/切片/迭代/双向游标等操作.

主要组件:
- CircularList: 核心链表类
- Cursor: 双向游标, 见 `pwt.collections.cursor`

复杂度:
- 头尾插入/删除指定节点/摘除一段区间: O(1) 拼接
- 按下标访问: O(min(index, size - index)), 前半段从头节点向后找, 后半段从头节点向前找

示例:
    >>> lst = CircularList([1, 2, 3, 4, 5])
    >>> lst.remove_range(1, 4)
    CircularList([2, 3, 4])
    >>> lst
    CircularList([1, 5])
    >>> lst == [1, 5]
    True
"""

from __future__ import annotations

from collections.abc import MutableSequence
from typing import Any, Generic, Iterable, Iterator, TypeVar, overload

from pwt.collections.config import get_settings
from pwt.collections.cursor import Cursor
from pwt.collections.errors import IndexRangeError
from pwt.collections.log.helpers import get_logger_adapter
from pwt.collections.node import (
    Node,
    iter_cycle,
    iter_cycle_reversed,
    link_before,
    unlink,
    unlink_range,
)
from pwt.collections.sequences import (
    elements_equal,
    is_ordered_sequence,
    sequence_equals,
    sequence_hash,
)

T = TypeVar("T")

logger = get_logger_adapter(__name__)


class CircularList(MutableSequence[T], Generic[T]):
    """
    基于循环双向链表的有序容器.

    内部结构:
    - self._head: 头节点, 链表为空时为 None.
    - self._size: 元素个数.
    - self._modifications: 结构修改计数, 供游标检测外部修改.

    不变式:
    - `_size == 0` 当且仅当 `_head is None`.
    - 从头节点沿 next 走 `_size` 步回到头节点, 沿 previous 同理.

    链表不是线程安全的. 可与任何有序序列比较相等(字符串除外),
    因为可变所以不可哈希, 需要顺序相关的哈希值时使用 `hash_code()`.
    """

    def __init__(
        self, items: Iterable[T] | None = None, *, fail_fast: bool | None = None
    ) -> None:
        """
        初始化链表.

        Args:
            items (Iterable[T] | None): 可选的可迭代对象, 按顺序加入链表.
            fail_fast (bool | None): 游标是否检测外部修改, None 时使用全局设置.
        """
        self._head: Node[T] | None = None
        self._size = 0
        self._modifications = 0
        self.fail_fast = get_settings().fail_fast if fail_fast is None else fail_fast

        if items is not None:
            self.extend(items)

    # ===========================================================================

    def __len__(self) -> int:
        return self._size

    @overload
    def __getitem__(self, index: int) -> T: ...
    @overload
    def __getitem__(self, index: slice) -> CircularList[T]: ...
    def __getitem__(self, index: int | slice) -> T | CircularList[T]:
        """
        返回指定索引的元素, 或切片对应的新链表(复制元素引用).

        Raises:
            IndexRangeError: 索引超出范围.
        """
        if isinstance(index, slice):
            start, stop, step = index.indices(self._size)
            if step == 1:
                return self.sub_list(start, max(start, stop))
            return self._new_list(list(self)[index])
        return self.get_at(self._normalize(index, self._size - 1))

    def __setitem__(self, index: int, value: T) -> None:  # type: ignore[override]
        if isinstance(index, slice):
            raise TypeError(f"{self.__class__.__name__} does not support slice assignment")
        self.set_at(self._normalize(index, self._size - 1), value)

    def __delitem__(self, index: int | slice) -> None:
        """
        删除指定索引或切片的元素, 步长为 1 的切片使用 `remove_range`.
        """
        if isinstance(index, slice):
            start, stop, step = index.indices(self._size)
            if step == 1:
                if stop > start:
                    self.remove_range(start, stop)
                return
            for i in sorted(range(start, stop, step), reverse=True):
                self.remove_at(i)
            return
        self.remove_at(self._normalize(index, self._size - 1))

    def __iter__(self) -> Iterator[T]:
        return self.cursor()

    def __reversed__(self) -> Iterator[T]:
        cursor = self.cursor(self._size)
        while cursor.has_previous():
            yield cursor.previous()

    def __contains__(self, value: Any) -> bool:
        return self.index_of(value) >= 0

    def __eq__(self, other: Any) -> bool:
        """
        顺序相关的相等判断.

        与任何有序序列比较: 长度相同且对应位置元素相等即相等.
        """
        if not is_ordered_sequence(other):
            return NotImplemented
        return sequence_equals(self, other)

    def __repr__(self) -> str:
        items = ", ".join(repr(value) for value in self)
        return f"{self.__class__.__name__}([{items}])"

    def __copy__(self) -> CircularList[T]:
        return self.clone()

    # ===========================================================================

    def get_at(self, index: int) -> T:
        """
        获取指定索引位置的元素.

        Raises:
            IndexRangeError: 索引超出 [0, size - 1].
        """
        return self.get_node_at(index).value

    def set_at(self, index: int, value: T) -> T:
        """
        替换指定索引位置的元素.

        Returns:
            T: 被替换的旧值.

        Raises:
            IndexRangeError: 索引超出 [0, size - 1].
        """
        node = self.get_node_at(index)
        old_value = node.value
        node.value = value
        return old_value

    def get_node_at(self, index: int) -> Node[T]:
        """
        获取指定索引位置的节点.

        Raises:
            IndexRangeError: 索引超出 [0, size - 1].
        """
        head = self._head
        if head is None or index < 0 or index >= self._size:
            raise IndexRangeError(index, self._size - 1)
        return self._walk(head, index)

    def index_of(self, value: Any) -> int:
        """
        从前向后查找元素.

        Returns:
            int: 首次出现的位置, 未找到返回 -1.
        """
        for index, node in enumerate(iter_cycle(self._head, self._size)):
            if elements_equal(node.value, value):
                return index
        return -1

    def last_index_of(self, value: Any) -> int:
        """
        从后向前查找元素.

        Returns:
            int: 最后一次出现的位置, 未找到返回 -1.
        """
        index = self._size - 1
        for node in iter_cycle_reversed(self._head, self._size):
            if elements_equal(node.value, value):
                return index
            index -= 1
        return -1

    def index(self, value: Any, start: int = 0, stop: int | None = None) -> int:
        """
        返回 `[start, stop)` 中第一次出现的位置.

        Raises:
            ValueError: 元素不存在.
        """
        start, stop, _ = slice(start, stop).indices(self._size)
        if start < stop:
            cursor = self.cursor(start)
            for index in range(start, stop):
                if elements_equal(cursor.next(), value):
                    return index
        raise ValueError(f"{value!r} is not in list")

    # ===========================================================================

    def add(self, value: T) -> bool:
        """
        在尾部追加元素, O(1).

        Returns:
            bool: 总是返回 True.
        """
        self._append_node(value)
        return True

    def append(self, value: T) -> None:
        self._append_node(value)

    def insert_at(self, index: int, value: T) -> None:
        """
        在指定索引前插入元素, `index == size` 时追加到尾部.

        Raises:
            IndexRangeError: 索引超出 [0, size].
        """
        self._check_bounds(index, self._size)
        head = self._head
        if head is None or index == self._size:
            self._append_node(value)
        else:
            self._insert_node_before(self._walk(head, index), value)

    def insert(self, index: int, value: T) -> None:
        """
        在指定索引前插入元素, 支持负数索引.

        Raises:
            IndexRangeError: 索引超出范围.
        """
        self.insert_at(self._normalize(index, self._size), value)

    def insert_all(self, index: int, items: Iterable[T]) -> bool:
        """
        在指定索引前按顺序插入多个元素.

        Returns:
            bool: 有元素被插入时返回 True.

        Raises:
            IndexRangeError: 索引超出 [0, size].
        """
        self._check_bounds(index, self._size)
        if items is self:
            items = list(items)
        cursor = self.cursor(index)
        inserted = False
        for value in items:
            cursor.insert(value)
            inserted = True
        return inserted

    def extend(self, items: Iterable[T]) -> None:
        if items is self:
            items = list(items)
        for value in items:
            self._append_node(value)

    # ===========================================================================

    def remove_at(self, index: int) -> T:
        """
        移除并返回指定索引位置的元素.

        Raises:
            IndexRangeError: 索引超出 [0, size - 1].
        """
        return self._remove_node(self.get_node_at(index))

    def remove_value(self, value: Any) -> bool:
        """
        移除第一个与 `value` 相等的元素.

        Returns:
            bool: 找到并移除时返回 True.
        """
        for node in iter_cycle(self._head, self._size):
            if elements_equal(node.value, value):
                self._remove_node(node)
                return True
        return False

    def remove(self, value: Any) -> None:
        """
        移除第一个与 `value` 相等的元素.

        Raises:
            ValueError: 元素不存在.
        """
        if not self.remove_value(value):
            raise ValueError(f"{value!r} is not in list")

    def pop(self, index: int = -1) -> T:
        """
        移除并返回指定索引(默认最后一个)的元素.

        Raises:
            IndexRangeError: 链表为空或索引超出范围.
        """
        return self.remove_at(self._normalize(index, self._size - 1))

    def remove_range(self, start: int, stop: int) -> CircularList[T]:
        """
        摘除 `[start, stop)` 区间的元素, 并以新链表返回.

        节点整体转移到返回的链表中, 不复制元素, 拼接本身为 O(1).

        Args:
            start (int): 区间第一个元素的索引.
            stop (int): 区间之后第一个元素的索引.

        Returns:
            CircularList[T]: 持有被摘除节点的新链表.

        Raises:
            IndexRangeError: 不满足 `0 <= start <= stop <= size`.
        """
        self._check_bounds(start, self._size)
        self._check_bounds(stop, self._size, start)
        result = self._new_list()
        count = stop - start
        head = self._head

        if count == 0 or head is None:
            return result

        if count == self._size:
            result._head, result._size = head, self._size
            self._head, self._size = None, 0
        else:
            first = self._walk(head, start)
            after = self._walk(head, stop)
            result._head = unlink_range(first, after)
            result._size = count
            if start == 0:
                self._head = after
            self._size -= count

        self._modifications += 1
        result._modifications += 1
        logger.debug(
            "remove_range moved %d node(s)",
            count,
            extra={"start": start, "stop": stop},
        )
        return result

    def clear(self) -> None:
        """清空链表, O(1)."""
        if self._head is None:
            return
        count = self._size
        # 断开环
        tail = self._head.previous
        tail.next = tail
        self._head.previous = self._head
        self._head = None
        self._size = 0
        self._modifications += 1
        logger.debug("cleared %d node(s)", count)

    def reverse(self) -> None:
        """原地反转元素顺序, 只交换节点中的值, 不改变链接."""
        if self._head is None:
            return
        left, right = self._head, self._head.previous
        for _ in range(self._size // 2):
            left.value, right.value = right.value, left.value
            left, right = left.next, right.previous

    # ===========================================================================

    def sub_list(self, start: int, stop: int) -> CircularList[T]:
        """
        复制 `[start, stop)` 区间的元素到新链表, 原链表不变.

        Raises:
            IndexRangeError: 不满足 `0 <= start <= stop <= size`.
        """
        self._check_bounds(start, self._size)
        self._check_bounds(stop, self._size, start)
        result = self._new_list()
        cursor = self.cursor(start)
        for _ in range(stop - start):
            result._append_node(cursor.next())
        return result

    def clone(self) -> CircularList[T]:
        """
        复制链表结构, 新旧链表不共享节点, 元素按引用共享.
        """
        result = self._new_list(self)
        logger.debug("cloned %d node(s)", self._size)
        return result

    copy = clone

    def hash_code(self) -> int:
        """与 `__eq__` 一致的顺序相关哈希值, 见 `sequence_hash`."""
        return sequence_hash(self)

    def cursor(self, index: int = 0) -> Cursor[T]:
        """
        获取位于指定位置的双向游标.

        Raises:
            IndexRangeError: 索引超出 [0, size].
        """
        return Cursor(self, index)

    def is_empty(self) -> bool:
        return self._size == 0

    def iter_nodes(self) -> Iterator[Node[T]]:
        """从头节点开始正向迭代所有节点."""
        return iter_cycle(self._head, self._size)

    def iter_nodes_reversed(self) -> Iterator[Node[T]]:
        """从尾节点开始反向迭代所有节点."""
        return iter_cycle_reversed(self._head, self._size)

    # ===========================================================================

    def _new_list(self, items: Iterable[T] | None = None) -> CircularList[T]:
        return self.__class__(items, fail_fast=self.fail_fast)

    def _check_bounds(self, index: int, maximum: int, minimum: int = 0) -> None:
        if index < minimum or index > maximum:
            raise IndexRangeError(index, maximum, minimum)

    def _normalize(self, index: int, maximum: int) -> int:
        normalized = index + self._size if index < 0 else index
        if normalized < 0 or normalized > maximum:
            raise IndexRangeError(index, maximum)
        return normalized

    def _node_at(self, index: int) -> Node[T] | None:
        """
        解析 `[0, size]` 内的索引, `index == size` 时返回头节点(空链表为 None).
        """
        head = self._head
        return None if head is None else self._walk(head, index)

    def _walk(self, head: Node[T], index: int) -> Node[T]:
        node = head
        if index < self._size / 2:
            for _ in range(index):
                node = node.next
        else:
            for _ in range(self._size - index):
                node = node.previous
        return node

    def _append_node(self, value: T) -> Node[T]:
        node = Node(value)
        if self._head is None:
            self._head = node
        else:
            link_before(node, self._head)
        self._size += 1
        self._modifications += 1
        return node

    def _insert_node_before(self, anchor: Node[T], value: T) -> Node[T]:
        node = Node(value)
        link_before(node, anchor)
        if anchor is self._head:
            self._head = node
        self._size += 1
        self._modifications += 1
        return node

    def _remove_node(self, node: Node[T]) -> T:
        if node is self._head:
            self._head = node.next
        unlink(node)
        self._size -= 1
        if self._size == 0:
            self._head = None
        self._modifications += 1
        return node.value
