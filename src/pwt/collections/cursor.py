"""
CircularList 的双向游标.

游标记录三项状态:
- position: 下一次 `next()` 将返回的元素下标, 取值范围 [0, size].
- 当前节点: `next()` 将返回的节点; position == size 时指向头节点(环的接缝处).
- 最近返回的节点: 最近一次 `next()`/`previous()` 返回的节点, 决定 `set()`/`remove()` 是否可用.

可修改性由显式状态机控制:

    IDLE --next()--> STEPPED_FORWARD --set()/remove()--> MUTATED
    IDLE --previous()--> STEPPED_BACKWARD --set()/remove()--> MUTATED
    任意状态 --insert()--> MUTATED
    任意状态 --seek_*()--> IDLE

`set()`/`remove()` 只允许在 STEPPED_* 状态下调用.

示例:
    >>> lst = CircularList([1, 2, 3])
    >>> cursor = lst.cursor()
    >>> cursor.next()
    1
    >>> cursor.remove()
    >>> list(lst)
    [2, 3]
"""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING, Generic, Iterator, TypeVar

from pwt.collections.errors import (
    ConcurrentModificationError,
    InvalidCursorStateError,
    NoSuchElementError,
)
from pwt.collections.log.helpers import get_logger_adapter
from pwt.collections.node import Node

if TYPE_CHECKING:
    from pwt.collections.circular_list import CircularList

T = TypeVar("T")

logger = get_logger_adapter(__name__)


class CursorState(enum.Enum):
    IDLE = "idle"
    STEPPED_FORWARD = "stepped_forward"
    STEPPED_BACKWARD = "stepped_backward"
    MUTATED = "mutated"

    def __str__(self) -> str:
        return self.value


_STEPPED = (CursorState.STEPPED_FORWARD, CursorState.STEPPED_BACKWARD)


class Cursor(Generic[T]):
    """
    绑定到单个 CircularList 的双向游标.

    游标不拥有节点, 不需要显式释放. 同时实现了迭代器协议,
    `for value in cursor` 从当前位置向后遍历.

    链表开启 fail_fast 时, 游标在每次操作前比较链表的结构修改计数,
    若链表被其他句柄修改过结构, 抛出 ConcurrentModificationError.
    通过游标自身完成的修改不会触发该异常, `seek_*()` 会重新对齐游标.
    """

    def __init__(self, target: CircularList[T], index: int = 0) -> None:
        """
        Args:
            target (CircularList[T]): 游标绑定的链表.
            index (int): 初始位置, 取值范围 [0, size].

        Raises:
            IndexRangeError: 索引超出范围.
        """
        target._check_bounds(index, len(target))
        self._list = target
        self._position = index
        self._node: Node[T] | None = target._node_at(index)
        self._last: Node[T] | None = None
        self._state = CursorState.IDLE
        self._expected = target._modifications

    @property
    def state(self) -> CursorState:
        return self._state

    @property
    def position(self) -> int:
        return self._position

    def __iter__(self) -> Iterator[T]:
        return self

    def __next__(self) -> T:
        try:
            return self.next()
        except NoSuchElementError:
            raise StopIteration from None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(position={self._position}, state={self._state})"

    # ===========================================================================

    def has_next(self) -> bool:
        return self._position < len(self._list)

    def has_previous(self) -> bool:
        return self._position > 0

    def next_index(self) -> int:
        return self._position

    def previous_index(self) -> int:
        return self._position - 1

    def next(self) -> T:
        """
        返回当前元素并向后移动一位.

        Raises:
            NoSuchElementError: 游标已在末尾.
        """
        self._check_modification()
        node = self._node
        if node is None or self._position >= len(self._list):
            raise NoSuchElementError(f"No element after position {self._position}")
        self._last = node
        self._node = node.next
        self._position += 1
        self._state = CursorState.STEPPED_FORWARD
        return node.value

    def previous(self) -> T:
        """
        先向前移动一位, 再返回该位置的元素.

        Raises:
            NoSuchElementError: 游标已在开头.
        """
        self._check_modification()
        current = self._node
        if current is None or self._position <= 0:
            raise NoSuchElementError("No element before position 0")
        node = current.previous
        self._node = node
        self._last = node
        self._position -= 1
        self._state = CursorState.STEPPED_BACKWARD
        return node.value

    # ===========================================================================

    def insert(self, value: T) -> None:
        """
        在游标之前插入元素, 插入后 `next()` 的结果不变.

        插入不算作"最近返回", 之后调用 `set()`/`remove()` 会失败.
        """
        self._check_modification()
        target = self._list
        node = self._node
        if node is None or self._position >= len(target):
            target._append_node(value)
            self._node = target._head
        else:
            target._insert_node_before(node, value)
        self._position += 1
        self._finish_mutation()

    def set(self, value: T) -> T:
        """
        替换最近返回的元素, 不移动游标.

        Returns:
            T: 被替换的旧值.

        Raises:
            InvalidCursorStateError: 之前没有 `next()`/`previous()`, 或已修改过.
        """
        self._check_modification()
        last = self._require_last("set")
        old_value = last.value
        last.value = value
        self._finish_mutation()
        return old_value

    def remove(self) -> None:
        """
        删除最近返回的元素.

        Raises:
            InvalidCursorStateError: 之前没有 `next()`/`previous()`, 或已修改过;
                最近返回的节点已被链表直接删除(仅在关闭 fail_fast 时可能).
        """
        self._check_modification()
        last = self._require_last("remove")
        target = self._list
        # detached by a direct list mutation while fail_fast is off
        if last.is_isolated() and last is not target._head:
            raise InvalidCursorStateError("remove", self._state)
        if self._node is last:
            self._node = last.next
        if self._state is CursorState.STEPPED_FORWARD:
            self._position -= 1
        target._remove_node(last)
        if self._position >= len(target):
            self._node = target._head
        self._finish_mutation()

    # ===========================================================================

    def seek_to_start(self) -> None:
        """移动到开头, O(1)."""
        self._seek(0, self._list._head)

    def seek_to(self, index: int) -> None:
        """
        移动到指定位置, O(min(index, size - index)).

        Raises:
            IndexRangeError: 索引超出 [0, size].
        """
        target = self._list
        target._check_bounds(index, len(target))
        self._seek(index, target._node_at(index))

    def seek_to_end(self) -> None:
        """移动到末尾, 当前节点指向头节点, O(1)."""
        self._seek(len(self._list), self._list._head)

    # ===========================================================================

    def _seek(self, index: int, node: Node[T] | None) -> None:
        self._position = index
        self._node = node
        self._last = None
        self._state = CursorState.IDLE
        self._expected = self._list._modifications

    def _require_last(self, operation: str) -> Node[T]:
        if self._state not in _STEPPED or self._last is None:
            raise InvalidCursorStateError(operation, self._state)
        return self._last

    def _finish_mutation(self) -> None:
        self._last = None
        self._state = CursorState.MUTATED
        self._expected = self._list._modifications

    def _check_modification(self) -> None:
        target = self._list
        if target.fail_fast and target._modifications != self._expected:
            logger.warning(
                "cursor at position %d detected %d outside modification(s)",
                self._position,
                target._modifications - self._expected,
            )
            raise ConcurrentModificationError(
                "The list was structurally modified outside this cursor"
            )
