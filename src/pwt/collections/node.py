"""
循环双向链表的节点与拼接原语.

节点不使用哨兵, 孤立节点的 previous 和 next 均指向自身,
因此单元素链表就是一个自环节点.

拼接原语只修改节点之间的链接, 与所属容器的计数/头节点等簿记无关:
- link_before: 将孤立节点插入到指定节点之前.
- unlink: 将节点从所在环中摘除, 并恢复为孤立节点.
- unlink_range: 将连续的一段节点整体摘除, 并使其自成一个环.

示例:
    >>> a, b = Node("a"), Node("b")
    >>> link_before(b, a)
    >>> a.next is b and b.next is a
    True
"""

from __future__ import annotations

from typing import Any, Generic, Iterator, TypeVar

T = TypeVar("T")


class Node(Generic[T]):
    """
    循环双向链表节点.

    Attributes:
        value (T): 节点存储的元素.
        previous (Node[Any]): 前驱节点, 初始化时指向自身.
        next (Node[Any]): 后继节点, 初始化时指向自身.
    """

    __slots__ = ("value", "previous", "next")

    def __init__(self, value: T) -> None:
        self.value: T = value
        self.previous: Node[Any] = self
        self.next: Node[Any] = self

    def is_isolated(self) -> bool:
        """节点是否不属于任何环(链接均指向自身)."""
        return self.next is self and self.previous is self

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.value!r})"


def link_before(node: Node[T], anchor: Node[T]) -> None:
    """
    将孤立节点插入到 `anchor` 之前, O(1).

    Args:
        node (Node[T]): 待插入的孤立节点.
        anchor (Node[T]): 参考节点, `node` 将成为它的前驱.
    """
    node.next = anchor
    node.previous = anchor.previous
    anchor.previous.next = node
    anchor.previous = node


def unlink(node: Node[T]) -> Node[T]:
    """
    将节点从所在环中摘除, O(1).

    摘除后的节点恢复为孤立节点. 对孤立节点调用没有效果.

    Returns:
        Node[T]: 被摘除节点原来的后继(环中只有它自己时返回它自身).
    """
    successor = node.next
    node.previous.next = node.next
    node.next.previous = node.previous
    node.previous = node
    node.next = node
    return successor


def unlink_range(first: Node[T], stop: Node[T]) -> Node[T]:
    """
    摘除从 `first` 开始到 `stop` 之前(不含 `stop`)的连续节点, O(1).

    摘除的节点段首尾相接自成一个环, 原环在 `first` 的前驱与 `stop` 之间重新缝合.

    调用方需保证: `first` 与 `stop` 在同一个环上, `first is not stop`,
    即节点段非空且不是整个环.

    Args:
        first (Node[T]): 节点段中的第一个节点.
        stop (Node[T]): 节点段之后的第一个节点, 保留在原环中.

    Returns:
        Node[T]: 节点段的第一个节点, 即新环的头.
    """
    last = stop.previous
    first.previous.next = stop
    stop.previous = first.previous
    last.next = first
    first.previous = last
    return first


def iter_cycle(head: Node[T] | None, count: int) -> Iterator[Node[T]]:
    """
    从 `head` 沿 next 方向产出 `count` 个节点.

    Yields:
        Node[T]: 环上的下一个节点.
    """
    if head is None:
        return
    node = head
    for _ in range(count):
        yield node
        node = node.next


def iter_cycle_reversed(head: Node[T] | None, count: int) -> Iterator[Node[T]]:
    """
    从 `head` 的前驱开始沿 previous 方向产出 `count` 个节点.

    Yields:
        Node[T]: 环上的上一个节点.
    """
    if head is None:
        return
    node = head.previous
    for _ in range(count):
        yield node
        node = node.previous
