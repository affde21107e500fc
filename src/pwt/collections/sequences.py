"""
有序序列的通用相等性与哈希.

任何实现了有序序列能力的容器都可以使用这里的函数,
从而保证不同实现之间的比较结果一致, 例如 `CircularList` 与 `list` 比较.
"""

from __future__ import annotations

from collections.abc import Sequence
from itertools import zip_longest
from typing import Any, Iterable

_MISSING = object()


def is_ordered_sequence(obj: Any) -> bool:
    """
    判断对象是否可以参与有序序列比较.

    字符串/字节串虽然是 `Sequence`, 但不视为元素容器.
    """
    return isinstance(obj, Sequence) and not isinstance(obj, (str, bytes, bytearray))


def elements_equal(left: Any, right: Any) -> bool:
    """元素相等: 同一对象或 `==` 成立, 两个 None 视为相等."""
    return left is right or left == right


def sequence_equals(left: Sequence[Any], right: Sequence[Any]) -> bool:
    """
    按顺序逐个比较两个序列.

    Returns:
        bool: 长度相同且对应位置的元素都相等时返回 True.
    """
    if left is right:
        return True
    if len(left) != len(right):
        return False
    for a, b in zip_longest(left, right, fillvalue=_MISSING):
        if a is _MISSING or b is _MISSING or not elements_equal(a, b):
            return False
    return True


def sequence_hash(items: Iterable[Any]) -> int:
    """
    与顺序相关的哈希.

    累加器初值为 1, 每个元素按 `31 * acc + hash(element)` 累积,
    None 贡献 0, 结果截断为有符号 32 位整数.
    """
    result = 1
    for item in items:
        result = (31 * result + (0 if item is None else hash(item))) & 0xFFFFFFFF
    if result & 0x80000000:
        result -= 1 << 32
    return result
