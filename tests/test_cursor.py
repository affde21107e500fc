"""
双向游标(Cursor)测试套件

覆盖遍历/基于位置的插入删除替换/状态机以及外部修改检测.
"""

import pytest

from pwt.collections.circular_list import CircularList
from pwt.collections.cursor import Cursor, CursorState
from pwt.collections.errors import (
    ConcurrentModificationError,
    IndexRangeError,
    InvalidCursorStateError,
    NoSuchElementError,
)
from pwt.collections.interfaces import BidirectionalCursor


@pytest.fixture
def filled_list():
    """创建一个包含元素的循环链表"""
    return CircularList([1, 2, 3])


class TestCursorTraversal:
    """测试游标遍历"""

    def test_forward(self, filled_list):
        cursor = filled_list.cursor()
        assert isinstance(cursor, BidirectionalCursor)
        assert not cursor.has_previous()
        values = []
        while cursor.has_next():
            values.append(cursor.next())
        assert values == [1, 2, 3]
        assert cursor.next_index() == 3
        assert cursor.previous_index() == 2

    def test_backward(self, filled_list):
        cursor = filled_list.cursor(len(filled_list))
        values = []
        while cursor.has_previous():
            values.append(cursor.previous())
        assert values == [3, 2, 1]
        assert cursor.next_index() == 0
        assert cursor.previous_index() == -1

    def test_next_at_end_fails(self, filled_list):
        cursor = filled_list.cursor(3)
        with pytest.raises(NoSuchElementError):
            cursor.next()
        assert cursor.previous() == 3

    def test_previous_at_start_fails(self, filled_list):
        cursor = filled_list.cursor()
        with pytest.raises(NoSuchElementError):
            cursor.previous()

    def test_empty_list(self):
        cursor = CircularList().cursor()
        assert not cursor.has_next()
        assert not cursor.has_previous()
        with pytest.raises(NoSuchElementError):
            cursor.next()

    def test_zigzag(self, filled_list):
        cursor = filled_list.cursor()
        assert cursor.next() == 1
        assert cursor.next() == 2
        assert cursor.previous() == 2
        assert cursor.previous() == 1
        assert cursor.next() == 1

    def test_cursor_out_of_range(self, filled_list):
        with pytest.raises(IndexRangeError):
            filled_list.cursor(4)
        with pytest.raises(IndexRangeError):
            filled_list.cursor(-1)

    def test_iterator_protocol(self, filled_list):
        cursor = filled_list.cursor(1)
        assert iter(cursor) is cursor
        assert list(cursor) == [2, 3]
        assert isinstance(iter(filled_list), Cursor)


class TestCursorSeek:
    """测试游标定位"""

    def test_seek_to(self):
        lst = CircularList(range(10))
        cursor = lst.cursor()
        cursor.seek_to(7)
        assert cursor.next() == 7
        cursor.seek_to(2)
        assert cursor.next() == 2
        cursor.seek_to(10)
        assert not cursor.has_next()
        assert cursor.previous() == 9

    def test_seek_to_out_of_range(self, filled_list):
        cursor = filled_list.cursor()
        with pytest.raises(IndexRangeError):
            cursor.seek_to(4)

    def test_seek_to_start_and_end(self, filled_list):
        cursor = filled_list.cursor()
        cursor.seek_to_end()
        assert cursor.position == 3
        assert cursor.previous() == 3
        cursor.seek_to_start()
        assert cursor.position == 0
        assert cursor.next() == 1

    def test_seek_resets_state(self, filled_list):
        cursor = filled_list.cursor()
        cursor.next()
        cursor.seek_to_start()
        assert cursor.state is CursorState.IDLE
        with pytest.raises(InvalidCursorStateError):
            cursor.remove()


class TestCursorMutation:
    """测试基于游标的修改"""

    def test_remove_after_next(self, filled_list):
        cursor = filled_list.cursor()
        assert cursor.next() == 1
        cursor.remove()
        assert list(filled_list) == [2, 3]
        with pytest.raises(InvalidCursorStateError):
            cursor.remove()
        assert list(filled_list) == [2, 3]

    def test_remove_keeps_traversal_consistent(self):
        lst = CircularList([1, 2, 3, 4, 5])
        cursor = lst.cursor()
        while cursor.has_next():
            if cursor.next() % 2 == 0:
                cursor.remove()
        assert list(lst) == [1, 3, 5]
        assert cursor.next_index() == 3

    def test_remove_after_previous(self, filled_list):
        cursor = filled_list.cursor(3)
        assert cursor.previous() == 3
        cursor.remove()
        assert list(filled_list) == [1, 2]
        assert cursor.next_index() == 2
        assert not cursor.has_next()
        assert cursor.previous() == 2

    def test_remove_head_backward(self, filled_list):
        cursor = filled_list.cursor(1)
        assert cursor.previous() == 1
        cursor.remove()
        assert list(filled_list) == [2, 3]
        assert cursor.next() == 2

    def test_remove_only_element(self):
        lst = CircularList(["x"])
        cursor = lst.cursor()
        cursor.next()
        cursor.remove()
        assert len(lst) == 0
        assert not cursor.has_next()
        cursor.insert("y")
        assert list(lst) == ["y"]

    def test_remove_without_step_fails(self, filled_list):
        cursor = filled_list.cursor()
        assert cursor.state is CursorState.IDLE
        with pytest.raises(InvalidCursorStateError) as exc_info:
            cursor.remove()
        assert exc_info.value.state is CursorState.IDLE

    def test_set(self, filled_list):
        cursor = filled_list.cursor()
        cursor.next()
        assert cursor.set(10) == 1
        assert cursor.state is CursorState.MUTATED
        assert list(filled_list) == [10, 2, 3]
        assert cursor.next_index() == 1
        with pytest.raises(InvalidCursorStateError):
            cursor.set(11)

    def test_set_after_previous(self, filled_list):
        cursor = filled_list.cursor(2)
        assert cursor.previous() == 2
        assert cursor.set(20) == 2
        assert list(filled_list) == [1, 20, 3]

    def test_set_without_step_fails(self, filled_list):
        with pytest.raises(InvalidCursorStateError):
            filled_list.cursor().set(0)

    def test_insert(self, filled_list):
        cursor = filled_list.cursor(1)
        cursor.insert("a")
        assert cursor.next_index() == 2
        assert cursor.next() == 2
        assert list(filled_list) == [1, "a", 2, 3]

    def test_insert_at_start_becomes_head(self, filled_list):
        cursor = filled_list.cursor()
        cursor.insert(0)
        assert filled_list.get_at(0) == 0
        assert cursor.next() == 1

    def test_insert_clears_last_returned(self, filled_list):
        cursor = filled_list.cursor()
        cursor.next()
        cursor.insert("a")
        with pytest.raises(InvalidCursorStateError):
            cursor.set("b")
        with pytest.raises(InvalidCursorStateError):
            cursor.remove()

    def test_build_by_insert_round_trip(self):
        values = ["a", "b", "c", "d"]
        lst = CircularList()
        cursor = lst.cursor()
        for value in values:
            cursor.insert(value)
        assert cursor.position == len(values)

        backward = []
        while cursor.has_previous():
            backward.append(cursor.previous())
        assert backward == values[::-1]

        forward = []
        while cursor.has_next():
            forward.append(cursor.next())
        assert forward == values


class TestCursorConcurrentModification:
    """测试游标对外部修改的检测"""

    def test_outside_modification_fails_fast(self, filled_list):
        cursor = filled_list.cursor()
        cursor.next()
        filled_list.add(4)
        with pytest.raises(ConcurrentModificationError):
            cursor.next()
        with pytest.raises(ConcurrentModificationError):
            cursor.remove()

    def test_foreach_removal_fails_fast(self, filled_list):
        with pytest.raises(ConcurrentModificationError):
            for value in filled_list:
                filled_list.remove_value(value)

    def test_value_replacement_is_not_structural(self, filled_list):
        cursor = filled_list.cursor()
        filled_list.set_at(0, 10)
        assert cursor.next() == 10

    def test_seek_realigns(self, filled_list):
        cursor = filled_list.cursor()
        filled_list.remove_at(0)
        cursor.seek_to_start()
        assert cursor.next() == 2

    def test_own_mutations_allowed(self, filled_list):
        first = filled_list.cursor()
        second = filled_list.cursor()
        first.next()
        first.remove()
        with pytest.raises(ConcurrentModificationError):
            second.next()
        assert first.next() == 2

    def test_fail_fast_disabled(self):
        lst = CircularList([1, 2, 3], fail_fast=False)
        cursor = lst.cursor()
        lst.add(4)
        assert cursor.next() == 1

    def test_remove_detached_node_fails(self):
        lst = CircularList([1, 2, 3], fail_fast=False)
        cursor = lst.cursor()
        assert cursor.next() == 1
        lst.remove_at(0)
        with pytest.raises(InvalidCursorStateError):
            cursor.remove()
        assert len(lst) == 2
        assert list(lst) == [2, 3]


class TestCursorOnEmptyList:
    """测试空链表上的游标"""

    def test_traversal_fails(self):
        cursor = CircularList().cursor()
        with pytest.raises(NoSuchElementError):
            cursor.next()
        with pytest.raises(NoSuchElementError):
            cursor.previous()

    def test_insert_into_empty(self):
        lst = CircularList()
        cursor = lst.cursor()
        cursor.insert(7)
        assert list(lst) == [7]
        assert cursor.next_index() == 1
        assert cursor.previous() == 7
