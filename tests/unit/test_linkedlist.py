"""Unit tests for the linked list primitive."""

from linked_registry.components.comparators import compare_exact
from linked_registry.components.linkedlist import LinkedList


class Item:
    def __init__(self, value: str):
        self.value = value

    def __str__(self) -> str:
        return self.value

    def __eq__(self, other) -> bool:
        return isinstance(other, Item) and self.value == other.value


def value_of(item: Item) -> str:
    return item.value


def make_sorted(*values: str) -> LinkedList[Item]:
    ll = LinkedList[Item]()
    for v in values:
        ll.insert_sorted(Item(v), value_of, compare_exact)
    return ll


def test_empty_list():
    ll = LinkedList[Item]()
    assert len(ll) == 0
    assert str(ll) == ""
    assert list(ll) == []


def test_insert_sorted_orders_elements():
    ll = make_sorted("C", "A", "D", "B")
    assert str(ll) == "[Head] A -> B -> C -> D [Tail]"
    assert len(ll) == 4


def test_insert_sorted_new_head_and_tail():
    ll = make_sorted("M")
    ll.insert_sorted(Item("A"), value_of, compare_exact)
    ll.insert_sorted(Item("Z"), value_of, compare_exact)
    assert [i.value for i in ll] == ["A", "M", "Z"]


def test_insert_sorted_rejects_duplicate():
    ll = make_sorted("A", "B")
    assert ll.insert_sorted(Item("B"), value_of, compare_exact) is None
    assert str(ll) == "[Head] A -> B [Tail]"
    assert len(ll) == 2


def test_append_keeps_insertion_order():
    ll = LinkedList[Item]()
    ll.append(Item("B"))
    ll.append(Item("A"))
    assert str(ll) == "[Head] B -> A [Tail]"


def test_search_found():
    ll = make_sorted("A", "B", "C")

    result = ll.search(lambda item: item.value == "B")
    assert result is not None
    node, idx = result
    assert idx == 1
    assert node.get_data().value == "B"


def test_search_not_found():
    ll = make_sorted("A")
    assert ll.search(lambda item: item.value == "Z") is None


def test_delete_middle_head_and_missing():
    ll = make_sorted("A", "B", "C")

    removed = ll.delete(lambda item: item.value == "B")
    assert removed is not None
    assert removed.get_data().value == "B"
    assert removed.get_next() is None
    assert str(ll) == "[Head] A -> C [Tail]"

    removed = ll.delete(lambda item: item.value == "A")
    assert removed is not None
    assert str(ll) == "[Head] C [Tail]"

    # deleting non-existent
    assert ll.delete(lambda item: item.value == "Z") is None
    assert len(ll) == 1


def test_clear_is_idempotent():
    ll = make_sorted("A", "B")
    ll.clear()
    assert len(ll) == 0
    assert ll.head is None
    ll.clear()
    assert len(ll) == 0
