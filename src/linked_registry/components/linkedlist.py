"""
A singly linked list shared by the record store and the reference lists.

Time Complexity:
Search: O(n)
Insert/Delete: O(1) for the splice, but O(n) to find the position
"""

from __future__ import annotations  # allows forward-referencing without quotes

from typing import Any, Callable, Generic, Iterator, Optional, Tuple, TypeVar

T = TypeVar("T")


class Node(Generic[T]):
    """
    A node is a container which contains data of type T
    and the next node it is linked to.
    """

    __slots__ = ("data", "next")

    def __init__(self, data: T) -> None:
        self.data: T = data
        self.next: Optional[Node[T]] = None

    def __repr__(self) -> str:
        return f"[Node] {self.data}"

    def set_next(self, node: Optional[Node[T]]):
        self.next = node

    def get_data(self) -> T:
        return self.data

    def get_next(self) -> Optional[Node[T]]:
        return self.next


class LinkedList(Generic[T]):
    """
    LinkedList implements the linked list data structure,
    using the Node container with data type, T.

    It implements ordered insert, append, search, delete and clear.
    """

    def __init__(self) -> None:
        self.head: Optional[Node[T]] = None
        self._size = 0

    def __repr__(self) -> str:
        if self.head is None:
            return ""

        nodes = [str(data) for data in self]
        return "[Head] " + " -> ".join(nodes) + " [Tail]"

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[T]:
        current = self.head
        while current is not None:
            yield current.get_data()
            current = current.get_next()

    def insert_sorted(
        self,
        data: T,
        key_of: Callable[[T], Any],
        compare: Callable[[Any, Any], int],
    ) -> Optional[Node[T]]:
        """
        Splices data in before the first element that sorts after it.
        Returns the new node, or None (list untouched) if an element
        with an equal key already exists.
        """
        new_node = Node(data)
        new_key = key_of(data)

        prior: Optional[Node[T]] = None
        current = self.head
        while current is not None:
            comp = compare(new_key, key_of(current.get_data()))
            if comp == 0:
                return None
            if comp < 0:
                break
            prior = current
            current = current.get_next()

        new_node.set_next(current)
        if prior is None:
            self.head = new_node
        else:
            prior.set_next(new_node)
        self._size += 1
        return new_node

    def append(self, data: T) -> Node[T]:
        """Inserts a new element at the tail. O(n) since there is no tail pointer."""
        new_node = Node(data)
        if self.head is None:
            self.head = new_node
        else:
            current = self.head
            while current.get_next() is not None:
                current = current.get_next()
            current.set_next(new_node)
        self._size += 1
        return new_node

    def search(self, match: Callable[[T], bool]) -> Optional[Tuple[Node[T], int]]:
        """
        Returns the first node matching, and the index of that node.
        O(n), since in the worst case it must scan the entire list
        """
        counter = 0
        current = self.head
        while current is not None:
            if match(current.get_data()):
                return current, counter
            current = current.get_next()
            counter += 1
        return None

    def delete(self, match: Callable[[T], bool]) -> Optional[Node[T]]:
        """
        Unlinks the first node matching and returns it.
        Returns None if nothing matches.
        """
        prior: Optional[Node[T]] = None
        current = self.head
        while current is not None:
            next = current.get_next()
            if match(current.get_data()):
                if prior is None:
                    self.head = next
                else:
                    prior.set_next(next)
                current.set_next(None)
                self._size -= 1
                return current
            prior = current
            current = next
        return None

    def clear(self) -> None:
        """Drops every node, unlinking each so no chain outlives the list."""
        current = self.head
        while current is not None:
            next = current.get_next()
            current.set_next(None)
            current = next
        self.head = None
        self._size = 0
