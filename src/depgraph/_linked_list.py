"""Singly-linked, front-insertion sequence."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


@dataclass(slots=True)
class _Node[T]:
    data: T
    next: _Node[T] | None = None


class LinkedList[T]:
    """A singly-linked list that only grows at the front.

    Items are always inserted at the head, so iteration yields the most
    recently inserted item first. This is what lets a postorder traversal
    produce a topological order without reversing anything afterwards.

    Not safe for concurrent mutation. Inserting at the head while an
    iteration is in progress is harmless (the new head is not visited),
    but the results of any other interleaving are unspecified.

    Example:
        >>> items = LinkedList[str]()
        >>> items.insert("x")
        >>> items.insert("y")
        >>> list(items)
        ['y', 'x']
        >>> str(items)
        'y x'

    """

    __slots__ = ("_count", "_head")

    def __init__(self, items: Iterable[T] = ()) -> None:
        """Create a list, inserting ``items`` one by one at the front."""
        self._head: _Node[T] | None = None
        self._count = 0
        for item in items:
            self.insert(item)

    def insert(self, item: T) -> None:
        """Insert ``item`` as the new head of the list."""
        self._head = _Node(item, self._head)
        self._count += 1

    def first(self) -> T | None:
        """Return the head item, or None if the list is empty."""
        if self._head is None:
            return None
        return self._head.data

    def remove_first(self) -> bool:
        """Detach the head item.

        Returns:
            True if an item was removed, False if the list was empty.

        """
        if self._head is None:
            return False
        self._head = self._head.next
        self._count -= 1
        return True

    def size(self) -> int:
        """Return the number of items in the list."""
        return self._count

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[T]:
        current = self._head
        while current is not None:
            yield current.data
            current = current.next

    def __str__(self) -> str:
        return " ".join(str(item) for item in self)

    def __repr__(self) -> str:
        return f"<LinkedList {list(self)!r}>"
