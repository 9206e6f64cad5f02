"""A list of integers addressed by position, with ``-1`` meaning the end."""

from __future__ import annotations

from typing import Iterable, Iterator

__all__ = ["IntList"]


class IntList:
    """Ordered integers; positions start at 0 and ``-1`` names the last item."""

    def __init__(self, items: Iterable[int] = ()) -> None:
        self._items: list[int] = [int(item) for item in items]

    def insert(self, item: int, pos: int = -1) -> int:
        """Insert ``item`` at ``pos`` and return the new length.

        A position of ``-1`` or one past the last item appends at the end.
        """
        if pos < -1:
            raise IndexError(f"invalid position {pos}")
        if pos == -1 or pos >= len(self._items):
            self._items.append(int(item))
        else:
            self._items.insert(pos, int(item))
        return len(self._items)

    def _checked(self, pos: int) -> int:
        if not self._items:
            raise IndexError("list is empty")
        if pos == -1:
            return len(self._items) - 1
        if not 0 <= pos < len(self._items):
            raise IndexError(f"position {pos} out of range")
        return pos

    def remove(self, pos: int = -1) -> int:
        """Take out the item at ``pos`` (the last one for ``-1``) and return it."""
        return self._items.pop(self._checked(pos))

    def get(self, pos: int = -1) -> int:
        """Return the item at ``pos`` (the last one for ``-1``) without removing it."""
        return self._items[self._checked(pos)]

    def index(self, value: int) -> int:
        """Return the position of the first occurrence of ``value``."""
        try:
            return self._items.index(value)
        except ValueError:
            raise ValueError(f"{value} is not in the list") from None

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[int]:
        return iter(self._items)

    def __str__(self) -> str:
        return " ".join(str(item) for item in self._items)

    def __repr__(self) -> str:
        return f"IntList({self._items!r})"