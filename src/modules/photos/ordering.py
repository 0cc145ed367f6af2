"""Client-side photo ordering: list moves and optimistic reorder with rollback."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def move_item(items: Sequence[T], from_index: int, to_index: int) -> list[T]:
    """Return a new list with the item at ``from_index`` moved to ``to_index``."""
    if not 0 <= from_index < len(items):
        raise IndexError(f"from_index {from_index} out of range")
    if not 0 <= to_index < len(items):
        raise IndexError(f"to_index {to_index} out of range")
    moved = list(items)
    item = moved.pop(from_index)
    moved.insert(to_index, item)
    return moved


class OptimisticOrder(Generic[T]):
    """Displayed order that updates immediately and reverts if the server refuses.

    ``commit`` receives the new order and returns the server's authoritative
    list (or ``None`` to keep the optimistic one).
    """

    def __init__(self, items: Sequence[T]):
        self._items: tuple[T, ...] = tuple(items)

    @property
    def items(self) -> tuple[T, ...]:
        return self._items

    def replace(self, items: Sequence[T]) -> None:
        self._items = tuple(items)

    async def apply(
        self,
        new_order: Sequence[T],
        commit: Callable[[list[T]], Awaitable[Sequence[T] | None]],
    ) -> tuple[T, ...]:
        snapshot = self._items
        self._items = tuple(new_order)
        try:
            confirmed = await commit(list(self._items))
        except Exception:
            logger.info("Reorder rejected, restoring previous order of %d items", len(snapshot))
            self._items = snapshot
            raise
        if confirmed is not None:
            self._items = tuple(confirmed)
        return self._items

    async def move(
        self,
        from_index: int,
        to_index: int,
        commit: Callable[[list[T]], Awaitable[Sequence[T] | None]],
    ) -> tuple[T, ...]:
        return await self.apply(move_item(self._items, from_index, to_index), commit)
