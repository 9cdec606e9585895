"""TypedRepository — identity-indexed in-memory store over one item variant.

Every operation validates before it mutates, so a returned failure
always means the backing map is untouched. Entries keep insertion
order; ``update_quantity`` replaces an item without moving it.

Single-threaded by contract. If multiple writers are ever needed,
``insert``/``remove``/``update_quantity`` are the lock boundaries.
"""

from __future__ import annotations

from typing import Generic, TypeVar

from invctl.domain.errors import Outcome, RepositoryError
from invctl.domain.items import InventoryItem

T = TypeVar("T", bound=InventoryItem)


class TypedRepository(Generic[T]):
    """Store for items of a single variant type, keyed by ``id``.

    Usage::

        repo = TypedRepository(ElectronicItem)
        repo.insert(ElectronicItem(id=1, name="Laptop", quantity=10, ...))
        outcome = repo.update_quantity(1, 15)
        if not outcome.ok:
            ...
    """

    def __init__(self, item_type: type[T]) -> None:
        self._item_type = item_type
        self._items: dict[int, T] = {}

    @property
    def item_type(self) -> type[T]:
        return self._item_type

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._items

    def insert(self, item: T) -> Outcome[T]:
        """Store *item*. Fails with DUPLICATE_KEY if its id is taken.

        Raises:
            TypeError: If *item* is not an instance of the repository's
                item type.
        """
        if not isinstance(item, self._item_type):
            msg = (
                f"{type(self).__name__}[{self._item_type.__name__}] "
                f"cannot store {type(item).__name__}"
            )
            raise TypeError(msg)
        if item.id in self._items:
            return Outcome.failure(RepositoryError.duplicate_key(item.id))
        self._items[item.id] = item
        return Outcome.success(item)

    def get(self, item_id: int) -> Outcome[T]:
        item = self._items.get(item_id)
        if item is None:
            return Outcome.failure(RepositoryError.not_found(item_id))
        return Outcome.success(item)

    def remove(self, item_id: int) -> Outcome[T]:
        """Delete and return the item. Retrying after success is NOT_FOUND."""
        item = self._items.pop(item_id, None)
        if item is None:
            return Outcome.failure(RepositoryError.not_found(item_id))
        return Outcome.success(item)

    def update_quantity(self, item_id: int, new_quantity: int) -> Outcome[T]:
        """Replace the stored item's quantity. The only mutation path.

        Negative quantities are rejected before the lookup, so a negative
        request for an absent id reports INVALID_QUANTITY.
        """
        if new_quantity < 0:
            return Outcome.failure(RepositoryError.invalid_quantity(item_id, new_quantity))
        current = self._items.get(item_id)
        if current is None:
            return Outcome.failure(RepositoryError.not_found(item_id))
        updated = current.with_quantity(new_quantity)
        self._items[item_id] = updated
        return Outcome.success(updated)

    def list_all(self) -> list[T]:
        """Snapshot of all items in insertion order."""
        return list(self._items.values())
