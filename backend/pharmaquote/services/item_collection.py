"""Ordered line-item collection of a quote.

Structural problems (out-of-range index, removal at the minimum count) are
silent no-ops: nothing is raised and the observer is not notified. Callers that
need confirmation re-read the collection.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Sequence

from ..models.item import Item
from .item_resolver import ItemResolver, get_item_resolver


logger = logging.getLogger(__name__)

ItemsObserver = Callable[[List[Item]], None]


@dataclass(frozen=True)
class ItemCollectionConfig:
    """Collection options."""

    min_items: int = 1


class ItemCollection:
    """Manages the ordered items of one quote."""

    def __init__(
        self,
        initial_items: Optional[Sequence[Item]] = None,
        config: Optional[ItemCollectionConfig] = None,
        on_items_change: Optional[ItemsObserver] = None,
        resolver: Optional[ItemResolver] = None,
    ):
        """
        Initialize ItemCollection.

        Args:
            initial_items: Starting items; padded with fresh items up to min_items
            config: Collection options
            on_items_change: Called with the full list after every mutation
            resolver: Dependency resolver for field updates
        """
        self.config = config or ItemCollectionConfig()
        self.resolver = resolver or get_item_resolver()
        self.on_items_change = on_items_change
        self._initial_items: List[Item] = self._pad(list(initial_items or []))
        self._items: List[Item] = list(self._initial_items)

    @property
    def min_items(self) -> int:
        return self.config.min_items

    @property
    def items(self) -> List[Item]:
        """Snapshot of the current items."""
        return list(self._items)

    @property
    def count(self) -> int:
        return len(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Item]:
        return iter(list(self._items))

    def __getitem__(self, index: int) -> Item:
        return self._items[index]

    def can_remove(self) -> bool:
        """True while the collection is above its minimum size."""
        return len(self._items) > self.min_items

    def _in_bounds(self, index: int) -> bool:
        return 0 <= index < len(self._items)

    def _pad(self, items: List[Item]) -> List[Item]:
        while len(items) < self.min_items:
            items.append(self.resolver.create_item())
        return items

    def _commit(self, items: List[Item]) -> None:
        self._items = items
        if self.on_items_change is not None:
            self.on_items_change(list(items))

    # ===== Mutations =====

    def add(self) -> Item:
        """
        Append a fresh item.

        Returns:
            The new item
        """
        item = self.resolver.create_item()
        self._commit(self._items + [item])
        logger.debug(f"Item added ({len(self._items)} items)")
        return item

    def remove(self, index: int) -> None:
        """
        Remove the item at index, unless that would go below min_items.

        Args:
            index: Position of the item
        """
        if not self.can_remove() or not self._in_bounds(index):
            return
        self._commit([item for i, item in enumerate(self._items) if i != index])
        logger.debug(f"Item {index} removed ({len(self._items)} items)")

    def duplicate(self, index: int) -> None:
        """
        Append a copy of the item at index to the end of the collection.

        Args:
            index: Position of the source item
        """
        if not self._in_bounds(index):
            return
        copy = self.resolver.duplicate_item(self._items[index])
        self._commit(self._items + [copy])
        logger.debug(f"Item {index} duplicated as {copy.id}")

    def update(self, index: int, field: str, value) -> None:
        """
        Update one field of the item at index through the resolver.

        Args:
            index: Position of the item
            field: Field name (attribute or camelCase alias)
            value: New value
        """
        if not self._in_bounds(index):
            return
        items = list(self._items)
        items[index] = self.resolver.update_field(items[index], field, value)
        self._commit(items)

    def replace(self, index: int, item: Item) -> None:
        """
        Install an item verbatim, bypassing the resolver.

        Args:
            index: Position of the item
            item: Replacement item
        """
        if not self._in_bounds(index):
            return
        items = list(self._items)
        items[index] = item
        self._commit(items)

    def set_all(self, items: Sequence[Item]) -> None:
        """
        Replace every item; the result is padded up to min_items.

        Args:
            items: New items
        """
        self._commit(self._pad(list(items)))

    def reset(self) -> None:
        """Restore the initial items."""
        self._commit(list(self._initial_items))
