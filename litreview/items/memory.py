"""In-memory item source."""
from typing import Dict, Iterable, List, Optional

from ..exceptions import ItemSourceError
from .base import Item, ItemSource


class MemoryItemSource(ItemSource):
    """Items held in a dictionary.

    Ids listed in ``failing_ids`` raise ItemSourceError on lookup, which
    stands in for a library that fails to load an item.
    """

    def __init__(self, items: Optional[Iterable[Item]] = None, failing_ids: Iterable[int] = ()):
        self._items: Dict[int, Item] = {}
        self.failing_ids = set(failing_ids)
        for item in items or []:
            self.add(item)

    def add(self, item: Item) -> None:
        self._items[item.id] = item

    def remove(self, item_id: int) -> None:
        self._items.pop(item_id, None)

    async def get_item(self, item_id: int) -> Optional[Item]:
        if item_id in self.failing_ids:
            raise ItemSourceError(f"Failed to load item {item_id}")
        return self._items.get(item_id)

    async def list_items(self) -> List[Item]:
        return list(self._items.values())
