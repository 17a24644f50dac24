"""Base item source interface."""
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional

NOTE_TYPES = ("note",)
ATTACHMENT_TYPES = ("attachment",)

_YEAR_PATTERN = re.compile(r"\d{4}")


@dataclass
class Creator:
    """An author or editor of an item."""

    first_name: str = ""
    last_name: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass
class Item:
    """Metadata of one bibliographic item.

    Attributes:
        id: Integer identifier referenced by review records
        item_type: Item kind ('article', 'book', ..., 'note', 'attachment')
        title: Item title
        creators: Authors in order
        date: Free-form date as stored in the library
        publication_title: Journal, proceedings or book title
        doi: Digital Object Identifier
    """

    id: int
    item_type: str = "article"
    title: str = ""
    creators: List[Creator] = field(default_factory=list)
    date: str = ""
    publication_title: str = ""
    doi: str = ""

    @property
    def is_note(self) -> bool:
        return self.item_type in NOTE_TYPES

    @property
    def is_attachment(self) -> bool:
        return self.item_type in ATTACHMENT_TYPES

    @property
    def is_regular(self) -> bool:
        return not (self.is_note or self.is_attachment)

    @property
    def year(self) -> str:
        """First four-digit run of the date, or an empty string."""
        match = _YEAR_PATTERN.search(self.date or "")
        return match.group(0) if match else ""

    def author_string(self, separator: str = "; ") -> str:
        return separator.join(c.full_name for c in self.creators)


class ItemSource(ABC):
    """Abstract source of bibliographic items."""

    @abstractmethod
    async def get_item(self, item_id: int) -> Optional[Item]:
        """Resolve one item; None if the library has no such item."""
        pass

    @abstractmethod
    async def list_items(self) -> List[Item]:
        """All items of the library in library order."""
        pass

    async def list_regular_items(self) -> List[Item]:
        return [item for item in await self.list_items() if item.is_regular]
