"""Item source backed by a BibTeX library file."""
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import bibtexparser
from bibtexparser.bparser import BibTexParser
from bibtexparser.customization import convert_to_unicode

from ..exceptions import ItemSourceError
from .base import Creator, Item, ItemSource

logger = logging.getLogger(__name__)


def parse_bibtex(content: str) -> List[Dict[str, Any]]:
    """Read the entries of a library file.

    Entry types outside the BibTeX standard (@note, @attachment) are kept so
    they can be told apart from regular items; field keys are lowercased.

    Raises:
        ItemSourceError: If bibtexparser rejects the content
    """
    parser = BibTexParser(common_strings=True, ignore_nonstandard_types=False)
    parser.customization = convert_to_unicode
    parser.ignore_comments = True
    parser.homogenize_fields = True

    try:
        entries = bibtexparser.loads(content, parser=parser).entries
    except Exception as e:
        logger.error(f"Could not read BibTeX library ({len(content)} chars): {e}")
        raise ItemSourceError(f"Invalid BibTeX library: {e}")

    if not entries:
        logger.warning("BibTeX library holds no entries")
    else:
        logger.debug(f"Read {len(entries)} library entries")
    return entries


def parse_authors(author_field: str) -> List[Creator]:
    """Split a BibTeX author field into creators.

    Handles both "Last, First" and "First Last" forms joined by " and ".
    """
    creators = []
    for name in author_field.replace("\n", " ").split(" and "):
        name = " ".join(name.split())
        if not name:
            continue
        parts = name.split(",")
        if len(parts) > 1:
            creators.append(Creator(first_name=parts[1].strip(), last_name=parts[0].strip()))
        else:
            words = name.split()
            creators.append(Creator(first_name=" ".join(words[:-1]), last_name=words[-1]))
    return creators


def entry_to_item(entry: Dict[str, Any], position: int) -> Item:
    """Convert a parsed BibTeX entry to an Item.

    The id comes from an ``itemid`` field when present, otherwise the
    1-based position of the entry in the file.
    """
    raw_id = entry.get("itemid", "")
    try:
        item_id = int(raw_id) if str(raw_id).strip() else position
    except ValueError:
        logger.warning(f"Entry {entry.get('ID', '?')}: non-numeric itemid {raw_id!r}, using {position}")
        item_id = position

    return Item(
        id=item_id,
        item_type=entry.get("ENTRYTYPE", "article").lower(),
        title=entry.get("title", "").strip("{} "),
        creators=parse_authors(entry.get("author", "")),
        date=entry.get("date") or entry.get("year", ""),
        publication_title=entry.get("journal") or entry.get("booktitle", ""),
        doi=entry.get("doi", ""),
    )


class BibtexItemSource(ItemSource):
    """Serves items from a .bib file, re-parsing it when the file changes.

    Example:
        source = BibtexItemSource("library.bib")
        item = asyncio.run(source.get_item(1))
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(os.path.expanduser(str(path)))
        self._items: Dict[int, Item] = {}
        self._mtime: Optional[float] = None

    def _load(self) -> Dict[int, Item]:
        try:
            mtime = self.path.stat().st_mtime
        except FileNotFoundError:
            raise ItemSourceError(f"BibTeX library not found: {self.path}")

        if self._mtime == mtime:
            return self._items

        try:
            with open(self.path, "r", encoding="utf-8", errors="ignore") as f:
                content = f.read()
        except OSError as e:
            raise ItemSourceError(f"Failed to read BibTeX library {self.path}: {e}")

        items: Dict[int, Item] = {}
        for position, entry in enumerate(parse_bibtex(content), 1):
            item = entry_to_item(entry, position)
            if item.id in items:
                logger.warning(f"Duplicate item id {item.id} in {self.path}, keeping the first entry")
                continue
            items[item.id] = item

        self._items = items
        self._mtime = mtime
        return items

    async def get_item(self, item_id: int) -> Optional[Item]:
        return self._load().get(item_id)

    async def list_items(self) -> List[Item]:
        return list(self._load().values())
