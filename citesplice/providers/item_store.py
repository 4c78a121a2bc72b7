"""Bibliographic item and locale lookups for the formatting engine."""
import json
import logging
import os
from typing import Any, Dict, Iterable, List, Optional

from ..converters.bibtex_parser import load_bibtex_items
from ..exceptions import BibliographyFileError, ItemNotFoundError

logger = logging.getLogger(__name__)


def locale_file_path(locale_dir: str, language_tag: str) -> str:
    return os.path.join(locale_dir, f"locales-{language_tag}.xml")


def load_locales(locale_dir: str, languages: Iterable[str]) -> Dict[str, str]:
    """Read ``locales-<tag>.xml`` for each language.

    A missing or unreadable file is logged and that language is left out.

    Returns:
        Mapping of language tag to locale XML
    """
    locales = {}
    for language_tag in languages:
        path = locale_file_path(locale_dir, language_tag)
        try:
            with open(path, "r", encoding="utf-8") as f:
                locales[language_tag] = f.read()
        except OSError as e:
            logger.error(f"Error reading locale file: {path}: {e}")
    return locales


class ItemStore:
    """Flat store of CSL-JSON item records keyed by ``id``.

    Attributes:
        items: Item records in file order
        locales: Locale XML keyed by language tag
    """

    def __init__(self, items: List[Dict[str, Any]], locales: Optional[Dict[str, str]] = None):
        self.items = list(items)
        self.locales = dict(locales or {})
        self._by_id: Dict[str, Dict[str, Any]] = {}
        for item in self.items:
            if not isinstance(item, dict) or "id" not in item:
                raise BibliographyFileError(f"Bibliography record without an id: {item!r:.200}")
            self._by_id.setdefault(str(item["id"]), item)

    def __len__(self) -> int:
        return len(self.items)

    def __contains__(self, item_id: str) -> bool:
        return item_id in self._by_id

    @property
    def item_ids(self) -> List[str]:
        return [str(item["id"]) for item in self.items]

    def retrieve_item(self, item_id: str) -> Dict[str, Any]:
        """Return the record for ``item_id``.

        Raises:
            ItemNotFoundError: If no record has that id
        """
        try:
            return self._by_id[item_id]
        except KeyError:
            raise ItemNotFoundError(item_id) from None

    def retrieve_locale(self, language_tag: str) -> Optional[str]:
        return self.locales.get(language_tag)

    @classmethod
    def from_file(cls, path: str, locales: Optional[Dict[str, str]] = None) -> "ItemStore":
        """Load items from a CSL-JSON array, or from BibTeX for ``.bib`` files.

        Raises:
            BibliographyFileError: If the file cannot be read or parsed
        """
        if path.lower().endswith(".bib"):
            items = load_bibtex_items(path)
        else:
            try:
                with open(path, "r", encoding="utf-8") as f:
                    items = json.load(f)
            except OSError as e:
                raise BibliographyFileError(f"Cannot read bibliography file {path}: {e}")
            except json.JSONDecodeError as e:
                raise BibliographyFileError(f"Invalid JSON in bibliography file {path}: {e}")

        if not isinstance(items, list):
            raise BibliographyFileError(f"Bibliography file {path} must hold a JSON array of items")

        logger.info(f"Loaded {len(items)} bibliography item(s) from {path}")
        return cls(items, locales)
