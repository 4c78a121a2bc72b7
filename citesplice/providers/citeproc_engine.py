"""Formatting engine backed by citeproc-py."""
import copy
import io
import logging
import os
from typing import Any, Dict, Iterable, List, Optional, Sequence, Set, Tuple

import citeproc
from citeproc import Citation, CitationItem, CitationStylesBibliography, CitationStylesStyle, Locator
from citeproc import formatter
from citeproc.frontend import CitationStylesXML
from citeproc.source.json import CiteProcJSON

from ..core.models import CitationCluster
from ..exceptions import ConfigurationError, ResourceError, StyleError
from .base import ClusterRef, ClusterResult, FormattingEngine

logger = logging.getLogger(__name__)

_FORMATTERS = {
    "html": formatter.html,
    "text": formatter.plain,
}

LOCATOR_LABEL = "page"
DEFAULT_LOCALE = "en-US"
BUNDLED_LOCALE_DIR = os.path.join(os.path.dirname(citeproc.__file__), "data", "locales")


def bundled_locale_path(language_tag: str) -> str:
    return os.path.join(BUNDLED_LOCALE_DIR, f"locales-{language_tag}.xml")


def parse_locale(locale_xml: str):
    """Parse locale XML into a citeproc-py locale element.

    Raises:
        ResourceError: If the XML cannot be parsed
    """
    try:
        return CitationStylesXML(io.BytesIO(locale_xml.encode("utf-8")), validate=False).root
    except Exception as e:
        raise ResourceError(f"Invalid locale data: {e}")


def load_style(style_path: str, locale: Optional[str] = None) -> CitationStylesStyle:
    """Load a CSL style file.

    Raises:
        StyleError: If the file is missing, unreadable or not a valid style
    """
    if not os.path.isfile(style_path):
        raise StyleError(f"CSL style file not found: {style_path}")
    try:
        return CitationStylesStyle(style_path, locale=locale, validate=False)
    except Exception as e:
        raise StyleError(f"Failed to load CSL style {style_path}: {e}")


class CiteprocEngine(FormattingEngine):
    """citeproc-py wrapped in the cluster-processing contract.

    Item records come from an ``ItemStore``; every cluster item is looked up
    there before rendering so an unknown id fails with ``ItemNotFoundError``.
    A cluster reports a bibliography change when it cites an item that was
    not yet part of the bibliography. citeproc-py never revises earlier
    clusters, so each result holds a single update entry.
    """

    def __init__(self, style_path: str, store, locale: Optional[str] = None):
        self.store = store
        bundled = locale if locale and os.path.isfile(bundled_locale_path(locale)) else None
        self.style = load_style(style_path, bundled or DEFAULT_LOCALE)
        self.locale = locale or self.style.root.get("default-locale") or DEFAULT_LOCALE
        self._attach_locale(self.locale)
        self.output_format = "html"
        self._source: Optional[CiteProcJSON] = None
        self._bibliography: Optional[CitationStylesBibliography] = None
        self._citable: Set[str] = set()
        self._registered: Set[str] = set()

    def _attach_locale(self, language_tag: str) -> None:
        """Put the store's locale data ahead of citeproc-py's own locale files.

        Locales defined inside the style keep precedence. Without data for
        ``language_tag`` the bundled locale files are used.
        """
        locale_xml = self.store.retrieve_locale(language_tag)
        if locale_xml is None:
            logger.warning(f"No locale data for {language_tag}; using citeproc-py's locale files")
            return
        try:
            locale = parse_locale(locale_xml)
        except ResourceError as e:
            logger.error(f"Locale {language_tag} ignored: {e}")
            return

        locales = self.style.root.locales
        position = 0
        while position < len(locales) and locales[position].getparent() is not None:
            position += 1
        locales.insert(position, locale)
        logger.debug(f"Using locale data for {language_tag}")

    @property
    def bibliography(self) -> CitationStylesBibliography:
        if self._bibliography is None:
            self._source = CiteProcJSON(copy.deepcopy(self.store.items))
            self._bibliography = CitationStylesBibliography(
                self.style, self._source, _FORMATTERS[self.output_format]
            )
        return self._bibliography

    def configure_output_format(self, fmt: str) -> None:
        if fmt not in _FORMATTERS:
            raise ConfigurationError(f"Unsupported output format: {fmt!r}")
        if self._bibliography is not None:
            raise ConfigurationError("Output format must be set before items are registered")
        self.output_format = fmt

    def register_citable_items(self, item_ids: Iterable[str]) -> None:
        for item_id in item_ids:
            self.store.retrieve_item(item_id)
            self._citable.add(item_id)

    def register_uncited_items(self, item_ids: Iterable[str]) -> None:
        items = [CitationItem(item_id) for item_id in self._resolve(item_ids)]
        if items:
            self.bibliography.register(Citation(items))

    def _resolve(self, item_ids: Iterable[str]) -> List[str]:
        resolved = []
        for item_id in item_ids:
            self.store.retrieve_item(item_id)
            if item_id not in self._registered:
                self._registered.add(item_id)
                resolved.append(item_id)
        return resolved

    @staticmethod
    def _citation_item(item: Dict[str, str]) -> CitationItem:
        if item.get("locator"):
            return CitationItem(item["id"], locator=Locator(LOCATOR_LABEL, item["locator"]))
        return CitationItem(item["id"])

    def process_cluster(
        self,
        cluster: CitationCluster,
        predecessors: Sequence[ClusterRef],
        successors: Sequence[ClusterRef] = (),
    ) -> ClusterResult:
        new_ids = self._resolve(item["id"] for item in cluster.items)
        citation = Citation([self._citation_item(item) for item in cluster.items])
        self.bibliography.register(citation)

        def warn(citation_item):
            logger.warning(f"citeproc-py could not resolve {citation_item.key}")

        text = str(self.bibliography.cite(citation, warn))
        logger.debug(
            f"{cluster.cluster_id} after {len(predecessors)} cluster(s): {text!r}"
        )
        return bool(new_ids), [[cluster.cluster_id, text]]

    def build_bibliography(self) -> Tuple[Dict[str, Any], List[str]]:
        self.bibliography.sort()
        fragments = [str(entry) for entry in self.bibliography.bibliography()]
        return {"entry_count": len(fragments)}, fragments
