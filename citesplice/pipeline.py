"""Main citation-resolution pipeline."""
import json
import logging
from typing import Any, Callable, Dict, List, Optional

from .config import Config
from .core.bibliography import insert_bibliography
from .core.driver import FormatterDriver
from .core.extractor import collect_citation_ids, extract_citations
from .core.nodes import stringify
from .core.rewriter import rewrite_citations
from .exceptions import InputError, PipelineContractError
from .providers.base import FormattingEngine
from .providers.citeproc_engine import BUNDLED_LOCALE_DIR, CiteprocEngine
from .providers.item_store import ItemStore, load_locales

logger = logging.getLogger(__name__)

EngineFactory = Callable[[str, ItemStore, Config], FormattingEngine]


def default_engine_factory(style_path: str, store: ItemStore, config: Config) -> FormattingEngine:
    return CiteprocEngine(style_path, store, locale=config.locale)


def meta_text(meta: Dict[str, Any], key: str) -> str:
    """Plain-text value of a required metadata field.

    Raises:
        InputError: If the field is absent or empty
    """
    if key not in meta:
        raise InputError(f"Document metadata has no '{key}' field")
    value = stringify(meta[key]).strip()
    if not value:
        raise InputError(f"Document metadata field '{key}' is empty")
    return value


class CitationPipeline:
    """Resolve citations in a Pandoc JSON document.

    Example:
        >>> pipeline = CitationPipeline(Config())
        >>> output = pipeline.run(sys.stdin.read())

    Attributes:
        config: Config instance
        engine_factory: Builds the formatting engine for one run
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        engine_factory: Optional[EngineFactory] = None,
    ):
        self.config = config or Config()
        self.engine_factory = engine_factory or default_engine_factory

    def load_store(self, bibliography_path: str) -> ItemStore:
        locale_dir = self.config.locale_dir or BUNDLED_LOCALE_DIR
        locales = load_locales(locale_dir, self.config.languages)
        return ItemStore.from_file(bibliography_path, locales)

    def process(self, document: Dict[str, Any]) -> Dict[str, Any]:
        """Render citations and the bibliography of ``document``.

        Args:
            document: Decoded Pandoc JSON document (``meta`` and ``blocks``)

        Returns:
            New document with citation nodes replaced

        Raises:
            CitespliceError: On any input, resource, resolution or
                consistency failure
        """
        if not isinstance(document, dict) or not isinstance(document.get("blocks"), list):
            raise InputError("Input is not a document with a 'blocks' list")
        meta = document.get("meta")
        if not isinstance(meta, dict):
            raise InputError("Input document has no 'meta' section")

        style_path = meta_text(meta, "csl")
        bibliography_path = meta_text(meta, "bibliography")
        logger.debug(f"csl: {style_path}, bibliography: {bibliography_path}")

        store = self.load_store(bibliography_path)
        engine = self.engine_factory(style_path, store, self.config)
        engine.configure_output_format(self.config.output_format)

        driver = FormatterDriver(engine, store)
        driver.register_items(collect_citation_ids(meta.get("nocite", [])))

        extraction = extract_citations(document["blocks"])
        queue = driver.format_all(extraction.occurrences)
        if len(queue) != len(extraction):
            raise PipelineContractError(
                f"{len(extraction)} occurrence(s) but {len(queue)} formatted result(s)"
            )

        blocks: List[Any] = rewrite_citations(
            document["blocks"],
            queue,
            raw_format=self.config.raw_format,
            separator=self.config.citation_separator,
        )
        blocks = insert_bibliography(
            blocks,
            engine,
            self.config.bibliography_headings,
            raw_format=self.config.raw_format,
        )

        result = dict(document)
        result["blocks"] = blocks
        logger.info(f"Resolved {len(extraction)} citation occurrence(s)")
        return result

    def run(self, input_text: str) -> str:
        """Process a serialized document and return the serialized result.

        Raises:
            InputError: If ``input_text`` is not valid JSON
        """
        try:
            document = json.loads(input_text)
        except json.JSONDecodeError as e:
            raise InputError(f"Input is not valid JSON: {e}")
        return json.dumps(self.process(document), ensure_ascii=False, separators=(",", ":"))
