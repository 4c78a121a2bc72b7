"""Core citation pipeline stages."""
from .bibliography import find_bibliography_heading, insert_bibliography
from .driver import FormatterDriver, build_cluster, select_text
from .extractor import collect_citation_ids, extract_citations
from .formatting import normalize_fragment
from .models import CitationCluster, CitationOccurrence, ExtractionResult, FormattedQueue
from .rewriter import rewrite_citations

__all__ = [
    "CitationCluster",
    "CitationOccurrence",
    "ExtractionResult",
    "FormattedQueue",
    "FormatterDriver",
    "build_cluster",
    "collect_citation_ids",
    "extract_citations",
    "find_bibliography_heading",
    "insert_bibliography",
    "normalize_fragment",
    "rewrite_citations",
    "select_text",
]
