"""Bibliography format converters."""
from .bibtex_parser import entry_to_csl, load_bibtex_items, parse_bibtex

__all__ = ["entry_to_csl", "load_bibtex_items", "parse_bibtex"]
