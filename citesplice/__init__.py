"""citesplice - CSL citation rendering for Pandoc JSON documents.

Reads a Pandoc JSON tree, renders every citation through a CSL engine,
and inserts the bibliography after the bibliography heading.
"""

from .config import Config
from .exceptions import (
    CitespliceError,
    InputError,
    ConfigurationError,
    ResourceError,
    StyleError,
    BibliographyFileError,
    BibTeXError,
    ItemNotFoundError,
    PipelineContractError,
    MalformedCitationError,
    QueueUnderflowError,
    QueueDesyncError,
    EngineResponseError,
)
from .pipeline import CitationPipeline

__version__ = "0.1.0"
__all__ = [
    "CitationPipeline",
    "Config",
    "CitespliceError",
    "InputError",
    "ConfigurationError",
    "ResourceError",
    "StyleError",
    "BibliographyFileError",
    "BibTeXError",
    "ItemNotFoundError",
    "PipelineContractError",
    "MalformedCitationError",
    "QueueUnderflowError",
    "QueueDesyncError",
    "EngineResponseError",
]
