"""Custom exceptions for citesplice."""


class CitespliceError(Exception):
    """Base exception for all citesplice errors."""

    pass


class InputError(CitespliceError):
    """Raised when the input document is malformed or lacks required metadata."""

    pass


class ConfigurationError(CitespliceError):
    """Raised when configuration is invalid."""

    pass


class ResourceError(CitespliceError):
    """Raised when a required resource file cannot be read."""

    pass


class StyleError(ResourceError):
    """Raised when the CSL style file is missing or unreadable."""

    pass


class BibliographyFileError(ResourceError):
    """Raised when the bibliography file is missing or unparsable."""

    pass


class BibTeXError(BibliographyFileError):
    """Raised when BibTeX parsing fails."""

    pass


class ItemNotFoundError(CitespliceError):
    """Raised when a citation references an id absent from the bibliography."""

    def __init__(self, item_id: str):
        super().__init__(f'Item with ID "{item_id}" not found in the bibliography.')
        self.item_id = item_id


class PipelineContractError(CitespliceError):
    """Raised when extraction, formatting and rewriting fall out of step."""

    pass


class MalformedCitationError(PipelineContractError):
    """Raised when a citation node has no usable occurrence list."""

    pass


class QueueUnderflowError(PipelineContractError):
    """Raised when a citation node needs more formatted results than remain."""

    pass


class QueueDesyncError(PipelineContractError):
    """Raised when formatted results are left over after rewriting."""

    pass


class EngineResponseError(PipelineContractError):
    """Raised when the formatting engine returns no usable update entry."""

    pass
