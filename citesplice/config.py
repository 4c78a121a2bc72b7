"""Configuration management for citesplice."""
import logging
import os
from dataclasses import dataclass
from typing import List, Optional, Tuple

from dotenv import load_dotenv

from .exceptions import ConfigurationError

DEFAULT_LANGUAGES = ("en-US", "ja-JP")
DEFAULT_BIBLIOGRAPHY_HEADINGS = ("Bibliography", "参考文献")
OUTPUT_FORMATS = ("html", "text")


def _split_list(value: str) -> List[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


@dataclass
class Config:
    """citesplice configuration.

    Attributes:
        locale_dir: Directory holding ``locales-<tag>.xml`` files. ``None``
            uses the locale directory bundled with citeproc-py.
        languages: Language tags whose locale files are loaded
        locale: Language tag handed to the style engine (``None`` keeps the
            style's default locale)
        output_format: Output format requested from the formatting engine
            (``html`` or ``text``)
        raw_format: Format tag of the ``RawInline`` nodes written to the tree
        citation_separator: Separator between occurrences of one citation node
        bibliography_headings: Header titles that mark the bibliography section
        log_level: Logging level name
        log_file: Optional log file path
    """

    locale_dir: Optional[str] = None
    languages: Tuple[str, ...] = DEFAULT_LANGUAGES
    locale: Optional[str] = None

    output_format: str = "html"
    raw_format: str = "markdown"
    citation_separator: str = "; "
    bibliography_headings: Tuple[str, ...] = DEFAULT_BIBLIOGRAPHY_HEADINGS

    log_level: str = "WARNING"
    log_file: Optional[str] = None

    def __post_init__(self):
        if self.output_format not in OUTPUT_FORMATS:
            raise ConfigurationError(
                f"Unsupported engine output format: {self.output_format!r}"
            )
        if not self.languages:
            raise ConfigurationError("At least one locale language is required")
        self.languages = tuple(self.languages)
        self.bibliography_headings = tuple(self.bibliography_headings)

    @property
    def log_level_value(self) -> int:
        """Numeric logging level for ``log_level``."""
        level = logging.getLevelName(self.log_level.upper())
        if not isinstance(level, int):
            raise ConfigurationError(f"Unknown log level: {self.log_level!r}")
        return level

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "Config":
        """Load configuration from environment variables.

        Args:
            env_file: Path to .env file (optional)

        Returns:
            Config instance with values from environment
        """
        if env_file:
            load_dotenv(env_file)
        else:
            load_dotenv()

        languages = os.getenv("CITESPLICE_LANGUAGES")
        headings = os.getenv("CITESPLICE_BIBLIOGRAPHY_HEADINGS")

        return cls(
            locale_dir=os.getenv("CITESPLICE_LOCALE_DIR") or None,
            languages=tuple(_split_list(languages)) if languages else DEFAULT_LANGUAGES,
            locale=os.getenv("CITESPLICE_LOCALE") or None,
            output_format=os.getenv("CITESPLICE_OUTPUT_FORMAT", "html"),
            raw_format=os.getenv("CITESPLICE_RAW_FORMAT", "markdown"),
            bibliography_headings=tuple(_split_list(headings))
            if headings
            else DEFAULT_BIBLIOGRAPHY_HEADINGS,
            log_level=os.getenv("CITESPLICE_LOG_LEVEL", "WARNING"),
            log_file=os.getenv("CITESPLICE_LOG_FILE") or None,
        )

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Load configuration from dictionary.

        Args:
            config_dict: Dictionary with configuration values

        Returns:
            Config instance
        """
        return cls(**{k: v for k, v in config_dict.items() if k in cls.__annotations__})
