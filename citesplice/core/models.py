"""Data models for the citation pipeline."""
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ..exceptions import QueueDesyncError, QueueUnderflowError


@dataclass(frozen=True)
class CitationOccurrence:
    """One cited item inside a citation node.

    Attributes:
        item_id: Bibliographic item identifier
        suffix_text: Bracket-stripped plain-text fragments of the suffix
        index: Global 0-based position in document order
    """
    item_id: str
    suffix_text: Tuple[str, ...] = ()
    index: int = 0

    @property
    def locator(self) -> Optional[str]:
        """Locator text, or ``None`` when the suffix yields nothing."""
        locator = "|".join(self.suffix_text)
        return locator or None


@dataclass(frozen=True)
class CitationCluster:
    """A single formatting request submitted to the engine.

    Attributes:
        cluster_id: Unique id, ``<item_id>_<note_index>``
        items: Cluster items (``id`` plus optional ``locator``)
        note_index: Position of the cluster in document order
    """
    cluster_id: str
    items: Tuple[Dict[str, str], ...]
    note_index: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert cluster to the engine's citation-data shape."""
        return {
            "citationID": self.cluster_id,
            "citationItems": [dict(item) for item in self.items],
            "properties": {"noteIndex": self.note_index},
        }


@dataclass
class ExtractionResult:
    """Ordered citation occurrences found in a tree."""
    occurrences: List[CitationOccurrence] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.occurrences)

    def add(self, item_id: str, suffix_text: Iterable[str]) -> CitationOccurrence:
        """Append an occurrence with the next global index."""
        occurrence = CitationOccurrence(
            item_id=item_id,
            suffix_text=tuple(suffix_text),
            index=len(self.occurrences),
        )
        self.occurrences.append(occurrence)
        return occurrence


class FormattedQueue:
    """FIFO of formatted citation strings, one per occurrence."""

    def __init__(self, texts: Iterable[str] = ()):
        self._items = deque(texts)
        self.consumed = 0

    def __len__(self) -> int:
        return len(self._items)

    def append(self, text: str) -> None:
        self._items.append(text)

    def take(self, count: int) -> List[str]:
        """Dequeue ``count`` results from the front of the queue.

        Raises:
            QueueUnderflowError: If fewer than ``count`` results remain
        """
        if count > len(self._items):
            raise QueueUnderflowError(
                f"Citation node needs {count} formatted result(s) but only "
                f"{len(self._items)} remain after {self.consumed} consumed"
            )
        taken = [self._items.popleft() for _ in range(count)]
        self.consumed += count
        return taken

    def assert_drained(self) -> None:
        """Raise if formatted results are left after rewriting."""
        if self._items:
            raise QueueDesyncError(
                f"{len(self._items)} formatted result(s) left unconsumed "
                f"after {self.consumed} were placed in the document"
            )
