"""Base formatting engine interface."""
from abc import ABC, abstractmethod
from typing import Any, Iterable, List, Sequence, Tuple

from ..core.models import CitationCluster

# (cluster_id, note_index)
ClusterRef = Tuple[str, int]
# (bibliography_changed, [[cluster_id, text], ...])
ClusterResult = Tuple[bool, List[List[Any]]]


class FormattingEngine(ABC):
    """A stateful CSL formatting engine.

    Clusters must be submitted one at a time in document order: the
    rendering of a cluster depends on every cluster submitted before it.
    """

    @abstractmethod
    def configure_output_format(self, fmt: str) -> None:
        """Select the markup the engine renders to."""
        pass

    @abstractmethod
    def register_citable_items(self, item_ids: Iterable[str]) -> None:
        """Register the ids that clusters may reference."""
        pass

    @abstractmethod
    def register_uncited_items(self, item_ids: Iterable[str]) -> None:
        """Register ids that belong in the bibliography without being cited."""
        pass

    @abstractmethod
    def process_cluster(
        self,
        cluster: CitationCluster,
        predecessors: Sequence[ClusterRef],
        successors: Sequence[ClusterRef] = (),
    ) -> ClusterResult:
        """Render ``cluster`` given the clusters placed before and after it.

        Returns:
            Tuple of a flag telling whether the bibliography changed and a
            list of ``[cluster_id, text]`` update entries. The first entry is
            the current cluster; further entries revise earlier clusters.
        """
        pass

    @abstractmethod
    def build_bibliography(self) -> Tuple[Any, List[str]]:
        """Return ``(metadata, fragments)`` for the registered items."""
        pass
