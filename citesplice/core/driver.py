"""Cluster construction and in-order submission to the formatting engine."""
import logging
from typing import Iterable, List, Sequence

from ..exceptions import EngineResponseError
from .models import CitationCluster, CitationOccurrence, FormattedQueue

logger = logging.getLogger(__name__)

ALL_ITEMS = "*"


def build_cluster(occurrence: CitationOccurrence) -> CitationCluster:
    """Build the single-item cluster for one occurrence.

    The locator key is left out entirely when the occurrence has none.
    """
    item = {"id": occurrence.item_id}
    if occurrence.locator:
        item["locator"] = occurrence.locator
    return CitationCluster(
        cluster_id=f"{occurrence.item_id}_{occurrence.index}",
        items=(item,),
        note_index=occurrence.index,
    )


def select_text(result) -> str:
    """Pick the authoritative text from a ``process_cluster`` result.

    When the bibliography did not change the engine may report a revised
    (short or ibid) form as a second update entry; that text wins when
    present. Otherwise the first entry, the current cluster, is used.

    Raises:
        EngineResponseError: If the engine returned no update entries
    """
    bib_changed, updates = result
    if not updates:
        raise EngineResponseError("Formatting engine returned no citation updates")

    if not bib_changed and len(updates) > 1 and updates[1][1]:
        return updates[1][1]
    return updates[0][1]


class FormatterDriver:
    """Submit citation clusters to a formatting engine in document order.

    Attributes:
        engine: FormattingEngine instance
        store: ItemStore the engine resolves items from
    """

    def __init__(self, engine, store):
        self.engine = engine
        self.store = store

    def register_items(self, uncited_ids: Iterable[str] = ()) -> None:
        """Register citable items, then the uncited ones.

        ``*`` among the uncited ids stands for every item in the store.
        """
        self.engine.register_citable_items(self.store.item_ids)

        uncited = list(uncited_ids)
        if ALL_ITEMS in uncited:
            uncited = list(self.store.item_ids)
        for item_id in uncited:
            self.store.retrieve_item(item_id)

        logger.debug(f"Uncited items: {uncited}")
        if uncited:
            self.engine.register_uncited_items(uncited)

    def process(
        self,
        occurrence: CitationOccurrence,
        index: int,
        prior_clusters: Sequence[CitationCluster],
    ) -> str:
        """Format one occurrence.

        Args:
            occurrence: Occurrence to format
            index: Its position in document order
            prior_clusters: Every cluster built so far, in document order

        Returns:
            Rendered citation text (engine markup)
        """
        cluster = build_cluster(occurrence)
        predecessors = [
            (prior.cluster_id, prior.note_index) for prior in prior_clusters[:index]
        ]
        result = self.engine.process_cluster(cluster, predecessors, [])
        text = select_text(result)
        logger.debug(f"Cluster {cluster.cluster_id}: {text!r}")
        return text

    def format_all(self, occurrences: Sequence[CitationOccurrence]) -> FormattedQueue:
        """Format every occurrence strictly in order.

        Returns:
            FormattedQueue holding one text per occurrence
        """
        clusters: List[CitationCluster] = []
        queue = FormattedQueue()
        for index, occurrence in enumerate(occurrences):
            queue.append(self.process(occurrence, index, clusters))
            clusters.append(build_cluster(occurrence))

        logger.info(f"Formatted {len(queue)} citation cluster(s)")
        return queue
