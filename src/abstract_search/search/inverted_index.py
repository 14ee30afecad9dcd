"""In-memory inverted index mapping terms to posting lists."""

from __future__ import annotations

from bisect import bisect_left
from collections.abc import Iterable, Iterator
import logging
from typing import TYPE_CHECKING

from abstract_search.search.analyzers import Analyzer, StandardAnalyzer


if TYPE_CHECKING:
    from abstract_search.documents import Document


logger = logging.getLogger(__name__)


class InvertedIndex:
    """Term -> ascending, duplicate-free list of document IDs.

    The index is filled by one or more ``add`` passes and is read-only
    afterwards. Reads never mutate state, so concurrent readers need no lock
    once building is finished.

    Documents are expected in ascending ID order. In that case a term's
    posting list either already ends with the current ID (repeated term in
    the same document) or the ID is appended, an O(1) check. A document that
    arrives with a lower ID than a list's tail is placed with a binary
    search instead, so the ordering invariant holds for any insertion order.
    """

    def __init__(self, analyzer: Analyzer | None = None) -> None:
        self.analyzer = analyzer or StandardAnalyzer()
        self._postings: dict[str, list[int]] = {}
        self._doc_ids: set[int] = set()
        self._out_of_order_inserts = 0

    def add(self, documents: Iterable[Document]) -> int:
        """Index ``documents`` and return how many were processed."""
        processed = 0
        out_of_order_before = self._out_of_order_inserts
        for document in documents:
            self._add_terms(document.id, self.analyzer.analyze(document.text))
            self._doc_ids.add(document.id)
            processed += 1

        out_of_order = self._out_of_order_inserts - out_of_order_before
        if out_of_order:
            logger.debug("Placed %d postings out of insertion order", out_of_order)
        logger.debug("Indexed %d documents; vocabulary size is %d", processed, len(self._postings))
        return processed

    def _add_terms(self, doc_id: int, terms: Iterable[str]) -> None:
        postings = self._postings
        for term in terms:
            ids = postings.get(term)
            if ids is None:
                postings[term] = [doc_id]
                continue

            last = ids[-1]
            if last == doc_id:
                continue
            if last < doc_id:
                ids.append(doc_id)
                continue

            pos = bisect_left(ids, doc_id)
            if ids[pos] != doc_id:
                ids.insert(pos, doc_id)
                self._out_of_order_inserts += 1

    def lookup(self, term: str) -> list[int] | None:
        """Return the posting list for ``term`` or ``None`` if never seen.

        The returned list is owned by the index and must not be mutated.
        """
        return self._postings.get(term)

    def __contains__(self, term: object) -> bool:
        return term in self._postings

    def __len__(self) -> int:
        return len(self._postings)

    def terms(self) -> Iterator[str]:
        return iter(self._postings)

    @property
    def document_count(self) -> int:
        return len(self._doc_ids)
