"""Search engine facade tying documents, index and query resolution together."""

from __future__ import annotations

from collections.abc import Sequence
import logging
from pathlib import Path
import time

from abstract_search.documents import Document, load_documents
from abstract_search.search.analyzers import Analyzer
from abstract_search.search.inverted_index import InvertedIndex
from abstract_search.search.query import QueryResolver


logger = logging.getLogger(__name__)


class SearchEngine:
    """Owns the document collection and its inverted index.

    The index is built once on construction; afterwards the engine only
    reads from it. Query results are returned as document IDs or re-associated
    with the stored documents.
    """

    def __init__(self, documents: Sequence[Document], analyzer: Analyzer | None = None) -> None:
        self.documents = list(documents)
        self._by_id = {document.id: document for document in self.documents}
        self.index = InvertedIndex(analyzer)

        start = time.perf_counter()
        self.index.add(self.documents)
        self.build_seconds = time.perf_counter() - start
        logger.info(
            "Indexed %d documents into %d terms in %.3fs",
            len(self.documents),
            len(self.index),
            self.build_seconds,
        )

        self.resolver = QueryResolver(self.index)

    @classmethod
    def from_dump(
        cls,
        path: str | Path,
        *,
        limit: int | None = None,
        analyzer: Analyzer | None = None,
    ) -> SearchEngine:
        """Load an abstract dump and index it."""
        return cls(load_documents(path, limit=limit), analyzer=analyzer)

    def search_ids(self, query: str) -> list[int]:
        return self.resolver.search(query)

    def search(self, query: str) -> list[Document]:
        return [self._by_id[doc_id] for doc_id in self.resolver.search(query)]

    def get(self, doc_id: int) -> Document:
        """Return the document with ``doc_id``; raises ``KeyError`` if unknown."""
        try:
            return self._by_id[doc_id]
        except KeyError:
            raise KeyError(f"Unknown document id {doc_id}") from None

    def __len__(self) -> int:
        return len(self.documents)
