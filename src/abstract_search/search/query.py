"""Conjunctive query resolution over an inverted index."""

from __future__ import annotations

import logging

from abstract_search.search.intersection import intersect_all
from abstract_search.search.inverted_index import InvertedIndex


logger = logging.getLogger(__name__)


class QueryResolver:
    """Resolve free-text queries with implicit AND across terms.

    The query is analyzed with the index's own analyzer. A query that
    analyzes to no terms, or that contains a term the index never saw,
    matches nothing.
    """

    def __init__(self, index: InvertedIndex) -> None:
        self.index = index

    def search(self, query: str) -> list[int]:
        """Return ascending IDs of documents containing every query term."""
        terms = self.index.analyzer.analyze(query)
        if not terms:
            logger.debug("Query %r has no searchable terms", query)
            return []

        postings: list[list[int]] = []
        for term in terms:
            ids = self.index.lookup(term)
            if ids is None:
                logger.debug("Term %r from query %r is not indexed", term, query)
                return []
            postings.append(ids)

        return intersect_all(postings)
