"""Interchangeable search strategies.

The substring and regex scans exist as baselines to compare against the
inverted index. All strategies share the ``search(text) -> documents``
contract so they can be swapped in the CLI and in benchmarks.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
import re
from typing import Protocol

from abstract_search.documents import Document
from abstract_search.search.analyzers import Analyzer
from abstract_search.search.inverted_index import InvertedIndex
from abstract_search.search.query import QueryResolver


class SearchStrategy(Protocol):
    """Protocol implemented by search strategies."""

    name: str

    def search(self, text: str) -> list[Document]:  # pragma: no cover - interface definition
        ...


class SubstringSearch:
    """Linear scan keeping documents whose text contains ``text`` verbatim."""

    name = "substring"

    def __init__(self, documents: Sequence[Document]) -> None:
        self.documents = documents

    def search(self, text: str) -> list[Document]:
        return [document for document in self.documents if text in document.text]


class RegexSearch:
    """Linear scan matching ``text`` as a whole word, ignoring case."""

    name = "regex"

    def __init__(self, documents: Sequence[Document]) -> None:
        self.documents = documents

    def search(self, text: str) -> list[Document]:
        pattern = re.compile(rf"\b{re.escape(text)}\b", re.IGNORECASE)
        return [document for document in self.documents if pattern.search(document.text)]


class IndexedSearch:
    """Inverted-index lookup with conjunctive matching."""

    name = "index"

    def __init__(
        self,
        documents: Sequence[Document],
        *,
        index: InvertedIndex | None = None,
        analyzer: Analyzer | None = None,
    ) -> None:
        self.documents = documents
        if index is None:
            index = InvertedIndex(analyzer)
            index.add(documents)
        self.index = index
        self.resolver = QueryResolver(index)
        self._by_id = {document.id: document for document in documents}

    def search(self, text: str) -> list[Document]:
        return [self._by_id[doc_id] for doc_id in self.resolver.search(text)]


_STRATEGY_FACTORIES: dict[str, Callable[..., SearchStrategy]] = {
    "index": lambda documents, index: IndexedSearch(documents, index=index),
    "substring": lambda documents, index: SubstringSearch(documents),
    "regex": lambda documents, index: RegexSearch(documents),
}

STRATEGY_NAMES = tuple(_STRATEGY_FACTORIES)


def get_strategy(name: str, documents: Sequence[Document], *, index: InvertedIndex | None = None) -> SearchStrategy:
    """Build the strategy registered under ``name`` over ``documents``.

    A prebuilt ``index`` is reused by the indexed strategy and ignored by
    the scans.
    """
    normalized = name.lower()
    if normalized not in _STRATEGY_FACTORIES:
        msg = f"Unknown search strategy '{name}'. Available: {sorted(_STRATEGY_FACTORIES)}"
        raise ValueError(msg)
    return _STRATEGY_FACTORIES[normalized](documents, index)
