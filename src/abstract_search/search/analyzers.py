"""Analyzer utilities for the abstract search stack.

Text is turned into terms by a composable tokenizer/filter pipeline. The
same analyzer must be used for indexing and for query normalization,
otherwise query terms will not line up with index keys.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass
import re
from typing import Protocol

import Stemmer


@dataclass
class Token:
    """Represents a token emitted by analyzers."""

    text: str
    position: int
    start_char: int
    end_char: int

    def copy_with(self, **updates: object) -> Token:
        data = {
            "text": self.text,
            "position": self.position,
            "start_char": self.start_char,
            "end_char": self.end_char,
        }
        data.update(updates)
        return Token(**data)  # type: ignore[arg-type]


class Analyzer(Protocol):
    """Protocol implemented by analyzers."""

    def __call__(self, text: str) -> list[Token]:  # pragma: no cover - interface definition
        ...

    def analyze(self, text: str) -> list[str]:  # pragma: no cover - interface definition
        ...


class Tokenizer(Protocol):
    """Protocol implemented by tokenizers."""

    def __call__(self, text: str) -> Iterator[Token]:  # pragma: no cover - interface definition
        ...


class TokenFilter(Protocol):
    """Protocol implemented by token filters."""

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:  # pragma: no cover - interface definition
        ...


# Runs of letters and numerals; everything else (including "_") separates.
WORD_PATTERN = r"[^\W_]+"


class RegexTokenizer:
    """Regex-based tokenizer that yields word tokens."""

    def __init__(self, pattern: str = WORD_PATTERN, flags: int = re.UNICODE) -> None:
        self.pattern = re.compile(pattern, flags)

    def __call__(self, text: str) -> Iterator[Token]:
        for position, match in enumerate(self.pattern.finditer(text)):
            yield Token(
                text=match.group(0),
                position=position,
                start_char=match.start(),
                end_char=match.end(),
            )


class LowercaseFilter:
    """Filter that lowercases token text."""

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            if token.text.islower():
                yield token
            else:
                yield token.copy_with(text=token.text.lower())


DEFAULT_STOPWORDS = [
    "a",
    "and",
    "be",
    "have",
    "i",
    "in",
    "of",
    "that",
    "the",
    "to",
]

# Snowball's English stop list. The stemmer leaves these words untouched
# unless asked otherwise, so "having" and "being" keep their surface form.
SNOWBALL_ENGLISH_STOPWORDS = frozenset(
    """
    a about above after again against all am an and any are as at be because
    been before being below between both but by can did do does doing don down
    during each few for from further had has have having he her here hers
    herself him himself his how i if in into is it its itself just me more most
    my myself no nor not now of off on once only or other our ours ourselves
    out over own same she should so some such than that the their theirs them
    themselves then there these they this those through to too under until up
    very was we were what when where which while who whom why will with you
    your yours yourself yourselves
    """.split()
)


class StopFilter:
    """Removes stopwords from the stream.

    Matching is exact, so the filter has to run after lowercasing.
    """

    def __init__(self, stopwords: Sequence[str] | None = None) -> None:
        vocab = stopwords if stopwords is not None else DEFAULT_STOPWORDS
        self.stopwords = frozenset(word.lower() for word in vocab)

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            if token.text not in self.stopwords:
                yield token


class SnowballStemFilter:
    """Applies the Snowball stemmer from PyStemmer to each token."""

    def __init__(self, language: str = "english", *, stem_stopwords: bool = False) -> None:
        self.language = language
        self.stem_stopwords = stem_stopwords
        self.protected = frozenset() if stem_stopwords or language != "english" else SNOWBALL_ENGLISH_STOPWORDS
        self.stemmer = Stemmer.Stemmer(language)

    def __getstate__(self) -> object:
        data = self.__dict__.copy()
        del data["stemmer"]
        return data

    def __setstate__(self, state: dict) -> None:
        self.__dict__.update(state)
        self.stemmer = Stemmer.Stemmer(self.language)

    def stem(self, word: str) -> str:
        if word in self.protected:
            return word
        return self.stemmer.stemWord(word)

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            stemmed = self.stem(token.text)
            yield token if stemmed == token.text else token.copy_with(text=stemmed)


class AnalyzerPipeline:
    """Composable analyzer pipeline (tokenizer + filters)."""

    def __init__(self, tokenizer: Tokenizer, filters: Sequence[TokenFilter] | None = None) -> None:
        self.tokenizer = tokenizer
        self.filters = list(filters or [])

    def __call__(self, text: str) -> list[Token]:
        stream: Iterable[Token] = self.tokenizer(text)
        for token_filter in self.filters:
            stream = token_filter(stream)
        tokens = list(stream)
        for idx, token in enumerate(tokens):  # normalize positions post-filtering
            token.position = idx
        return tokens


class StandardAnalyzer:
    """Tokenize, lowercase, drop stopwords, stem."""

    def __init__(
        self,
        *,
        stopwords: Sequence[str] | None = None,
        apply_stemming: bool = True,
        stem_stopwords: bool = False,
        language: str = "english",
    ) -> None:
        stop_filter = StopFilter(stopwords)
        filters: list[TokenFilter] = [LowercaseFilter(), stop_filter]
        if apply_stemming:
            # Some stems collapse onto a stopword ("ands" -> "and"), so filter again.
            filters.extend([SnowballStemFilter(language, stem_stopwords=stem_stopwords), stop_filter])
        self.pipeline = AnalyzerPipeline(RegexTokenizer(), filters)

    def __call__(self, text: str) -> list[Token]:
        return self.pipeline(text)

    def analyze(self, text: str) -> list[str]:
        """Return the normalized terms of ``text`` in source order."""
        return [token.text for token in self.pipeline(text)]


_ANALYZER_FACTORIES: dict[str, Callable[..., Analyzer]] = {
    "default": lambda **kwargs: StandardAnalyzer(**kwargs),
    "english": lambda **kwargs: StandardAnalyzer(**kwargs),
    "english-nostem": lambda **kwargs: StandardAnalyzer(apply_stemming=False, **kwargs),
}

ANALYZER_NAMES = tuple(_ANALYZER_FACTORIES)


def get_analyzer(name: str | None = None, **kwargs: object) -> Analyzer:
    """Return analyzer by name, defaulting to the standard analyzer.

    Extra keyword arguments (``stopwords``, ``stem_stopwords``) are passed
    through to the analyzer constructor.
    """

    if name is None:
        return _ANALYZER_FACTORIES["default"](**kwargs)
    normalized = name.lower()
    if normalized not in _ANALYZER_FACTORIES:
        msg = f"Unknown analyzer '{name}'. Available: {sorted(_ANALYZER_FACTORIES)}"
        raise ValueError(msg)
    return _ANALYZER_FACTORIES[normalized](**kwargs)


_DEFAULT_ANALYZER: StandardAnalyzer | None = None


def analyze(text: str) -> list[str]:
    """Analyze ``text`` with a shared default analyzer."""
    global _DEFAULT_ANALYZER
    if _DEFAULT_ANALYZER is None:
        _DEFAULT_ANALYZER = StandardAnalyzer()
    return _DEFAULT_ANALYZER.analyze(text)
