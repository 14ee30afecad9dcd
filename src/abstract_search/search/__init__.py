"""
Search indexing and query package.

This package provides a pure-Python conjunctive search stack:
- analyzers: Tokenizer and filters (lowercase, stop, Snowball stemming)
- inverted_index: Term -> posting list mapping
- intersection: Merge intersection of posting lists
- query: AND query resolution
- baseline: Substring/regex scans and the indexed strategy
- metrics: Latency collection for strategy comparison
"""
