"""Command line interface: query an abstract dump or benchmark strategies."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
import json
import logging
from pathlib import Path
import sys

from pydantic import ValidationError

from abstract_search.config import Settings
from abstract_search.documents import Document, DocumentLoadError, load_documents
from abstract_search.engine import SearchEngine
from abstract_search.observability.logging import configure_logging
from abstract_search.search.analyzers import get_analyzer
from abstract_search.search.baseline import STRATEGY_NAMES, SearchStrategy, get_strategy
from abstract_search.search.metrics import MetricsCollector, SearchMetrics


logger = logging.getLogger(__name__)


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="abstract-search",
        description="Full-text AND search over a Wikipedia abstract dump",
    )
    parser.add_argument(
        "--dump",
        type=Path,
        help="Path to the abstract dump (defaults to ABSTRACT_SEARCH_DUMP_PATH)",
    )
    parser.add_argument(
        "--limit",
        type=int,
        help="Only load the first N documents",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    search = subparsers.add_parser("search", help="Run a query and print matching documents")
    search.add_argument("query", nargs="+", help="Query text")
    search.add_argument(
        "--strategy",
        choices=STRATEGY_NAMES,
        help="Search strategy (defaults to ABSTRACT_SEARCH_STRATEGY)",
    )
    search.add_argument(
        "--max-results",
        type=int,
        help="Maximum documents printed (defaults to ABSTRACT_SEARCH_MAX_DISPLAY_RESULTS)",
    )

    bench = subparsers.add_parser("bench", help="Compare latency of every strategy")
    bench.add_argument("query", nargs="+", help="Queries to run; quote multi-word queries")
    bench.add_argument(
        "--repeat",
        type=int,
        default=5,
        help="Runs per query and strategy (default: 5)",
    )
    return parser


def _validate_args(args: argparse.Namespace) -> None:
    if args.limit is not None and args.limit < 1:
        raise ValueError("--limit must be >= 1")
    if getattr(args, "max_results", None) is not None and args.max_results < 1:
        raise ValueError("--max-results must be >= 1")
    if getattr(args, "repeat", 1) < 1:
        raise ValueError("--repeat must be >= 1")


def _format_document(document: Document) -> str:
    text = " ".join(document.text.split())
    return f"{document.id}\t{document.title}\t{text}"


def _run_search(args: argparse.Namespace, settings: Settings, documents: list[Document]) -> int:
    query = " ".join(args.query)
    strategy_name = args.strategy or settings.strategy
    max_results = args.max_results or settings.max_display_results

    if strategy_name == "index":
        analyzer = get_analyzer(settings.analyzer, **settings.analyzer_kwargs())
        engine = SearchEngine(documents, analyzer=analyzer)
        strategy = get_strategy(strategy_name, engine.documents, index=engine.index)
    else:
        strategy = get_strategy(strategy_name, documents)

    collector = MetricsCollector()
    with collector.track() as timer:
        results = strategy.search(query)
    logger.info(
        "Search %r with %s strategy: %d results in %.3fms",
        query,
        strategy_name,
        len(results),
        timer.elapsed_ms,
    )

    for document in results[:max_results]:
        sys.stdout.write(_format_document(document) + "\n")
    if len(results) > max_results:
        sys.stdout.write(f"... {len(results) - max_results} more\n")
    return 0


def _run_bench(args: argparse.Namespace, settings: Settings, documents: list[Document]) -> int:
    analyzer = get_analyzer(settings.analyzer, **settings.analyzer_kwargs())
    engine = SearchEngine(documents, analyzer=analyzer)
    strategies: list[SearchStrategy] = [
        get_strategy(name, engine.documents, index=engine.index) for name in STRATEGY_NAMES
    ]

    # One slot per run, so no strategy loses records to the window.
    collector = MetricsCollector(window_size=len(args.query) * len(strategies) * args.repeat)
    for query in args.query:
        query_terms = len(analyzer.analyze(query))
        for strategy in strategies:
            for _ in range(args.repeat):
                with collector.track() as timer:
                    results = strategy.search(query)
                collector.record_search(
                    SearchMetrics(
                        strategy=strategy.name,
                        latency_ms=timer.elapsed_ms,
                        result_count=len(results),
                        query_terms=query_terms,
                    )
                )

    for name, stats in collector.get_stats().items():
        sys.stdout.write(json.dumps({"strategy": name, **stats}, sort_keys=True) + "\n")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_argument_parser()
    args = parser.parse_args(argv)

    try:
        _validate_args(args)
    except ValueError as exc:
        parser.error(str(exc))

    try:
        settings = Settings()  # type: ignore[call-arg]
    except ValidationError as exc:
        configure_logging("INFO", json_output=False)
        logger.error("Invalid configuration: %s", exc)
        return 1

    configure_logging(settings.log_level, settings.log_json)

    dump_path = args.dump or Path(settings.dump_path)
    limit = args.limit or settings.document_limit
    try:
        documents = load_documents(dump_path, limit=limit)
    except FileNotFoundError as exc:
        logger.error("%s", exc)
        return 1
    except DocumentLoadError as exc:
        logger.error("Could not load documents: %s", exc)
        return 1

    try:
        if args.command == "bench":
            return _run_bench(args, settings, documents)
        return _run_search(args, settings, documents)
    except ValueError as exc:
        logger.error("%s", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
