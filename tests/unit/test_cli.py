"""Unit tests for the command line interface."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from abstract_search import cli
from abstract_search.cli import _format_document, _validate_args, build_argument_parser, main
from abstract_search.documents import Document


pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def keep_logging_handlers(monkeypatch):
    """Keep pytest's capture handlers in place while main() runs."""
    monkeypatch.setattr(cli, "configure_logging", lambda *args, **kwargs: None)


def test_search_prints_matching_documents(abstract_dump: Path, capsys) -> None:
    exit_code = main(["--dump", str(abstract_dump), "search", "Small", "wild", "cat"])

    lines = capsys.readouterr().out.splitlines()
    assert exit_code == 0
    assert [line.split("\t")[0] for line in lines] == ["0", "2"]
    assert lines[0] == "0\tWikipedia: Wildcat\tThe wildcat is a small wild cat species."


def test_search_with_no_results_prints_nothing(abstract_dump: Path, capsys) -> None:
    assert main(["--dump", str(abstract_dump), "search", "the"]) == 0
    assert capsys.readouterr().out == ""


def test_search_uses_dump_path_from_settings(abstract_dump: Path, monkeypatch, capsys) -> None:
    monkeypatch.setenv("ABSTRACT_SEARCH_DUMP_PATH", str(abstract_dump))

    assert main(["search", "dhole"]) == 0
    assert capsys.readouterr().out.startswith("1\tWikipedia: Dhole")


@pytest.mark.parametrize(
    ("strategy", "query", "expected"),
    [("substring", "Asia", ["1", "2"]), ("regex", "asia", ["1"])],
)
def test_search_with_baseline_strategy(abstract_dump: Path, capsys, strategy, query, expected) -> None:
    assert main(["--dump", str(abstract_dump), "search", query, "--strategy", strategy]) == 0

    lines = capsys.readouterr().out.splitlines()
    assert [line.split("\t")[0] for line in lines] == expected


def test_search_truncates_output(abstract_dump: Path, capsys) -> None:
    assert main(["--dump", str(abstract_dump), "search", "wild", "--max-results", "1"]) == 0

    lines = capsys.readouterr().out.splitlines()
    assert lines == ["0\tWikipedia: Wildcat\tThe wildcat is a small wild cat species.", "... 2 more"]


def test_limit_restricts_loaded_documents(abstract_dump: Path, capsys) -> None:
    assert main(["--dump", str(abstract_dump), "--limit", "1", "search", "wild"]) == 0

    assert len(capsys.readouterr().out.splitlines()) == 1


def test_bench_prints_stats_per_strategy(abstract_dump: Path, capsys) -> None:
    exit_code = main(["--dump", str(abstract_dump), "bench", "small wild cat", "dhole", "--repeat", "2"])

    payloads = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
    assert exit_code == 0
    assert {payload["strategy"] for payload in payloads} == {"index", "substring", "regex"}
    index_stats = next(payload for payload in payloads if payload["strategy"] == "index")
    assert index_stats["count"] == 4
    assert index_stats["results"]["mean"] == 1.5


def test_bench_keeps_every_run_beyond_default_window(abstract_dump: Path, capsys) -> None:
    exit_code = main(["--dump", str(abstract_dump), "bench", "wild", "--repeat", "400"])

    payloads = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
    assert exit_code == 0
    assert {payload["strategy"]: payload["count"] for payload in payloads} == {
        "index": 400,
        "substring": 400,
        "regex": 400,
    }


def test_missing_dump_returns_error(tmp_path: Path) -> None:
    assert main(["--dump", str(tmp_path / "missing.xml"), "search", "cat"]) == 1


def test_malformed_dump_returns_error(tmp_path: Path) -> None:
    dump = tmp_path / "broken.xml"
    dump.write_text("<feed><doc>")

    assert main(["--dump", str(dump), "search", "cat"]) == 1


def test_invalid_settings_return_error(abstract_dump: Path, monkeypatch) -> None:
    monkeypatch.setenv("ABSTRACT_SEARCH_STRATEGY", "bm25")

    assert main(["--dump", str(abstract_dump), "search", "cat"]) == 1


def test_unknown_analyzer_returns_error(abstract_dump: Path, monkeypatch) -> None:
    monkeypatch.setenv("ABSTRACT_SEARCH_ANALYZER", "klingon")

    assert main(["--dump", str(abstract_dump), "search", "cat"]) == 1


def test_unknown_analyzer_rejected_for_scan_strategy(abstract_dump: Path, monkeypatch) -> None:
    monkeypatch.setenv("ABSTRACT_SEARCH_ANALYZER", "klingon")

    assert main(["--dump", str(abstract_dump), "search", "cat", "--strategy", "regex"]) == 1


def test_invalid_limit_is_usage_error(abstract_dump: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["--dump", str(abstract_dump), "--limit", "0", "search", "cat"])

    assert excinfo.value.code == 2


def test_command_is_required() -> None:
    with pytest.raises(SystemExit) as excinfo:
        build_argument_parser().parse_args([])

    assert excinfo.value.code == 2


def test_unknown_strategy_is_usage_error() -> None:
    with pytest.raises(SystemExit):
        build_argument_parser().parse_args(["search", "cat", "--strategy", "bm25"])


def test_validate_args_rejects_bad_repeat() -> None:
    args = build_argument_parser().parse_args(["bench", "cat", "--repeat", "0"])

    with pytest.raises(ValueError, match="--repeat must be >= 1"):
        _validate_args(args)


def test_format_document_collapses_whitespace() -> None:
    document = Document(id=7, title="Lynx", text="Medium\n  wild   cat")

    assert _format_document(document) == "7\tLynx\tMedium wild cat"
