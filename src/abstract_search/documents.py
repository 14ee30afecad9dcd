"""Document model and Wikipedia abstract dump loading.

Dumps look like::

    <feed>
      <doc>
        <title>Wikipedia: Catopuma</title>
        <url>https://en.wikipedia.org/wiki/Catopuma</url>
        <abstract>Catopuma is a genus containing two Asian small wild cat species.</abstract>
        <links>...</links>
      </doc>
    </feed>

Documents receive dense, zero-based IDs in file order.
"""

from __future__ import annotations

from collections.abc import Iterator
import gzip
import logging
from pathlib import Path
from typing import IO

from lxml import etree  # type: ignore[import-untyped]
from pydantic import BaseModel, ConfigDict, Field


logger = logging.getLogger(__name__)


class Document(BaseModel):
    """Immutable document; the index refers to it only by ``id``."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=0)
    title: str = ""
    url: str = ""
    text: str = ""


class DocumentLoadError(RuntimeError):
    """Raised when a dump cannot be parsed into documents."""


def _child_text(element: etree._Element, tag: str) -> str:
    child = element.find(tag)
    if child is None or child.text is None:
        return ""
    return child.text


def _open_dump(path: Path) -> IO[bytes]:
    if path.suffix == ".gz":
        return gzip.open(path, "rb")
    return path.open("rb")


def iter_documents(source: IO[bytes], limit: int | None = None) -> Iterator[Document]:
    """Stream documents out of an abstract dump file object.

    Elements are cleared once converted so memory stays flat on large dumps.
    """
    if limit is not None and limit < 1:
        raise ValueError("limit must be >= 1")

    doc_id = 0
    try:
        for _event, element in etree.iterparse(source, events=("end",), tag="doc"):
            yield Document(
                id=doc_id,
                title=_child_text(element, "title"),
                url=_child_text(element, "url"),
                text=_child_text(element, "abstract"),
            )
            doc_id += 1

            element.clear()
            while element.getprevious() is not None:
                del element.getparent()[0]

            if limit is not None and doc_id >= limit:
                return
    except etree.XMLSyntaxError as exc:
        raise DocumentLoadError(f"Malformed abstract dump after {doc_id} documents: {exc}") from exc


def load_documents(path: str | Path, limit: int | None = None) -> list[Document]:
    """Load every document of the dump at ``path`` (``.gz`` is supported)."""
    dump_path = Path(path)
    if not dump_path.is_file():
        raise FileNotFoundError(f"Abstract dump {dump_path} not found")

    logger.info("Loading documents from %s", dump_path)
    with _open_dump(dump_path) as source:
        try:
            documents = list(iter_documents(source, limit=limit))
        except (OSError, EOFError) as exc:
            raise DocumentLoadError(f"Failed to read abstract dump {dump_path}: {exc}") from exc

    logger.info("Loaded %d documents from %s", len(documents), dump_path)
    return documents
