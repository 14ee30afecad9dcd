"""Shared test fixtures and configuration."""

import os

import pytest

from abstract_search.documents import Document


# Complete test environment that overrides every config value
TEST_ENV = {
    "ABSTRACT_SEARCH_DUMP_PATH": "missing-dump.xml",
    "ABSTRACT_SEARCH_ANALYZER": "default",
    "ABSTRACT_SEARCH_STOPWORDS": "",
    "ABSTRACT_SEARCH_STEM_STOPWORDS": "false",
    "ABSTRACT_SEARCH_STRATEGY": "index",
    "ABSTRACT_SEARCH_MAX_DISPLAY_RESULTS": "20",
    "ABSTRACT_SEARCH_LOG_LEVEL": "info",
    "ABSTRACT_SEARCH_LOG_JSON": "false",
}


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Drop stray ABSTRACT_SEARCH_* variables and set test defaults."""
    for key in list(os.environ):
        if key.upper().startswith("ABSTRACT_SEARCH_"):
            monkeypatch.delenv(key, raising=False)
    for key, value in TEST_ENV.items():
        monkeypatch.setenv(key, value)


@pytest.fixture
def cat_documents() -> list[Document]:
    """Three short abstracts about wild cats and dogs."""
    return [
        Document(id=0, title="Wildcat", url="https://en.wikipedia.org/wiki/Wildcat", text="Small wild cat"),
        Document(id=1, title="Dhole", url="https://en.wikipedia.org/wiki/Dhole", text="Large wild dog"),
        Document(
            id=2,
            title="Catopuma",
            url="https://en.wikipedia.org/wiki/Catopuma",
            text="Catopuma is a small wild cat",
        ),
    ]


ABSTRACT_DUMP = """<?xml version="1.0" encoding="utf-8"?>
<feed>
<doc>
<title>Wikipedia: Wildcat</title>
<url>https://en.wikipedia.org/wiki/Wildcat</url>
<abstract>The wildcat is a small wild cat species.</abstract>
<links>
<sublink linktype="nav"><anchor>Taxonomy</anchor><link>https://en.wikipedia.org/wiki/Wildcat#Taxonomy</link></sublink>
</links>
</doc>
<doc>
<title>Wikipedia: Dhole</title>
<url>https://en.wikipedia.org/wiki/Dhole</url>
<abstract>The dhole is a large wild dog native to Asia.</abstract>
<links></links>
</doc>
<doc>
<title>Wikipedia: Catopuma</title>
<url>https://en.wikipedia.org/wiki/Catopuma</url>
<abstract>Catopuma is a genus containing two Asian small wild cat species.</abstract>
</doc>
</feed>
"""


@pytest.fixture
def abstract_dump(tmp_path):
    """Write a three-document abstract dump and return its path."""
    path = tmp_path / "abstracts.xml"
    path.write_text(ABSTRACT_DUMP, encoding="utf-8")
    return path
