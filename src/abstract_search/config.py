"""Centralized configuration for abstract-search using Pydantic Settings."""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from abstract_search.search.analyzers import ANALYZER_NAMES


class Settings(BaseSettings):
    """Strictly typed configuration loaded from ``ABSTRACT_SEARCH_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="ABSTRACT_SEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    # Corpus
    dump_path: str = Field(
        default="enwiki-latest-abstract1.xml",
        description="Path to a Wikipedia abstract dump (.xml or .xml.gz)",
    )
    document_limit: int | None = Field(default=None, ge=1, description="Stop loading after this many documents")

    # Analysis
    analyzer: str = Field(default="default", description="Analyzer name used for indexing and queries")
    stopwords: str = Field(default="", description="Comma-separated stopwords replacing the built-in list")
    stem_stopwords: bool = Field(
        default=False,
        description="Also stem words on the Snowball stop list (e.g. 'having' -> 'have')",
    )

    # Search
    strategy: Literal["index", "substring", "regex"] = Field(default="index", description="Search strategy")
    max_display_results: int = Field(default=20, ge=1, description="Maximum results printed by the CLI")

    # Logging
    log_level: str = Field(default="info", description="Logging level")
    log_json: bool = Field(default=True, description="Emit structured JSON logs")

    @field_validator("analyzer")
    @classmethod
    def _validate_analyzer(cls, value: str) -> str:
        normalized = value.lower()
        if normalized not in ANALYZER_NAMES:
            msg = f"Unknown analyzer '{value}'. Available: {sorted(ANALYZER_NAMES)}"
            raise ValueError(msg)
        return normalized

    def get_stopwords(self) -> list[str] | None:
        """Get configured stopwords, or None to use the analyzer defaults."""
        if not self.stopwords:
            return None
        return [word.strip().lower() for word in self.stopwords.split(",") if word.strip()]

    def analyzer_kwargs(self) -> dict[str, object]:
        """Keyword arguments for ``get_analyzer`` derived from these settings."""
        return {"stopwords": self.get_stopwords(), "stem_stopwords": self.stem_stopwords}
