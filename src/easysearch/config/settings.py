"""Application settings — Pydantic-based configuration with YAML and env var support.

Configuration is loaded from (in order of precedence):
  1. Environment variables (EASYSEARCH_ prefix)
  2. YAML config file (if specified)
  3. Default values
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings


class IndexDefaults(BaseModel):
    """Default options every index starts from."""

    format: str = Field(default="mongo", description="Default output shape selector")
    limit: int = Field(default=10, ge=1, description="Default maximum number of results")
    use: str = Field(default="minimongo", description="Default searcher kind")


class RegistrySettings(BaseModel):
    """Index registry behavior."""

    defaults: IndexDefaults = Field(default_factory=IndexDefaults)
    persist_call_overrides: bool = Field(
        default=False,
        description="Write per-call search options back into the stored index configuration",
    )


class MemorySearcherSettings(BaseModel):
    """In-process collection searcher (kind ``minimongo``)."""

    enabled: bool = Field(default=True, description="Register the in-memory searcher at startup")


class ElasticSearchSettings(BaseModel):
    """Elasticsearch / OpenSearch searcher (kind ``elastic-search``)."""

    enabled: bool = Field(default=False, description="Register the Elasticsearch searcher at startup")
    base_url: str = Field(default="http://localhost:9200", description="Cluster URL")
    username: str | None = Field(default=None, description="HTTP basic-auth username")
    password: str | None = Field(default=None, description="HTTP basic-auth password")
    timeout: float = Field(default=30.0, gt=0, description="HTTP request timeout in seconds")


class SearcherSettings(BaseModel):
    """Built-in searcher configuration."""

    memory: MemorySearcherSettings = Field(default_factory=MemorySearcherSettings)
    elasticsearch: ElasticSearchSettings = Field(default_factory=ElasticSearchSettings)


class ObservabilitySettings(BaseModel):
    """Observability configuration."""

    log_level: str = Field(default="info", description="Log level: debug, info, warning, error")
    log_format: str = Field(default="json", description="Log format: json, console")


class Settings(BaseSettings):
    """Root application settings.

    Configuration is loaded from environment variables with the EASYSEARCH_ prefix.
    Nested settings use double underscores: EASYSEARCH_REGISTRY__DEFAULTS__LIMIT=25

    Example:
        EASYSEARCH_REGISTRY__PERSIST_CALL_OVERRIDES=true
        EASYSEARCH_SEARCHERS__ELASTICSEARCH__ENABLED=true
        EASYSEARCH_SEARCHERS__ELASTICSEARCH__BASE_URL=http://es:9200
    """

    model_config = {
        "env_prefix": "EASYSEARCH_",
        "env_nested_delimiter": "__",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    # Component settings
    registry: RegistrySettings = Field(default_factory=RegistrySettings)
    searchers: SearcherSettings = Field(default_factory=SearcherSettings)
    indexes: dict[str, dict[str, Any]] = Field(
        default_factory=dict,
        description="Indexes declared at startup: name -> create_search_index options",
    )
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    @classmethod
    def from_yaml(cls, path: str | Path) -> Settings:
        """Load settings from a YAML configuration file.

        Values from the YAML file are used as defaults; environment variables
        still take precedence.

        Args:
            path: Path to the YAML config file.

        Returns:
            Populated Settings instance.
        """
        import yaml  # type: ignore[import-untyped]

        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)
