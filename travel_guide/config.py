"""Centralized configuration using Pydantic Settings.

Configuration can be overridden via environment variables:
- GUIDE_SYNTHESIS_STRATEGY=model
- GUIDE_LLM_API_KEY=sk-... (OPENAI_API_KEY is also accepted)
- GUIDE_LLM_TIMEOUT_SECONDS=10
- GUIDE_CATALOG_DATA_DIR=/path/to/data
- etc.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import List, Literal, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CatalogConfig(BaseSettings):
    """Place catalog configuration.

    Environment variables prefixed with GUIDE_CATALOG_.
    """

    model_config = SettingsConfigDict(env_prefix="GUIDE_CATALOG_")

    data_dir: Path = Field(
        default_factory=lambda: Path(__file__).resolve().parent / "data"
    )
    places_file: str = "places.json"

    @property
    def places_path(self) -> Path:
        """Full path to the places JSON file."""
        return self.data_dir / self.places_file


class SynthesisConfig(BaseSettings):
    """Answer synthesis configuration.

    Environment variables prefixed with GUIDE_SYNTHESIS_.
    """

    model_config = SettingsConfigDict(env_prefix="GUIDE_SYNTHESIS_")

    strategy: Literal["template", "model"] = "template"


class LLMConfig(BaseSettings):
    """External chat model configuration (OpenAI-compatible API).

    Environment variables prefixed with GUIDE_LLM_.
    """

    model_config = SettingsConfigDict(env_prefix="GUIDE_LLM_", populate_by_name=True)

    api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("GUIDE_LLM_API_KEY", "OPENAI_API_KEY"),
    )
    base_url: str = "https://api.openai.com/v1"
    name: str = "gpt-4o-mini"
    temperature: float = 0.3
    max_tokens: int = 500
    timeout_seconds: float = 15.0

    @property
    def completions_url(self) -> str:
        """Full URL of the chat completions endpoint."""
        return f"{self.base_url.rstrip('/')}/chat/completions"


class ApiConfig(BaseSettings):
    """HTTP API configuration.

    Environment variables prefixed with GUIDE_API_.
    """

    model_config = SettingsConfigDict(env_prefix="GUIDE_API_")

    host: str = "127.0.0.1"
    port: int = 8000
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])


class ObservabilityConfig(BaseSettings):
    """Logging and observability configuration.

    Environment variables prefixed with GUIDE_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="GUIDE_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = False  # Set True for JSON logging


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

    Sub-configurations can be accessed via attributes:

        config = get_config()
        print(config.synthesis.strategy)
        print(config.catalog.places_path)

    Environment variables prefixed with GUIDE_.
    """

    model_config = SettingsConfigDict(env_prefix="GUIDE_")

    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    synthesis: SynthesisConfig = Field(default_factory=SynthesisConfig)
    llm: LLMConfig = Field(default_factory=LLMConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.

    Returns:
        The application configuration instance.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache.

    Call this in tests to ensure a fresh configuration is loaded.
    """
    get_config.cache_clear()
