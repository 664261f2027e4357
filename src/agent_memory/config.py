"""Configuration management for the agent memory package."""

import os
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from agent_memory.constants import (
    DEFAULT_CHROMA_DATABASE,
    DEFAULT_CHROMA_TENANT,
    DEFAULT_EMBEDDING_MODEL,
    DEFAULT_EMBEDDING_PROVIDER,
    DEFAULT_HOME_DIRNAME,
    DEFAULT_LOG_FORMAT,
    DEFAULT_LOG_LEVEL,
    DEFAULT_PROVIDER,
    DEFAULT_SEARCH_RESULTS,
    DEFAULT_TRACE_SAMPLE_RATE,
    VALID_EMBEDDING_PROVIDERS,
    VALID_LOG_FORMATS,
    VALID_LOG_LEVELS,
)


class MemoryProviderType(str, Enum):
    """Memory storage provider type."""

    CHROMA_DB = "chroma-db"  # File-based ChromaDB (default)
    CHROMA_EPHEMERAL = "chroma-ephemeral"  # In-process ChromaDB, nothing persisted
    CHROMA_CLOUD = "chroma-cloud"  # Hosted ChromaDB
    LANCEDB = "lancedb"
    POSTGRES = "postgres"  # PostgreSQL with pgvector
    QDRANT = "qdrant"
    IN_MEMORY = "in-memory"  # Local testing

    @classmethod
    def parse(cls, value: "str | MemoryProviderType") -> "MemoryProviderType":
        """Parse a provider name; case-insensitive, `_` and `-` interchangeable."""
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower().replace("_", "-")
        return cls(normalized)


class ObservabilityConfig(BaseModel):
    """Configuration for logging and tracing.

    Attributes:
        logging_enabled: Enable structured logging setup
        tracing_enabled: Enable OpenTelemetry tracing
        sample_rate: Trace sampling rate (0.0-1.0)
    """

    logging_enabled: bool = Field(default=True, description="Enable structured logging")
    tracing_enabled: bool = Field(default=False, description="Enable OpenTelemetry tracing")
    sample_rate: float = Field(
        default=DEFAULT_TRACE_SAMPLE_RATE, ge=0.0, le=1.0, description="Trace sampling rate"
    )


class MemorySettings(BaseModel):
    """Settings for memory modules and their providers.

    Attributes:
        home: Base directory for file-based stores
        provider: Provider used when a memory module does not name one
        chroma_path: Directory for the persistent ChromaDB store
        chroma_cloud_api_key: API key for hosted ChromaDB
        chroma_cloud_tenant: Hosted ChromaDB tenant
        chroma_cloud_database: Hosted ChromaDB database
        lancedb_uri: LanceDB database URI
        postgres_url: SQLAlchemy URL of a pgvector-enabled PostgreSQL database
        qdrant_url: Qdrant server URL (local on-disk mode when unset)
        qdrant_api_key: Qdrant API key
        qdrant_path: Directory for local on-disk Qdrant
        embedding_provider: Client-side embedding implementation
        embedding_model: sentence-transformers model name
        default_search_results: Default number of search results
        log_level: Logging level
        log_format: Logging format (json or text)
        observability: Logging and tracing configuration
    """

    home: Path = Field(default_factory=lambda: Path.home() / DEFAULT_HOME_DIRNAME)
    provider: MemoryProviderType = Field(default=MemoryProviderType.CHROMA_DB)

    chroma_path: Path | None = Field(default=None, description="Persistent ChromaDB path")
    chroma_cloud_api_key: str | None = Field(default=None)
    chroma_cloud_tenant: str = Field(default=DEFAULT_CHROMA_TENANT)
    chroma_cloud_database: str = Field(default=DEFAULT_CHROMA_DATABASE)

    lancedb_uri: str | None = Field(default=None, description="LanceDB URI")
    postgres_url: str | None = Field(default=None, description="PostgreSQL URL")

    qdrant_url: str | None = Field(default=None)
    qdrant_api_key: str | None = Field(default=None)
    qdrant_path: Path | None = Field(default=None)

    embedding_provider: str = Field(default=DEFAULT_EMBEDDING_PROVIDER)
    embedding_model: str = Field(default=DEFAULT_EMBEDDING_MODEL)
    default_search_results: int = Field(default=DEFAULT_SEARCH_RESULTS, ge=1)

    log_level: str = Field(default=DEFAULT_LOG_LEVEL)
    log_format: str = Field(default=DEFAULT_LOG_FORMAT)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    @field_validator("provider", mode="before")
    @classmethod
    def validate_provider(cls, v: Any) -> MemoryProviderType:
        return MemoryProviderType.parse(v)

    @field_validator("embedding_provider")
    @classmethod
    def validate_embedding_provider(cls, v: str) -> str:
        v_lower = v.lower().replace("-", "_")
        if v_lower not in VALID_EMBEDDING_PROVIDERS:
            raise ValueError(f"embedding_provider must be one of {VALID_EMBEDDING_PROVIDERS}")
        return v_lower

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v_upper = v.upper()
        if v_upper not in VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of {VALID_LOG_LEVELS}")
        return v_upper

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        v_lower = v.lower()
        if v_lower not in VALID_LOG_FORMATS:
            raise ValueError(f"log_format must be one of {VALID_LOG_FORMATS}")
        return v_lower

    @property
    def resolved_chroma_path(self) -> Path:
        return self.chroma_path or self.home / "memory" / "chroma"

    @property
    def resolved_lancedb_uri(self) -> str:
        return self.lancedb_uri or str(self.home / "memory" / "lancedb")

    @property
    def resolved_qdrant_path(self) -> Path:
        return self.qdrant_path or self.home / "memory" / "qdrant"

    @classmethod
    def from_env(cls, env_file: str | Path | None = None) -> "MemorySettings":
        """Load settings from environment variables.

        Args:
            env_file: Optional path to .env file

        Returns:
            MemorySettings instance
        """
        if env_file:
            load_dotenv(env_file)
        else:
            load_dotenv()

        home_str = os.getenv("AGENT_MEMORY_HOME")
        home = Path(home_str).expanduser() if home_str else Path.home() / DEFAULT_HOME_DIRNAME

        chroma_path = os.getenv("MEMORY_CHROMA_PATH")
        qdrant_path = os.getenv("MEMORY_QDRANT_PATH")

        observability_config = ObservabilityConfig(
            logging_enabled=os.getenv("LOGGING_ENABLED", "true").lower() == "true",
            tracing_enabled=os.getenv("TRACING_ENABLED", "false").lower() == "true",
            sample_rate=float(os.getenv("TRACE_SAMPLE_RATE", str(DEFAULT_TRACE_SAMPLE_RATE))),
        )

        return cls(
            home=home,
            provider=os.getenv("MEMORY_PROVIDER", DEFAULT_PROVIDER),
            chroma_path=Path(chroma_path).expanduser() if chroma_path else None,
            chroma_cloud_api_key=os.getenv("MEMORY_CHROMA_CLOUD_API_KEY"),
            chroma_cloud_tenant=os.getenv("MEMORY_CHROMA_CLOUD_TENANT", DEFAULT_CHROMA_TENANT),
            chroma_cloud_database=os.getenv(
                "MEMORY_CHROMA_CLOUD_DATABASE", DEFAULT_CHROMA_DATABASE
            ),
            lancedb_uri=os.getenv("MEMORY_LANCEDB_URI"),
            postgres_url=os.getenv("MEMORY_POSTGRES_URL"),
            qdrant_url=os.getenv("MEMORY_QDRANT_URL"),
            qdrant_api_key=os.getenv("MEMORY_QDRANT_API_KEY"),
            qdrant_path=Path(qdrant_path).expanduser() if qdrant_path else None,
            embedding_provider=os.getenv("MEMORY_EMBEDDING_PROVIDER", DEFAULT_EMBEDDING_PROVIDER),
            embedding_model=os.getenv("MEMORY_EMBEDDING_MODEL", DEFAULT_EMBEDDING_MODEL),
            default_search_results=int(
                os.getenv("MEMORY_SEARCH_RESULTS", str(DEFAULT_SEARCH_RESULTS))
            ),
            log_level=os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL),
            log_format=os.getenv("LOG_FORMAT", DEFAULT_LOG_FORMAT),
            observability=observability_config,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert settings to dictionary, masking credentials."""
        data = self.model_dump(mode="json")
        for secret in ("chroma_cloud_api_key", "qdrant_api_key"):
            if data.get(secret):
                data[secret] = "***"
        return data


@lru_cache(maxsize=1)
def get_settings() -> MemorySettings:
    """Return the process-wide settings, loaded from the environment once."""
    return MemorySettings.from_env()


def reset_settings() -> None:
    """Forget cached settings so the next `get_settings()` reloads them."""
    get_settings.cache_clear()
