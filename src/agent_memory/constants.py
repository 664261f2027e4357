"""Constants for the agent memory package.

This module centralizes default values shared by settings, providers
and tools.
"""

# =============================================================================
# Storage Settings
# =============================================================================
DEFAULT_HOME_DIRNAME = ".agent_memory"
DEFAULT_PROVIDER = "chroma-db"
DEFAULT_CHROMA_TENANT = "default_tenant"
DEFAULT_CHROMA_DATABASE = "default_database"

# Collection/table name templates; {key} is the memory key
DEFAULT_COLLECTION_TEMPLATE = "memory-{key}"
DEFAULT_SQL_TABLE_TEMPLATE = "memory_{key}"

# =============================================================================
# Embedding Settings
# =============================================================================
DEFAULT_EMBEDDING_PROVIDER = "sentence_transformers"
DEFAULT_EMBEDDING_MODEL = "all-MiniLM-L6-v2"
DEFAULT_HASHING_DIMENSION = 256

# =============================================================================
# Search Settings
# =============================================================================
DEFAULT_SEARCH_RESULTS = 20

# =============================================================================
# Logging Settings
# =============================================================================
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FORMAT = "json"
DEFAULT_TRACE_SAMPLE_RATE = 1.0
LOG_PREVIEW_CHARS = 50

# =============================================================================
# Valid Values
# =============================================================================
VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
VALID_LOG_FORMATS = {"json", "text"}
VALID_EMBEDDING_PROVIDERS = {"sentence_transformers", "hashing"}
