"""Client-side embedding functions for memory providers.

LanceDB, PostgreSQL, Qdrant and the in-memory provider store vectors that
are computed here. ChromaDB embeds documents itself unless given one of
these functions.
"""

import hashlib
import math
import re
from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

import structlog

from agent_memory.config import MemorySettings, get_settings
from agent_memory.constants import DEFAULT_EMBEDDING_MODEL, DEFAULT_HASHING_DIMENSION
from agent_memory.exceptions import ProviderNotInstalledError

logger = structlog.get_logger(__name__)

_TOKEN_PATTERN = re.compile(r"[a-z0-9]+")

# Any callable mapping texts to vectors; providers accept this
EmbeddingCallable = Callable[[list[str]], list[list[float]]]


@runtime_checkable
class EmbeddingFunction(Protocol):
    """Turns a batch of texts into vectors of a fixed dimension."""

    @property
    def dimension(self) -> int: ...

    def __call__(self, texts: list[str]) -> list[list[float]]: ...


class HashingEmbeddingFunction:
    """Deterministic hashed bag-of-words embeddings.

    Each lowercase token is hashed into one of `dimension` buckets with a
    sign bit, then the vector is L2-normalized. Texts that share words get
    a positive cosine similarity. No model download is needed.
    """

    def __init__(self, dimension: int = DEFAULT_HASHING_DIMENSION) -> None:
        if dimension < 1:
            raise ValueError("dimension must be >= 1")
        self._dimension = dimension

    @property
    def dimension(self) -> int:
        return self._dimension

    def embed(self, text: str) -> list[float]:
        """Embed a single text."""
        features = [0.0] * self._dimension
        for token in _TOKEN_PATTERN.findall(text.lower()):
            digest = hashlib.md5(token.encode()).digest()
            bucket = int.from_bytes(digest[:4], "little") % self._dimension
            sign = 1.0 if digest[4] & 1 else -1.0
            features[bucket] += sign

        magnitude = math.sqrt(sum(f * f for f in features))
        if magnitude > 0:
            features = [f / magnitude for f in features]
        return features

    def __call__(self, texts: list[str]) -> list[list[float]]:
        return [self.embed(text) for text in texts]

    def __repr__(self) -> str:
        return f"HashingEmbeddingFunction(dimension={self._dimension})"


class SentenceTransformerEmbeddingFunction:
    """Embeddings from a local sentence-transformers model.

    The model is loaded on first use.
    """

    def __init__(self, model_name: str = DEFAULT_EMBEDDING_MODEL) -> None:
        self.model_name = model_name
        self._model: Any = None

    def _get_model(self) -> Any:
        if self._model is None:
            try:
                from sentence_transformers import SentenceTransformer
            except ImportError as e:
                raise ProviderNotInstalledError(
                    "sentence-transformers embedding", "all"
                ) from e
            logger.info("Loading embedding model", model_name=self.model_name)
            self._model = SentenceTransformer(self.model_name)
        return self._model

    @property
    def dimension(self) -> int:
        return int(self._get_model().get_sentence_embedding_dimension())

    def __call__(self, texts: list[str]) -> list[list[float]]:
        vectors = self._get_model().encode(texts, normalize_embeddings=True)
        return [[float(x) for x in vector] for vector in vectors]

    def __repr__(self) -> str:
        return f"SentenceTransformerEmbeddingFunction(model_name={self.model_name!r})"


def get_default_embedding_fn(settings: MemorySettings | None = None) -> EmbeddingFunction:
    """Build the embedding function selected by settings."""
    settings = settings or get_settings()
    if settings.embedding_provider == "hashing":
        return HashingEmbeddingFunction()
    return SentenceTransformerEmbeddingFunction(settings.embedding_model)


def embedding_dimension(embedding_fn: EmbeddingCallable) -> int:
    """Vector size produced by an embedding function.

    Uses the `dimension` attribute when present, otherwise embeds a probe text.
    """
    dimension = getattr(embedding_fn, "dimension", None)
    if dimension is None:
        dimension = len(embedding_fn(["dimension probe"])[0])
    return int(dimension)
