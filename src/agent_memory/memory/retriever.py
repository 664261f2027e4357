"""Cosine similarity ranking for providers without a vector index."""

import math
from collections.abc import Iterable

import structlog

from agent_memory.memory.models import MemoryRecord, MemorySearchResult

logger = structlog.get_logger(__name__)


def cosine_similarity(embedding1: list[float], embedding2: list[float]) -> float:
    """Compute cosine similarity between two embeddings.

    Raises:
        ValueError: if the embeddings differ in length, as happens when the
            embedding function changed after facts were stored

    Returns:
        Similarity score (-1.0-1.0); 0.0 when either vector is zero
    """
    if len(embedding1) != len(embedding2):
        raise ValueError(
            f"Embedding dimensions differ: {len(embedding1)} != {len(embedding2)}"
        )

    dot_product = sum(a * b for a, b in zip(embedding1, embedding2))
    magnitude1 = math.sqrt(sum(a * a for a in embedding1))
    magnitude2 = math.sqrt(sum(b * b for b in embedding2))

    if magnitude1 == 0 or magnitude2 == 0:
        return 0.0

    similarity = dot_product / (magnitude1 * magnitude2)

    # Clamp float error
    return max(-1.0, min(1.0, similarity))


class MemoryRetriever:
    """Ranks stored records against a query embedding.

    Attributes:
        similarity_threshold: Minimum score a record needs to be returned
    """

    def __init__(self, similarity_threshold: float = -1.0) -> None:
        self.similarity_threshold = similarity_threshold

    def rank(
        self,
        query_embedding: list[float],
        records: Iterable[MemoryRecord],
        max_results: int,
    ) -> list[MemorySearchResult]:
        """Score records and return the best `max_results`, highest first.

        Records without an embedding are skipped. Equal scores keep the
        order in which records were given.
        """
        results: list[MemorySearchResult] = []
        candidates = 0
        for record in records:
            candidates += 1
            if record.embedding is None:
                continue
            score = cosine_similarity(query_embedding, record.embedding)
            if score >= self.similarity_threshold:
                results.append(MemorySearchResult(record=record, score=score))

        # list.sort is stable, so ties stay in insertion order
        results.sort(key=lambda r: r.score, reverse=True)

        logger.debug(
            "Memory ranking completed",
            candidates=candidates,
            results=len(results[:max_results]),
        )
        return results[:max_results]
