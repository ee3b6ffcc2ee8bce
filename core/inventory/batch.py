"""
core/inventory/batch.py - Chunked batch resolver

EC2 filter lookups accept at most 200 values per filter, so ID lists are split
into contiguous chunks and the per-chunk results merged into one map.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Hashable, Iterable, Iterator, Sequence
from typing import TypeVar

from core.exceptions import provider_errors

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")
T = TypeVar("T")

# EC2 filter value limit
MAX_FILTER_VALUES = 200


def chunked(items: Sequence[T], size: int) -> Iterator[Sequence[T]]:
    """Yield contiguous slices of at most ``size`` items

    Chunk ``i`` covers ``items[i * size : min((i + 1) * size, len(items))]``.
    """
    if size < 1:
        raise ValueError(f"chunk size must be positive, got {size}")
    for start in range(0, len(items), size):
        yield items[start : start + size]


def resolve_in_chunks(
    ids: Sequence[str],
    lookup: Callable[[Sequence[str]], Iterable[tuple[K, V]]],
    chunk_size: int = MAX_FILTER_VALUES,
    service: str = "unknown",
    operation: str = "unknown",
) -> dict[K, list[V]]:
    """Resolve ``ids`` with one lookup per chunk and merge the results

    ``lookup`` receives a chunk of IDs and returns ``(key, value)`` pairs.
    Values sharing a key are appended in the order the provider returned them.

    Args:
        ids: IDs to resolve
        lookup: filtered lookup for one chunk
        chunk_size: maximum number of IDs per lookup
        service: AWS service name, used in errors
        operation: API operation name, used in errors

    Returns:
        key -> list of values; empty without any lookup when ``ids`` is empty

    Raises:
        ProviderQueryError: a chunk lookup failed; no partial map is returned
    """
    result: dict[K, list[V]] = {}
    chunks = 0

    for chunk in chunked(ids, chunk_size):
        with provider_errors(service, operation):
            entries = list(lookup(chunk))
        chunks += 1
        for key, value in entries:
            result.setdefault(key, []).append(value)

    logger.debug("%s.%s: %d ids in %d chunks -> %d keys", service, operation, len(ids), chunks, len(result))
    return result
