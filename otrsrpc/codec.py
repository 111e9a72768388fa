"""Flatten/unflatten helpers for the positional Dispatch payload.

Outbound arguments travel as an interleaved list ``[k1, v1, k2, v2, ...]``
and replies come back in the same shape. Both helpers are pure.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any


def flatten(mapping: Mapping[Any, Any]) -> list[Any]:
    """Interleave keys and values in the mapping's iteration order."""
    result: list[Any] = []
    for key, value in mapping.items():
        result.append(key)
        result.append(value)
    return result


def unflatten(sequence: Any) -> dict[Any, Any]:
    """Rebuild a mapping from an interleaved sequence.

    Later duplicates of a key win. Anything that is not an even-length
    sequence of hashable keys is treated as "no data" and yields ``{}``;
    a dangling trailing key is never half-applied.
    """
    if not _is_sequence(sequence):
        return {}
    items = list(sequence)
    if not items or len(items) % 2:
        return {}
    result: dict[Any, Any] = {}
    try:
        for i in range(0, len(items), 2):
            result[items[i]] = items[i + 1]
    except TypeError:
        # unhashable key
        return {}
    return result


def positional_values(raw: Any) -> list[Any]:
    """Normalize a transport reply into its values in returned order.

    Only sequence replies carry the interleaved shape. A mapping is a single
    struct part and, like any scalar, yields no positional values.
    """
    if _is_sequence(raw):
        return list(raw)
    return []


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))
