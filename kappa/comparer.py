"""Structural equality over Kappa values.

Lists compare to Lists and Vectors to Vectors, element-wise and in order.
Maps compare by content regardless of order. Everything else must match in
both type and value, so 1 and 1.0 differ, and a Symbol never equals a
Keyword or String with the same text.
"""

from __future__ import annotations

from typing import Sequence

from kappa import LispValue
from kappa.types.vector import Vector
from kappa.types.hash_map import Map


def equals(a: LispValue, b: LispValue) -> bool:
    """Deep equality for Kappa values."""
    if isinstance(a, list) and isinstance(b, list):
        return _sequence_equals(a, b)
    if isinstance(a, Vector) and isinstance(b, Vector):
        return _sequence_equals(a, b)
    if isinstance(a, Map) and isinstance(b, Map):
        return _map_equals(a, b)
    if type(a) is not type(b):
        return False
    return a == b


def _sequence_equals(xs: Sequence[LispValue], ys: Sequence[LispValue]) -> bool:
    if len(xs) != len(ys):
        return False
    return all(equals(x, y) for x, y in zip(xs, ys))


def _map_equals(m1: Map, m2: Map) -> bool:
    # Equal sizes plus containment one way means a bijection, because keys are unique
    if len(m1) != len(m2):
        return False
    pairs = m2.items()
    for key1, val1 in m1.items():
        if not any(equals(key1, key2) and equals(val1, val2) for key2, val2 in pairs):
            return False
    return True
