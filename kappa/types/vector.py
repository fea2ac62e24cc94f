from __future__ import annotations


class Vector(tuple):
    """Immutable ordered sequence, distinct from a List (Python `list`)."""

    __slots__ = ()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector):
            return False
        from kappa.comparer import equals
        return equals(self, other)

    def __ne__(self, other: object) -> bool:
        return not self == other

    __hash__ = tuple.__hash__

    def __repr__(self):
        return f"Vector({list(self)!r})"
