"""Association of Kappa values to Kappa values.

Keys may be any value, including unhashable Lists and other Maps, so entries
are kept as an insertion-ordered list of pairs and looked up with the
structural comparer instead of hashing.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from kappa import LispValue

_MISSING = object()


class Map:
    __slots__ = ("_pairs",)

    def __init__(self, pairs: Iterable[tuple[LispValue, LispValue]] = ()):
        self._pairs: list[tuple[LispValue, LispValue]] = []
        for key, value in pairs:
            self._put(key, value)

    def _index(self, key: LispValue) -> int:
        from kappa.comparer import equals
        for i, (k, _) in enumerate(self._pairs):
            if equals(k, key):
                return i
        return -1

    def _put(self, key: LispValue, value: LispValue) -> None:
        # Later duplicates of a key replace earlier ones
        i = self._index(key)
        if i < 0:
            self._pairs.append((key, value))
        else:
            self._pairs[i] = (key, value)

    def get(self, key: LispValue, default: LispValue = None) -> LispValue:
        i = self._index(key)
        return default if i < 0 else self._pairs[i][1]

    def assoc(self, key: LispValue, value: LispValue) -> Map:
        """Return a new Map with `key` bound to `value`."""
        result = Map(self._pairs)
        result._put(key, value)
        return result

    def keys(self) -> list[LispValue]:
        return [k for k, _ in self._pairs]

    def values(self) -> list[LispValue]:
        return [v for _, v in self._pairs]

    def items(self) -> list[tuple[LispValue, LispValue]]:
        return list(self._pairs)

    def __contains__(self, key: LispValue) -> bool:
        return self._index(key) >= 0

    def __getitem__(self, key: LispValue) -> LispValue:
        value = self.get(key, _MISSING)
        if value is _MISSING:
            raise KeyError(key)
        return value

    def __iter__(self) -> Iterator[LispValue]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self._pairs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Map):
            return False
        from kappa.comparer import equals
        return equals(self, other)

    def __ne__(self, other: object) -> bool:
        return not self == other

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self):
        inner = ", ".join(f"{k!r}: {v!r}" for k, v in self._pairs)
        return f"Map({{{inner}}})"
