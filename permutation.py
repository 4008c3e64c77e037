# permutation.py
from __future__ import annotations

from collections.abc import Iterator, Sequence

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
SIZE = len(ALPHABET)


def to_index(letter: str) -> int:
    return ord(letter) - ord("A")


def to_letter(index: int) -> str:
    return ALPHABET[index]


class Permutation:
    """Fixed bijection over the 26 letter indices.

    The mapping is trusted as given; checking that it really is a bijection
    is the job of whoever loads the configuration (see ``utilities``).
    """

    __slots__ = ("_map",)

    def __init__(self, mapping: Sequence[int]) -> None:
        self._map: tuple[int, ...] = tuple(mapping)

    # ── constructors ─────────────────────────────────────────────
    @classmethod
    def identity(cls) -> "Permutation":
        return cls(range(SIZE))

    @classmethod
    def from_letters(cls, wiring: str) -> "Permutation":
        """Build from a wiring string such as ``"EKMFLGDQVZNTOWYHXUSPAIBRCJ"``."""
        return cls(to_index(c) for c in wiring)

    # ── algebra ──────────────────────────────────────────────────
    def invert(self) -> "Permutation":
        inverse = [0] * len(self._map)
        for i, j in enumerate(self._map):
            inverse[j] = i
        return Permutation(inverse)

    def is_involution(self) -> bool:
        return all(self._map[j] == i for i, j in enumerate(self._map))

    def fixed_points(self) -> list[int]:
        return [i for i, j in enumerate(self._map) if i == j]

    def letters(self) -> str:
        return "".join(to_letter(i) for i in self._map)

    # ── container protocol ───────────────────────────────────────
    def __getitem__(self, index: int) -> int:
        return self._map[index]

    def __len__(self) -> int:
        return len(self._map)

    def __iter__(self) -> Iterator[int]:
        return iter(self._map)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Permutation):
            return NotImplemented
        return self._map == other._map

    def __hash__(self) -> int:
        return hash(self._map)

    def __repr__(self) -> str:
        return f"<Permutation {self.letters()}>"
