# keyboard_and_plugboard.py
from __future__ import annotations

from collections.abc import Iterable
from debug import Debug
from permutation import ALPHABET, SIZE, Permutation, to_index, to_letter

debug = Debug()


# ── Keyboard ──────────────────────────────────────────────────────
class Keyboard:
    def __init__(self, alphabet: str = ALPHABET) -> None:
        self.alphabet: str = alphabet
        self.alpha_to_index: dict[str, int] = {
            ch: i for i, ch in enumerate(alphabet)
        }

    # letter → integer signal
    def forward(self, letter: str) -> int:
        try:
            sig = self.alpha_to_index[letter]
        except KeyError:
            raise ValueError(
                f"Invalid character {letter!r}; expected a letter A-Z."
            ) from None
        debug.log("keyboard", f"{letter}->{sig}")
        return sig

    # integer signal → letter
    def backward(self, signal: int) -> str:
        if not (0 <= signal < len(self.alphabet)):
            hi = len(self.alphabet) - 1
            raise ValueError(f"Signal {signal} out of range 0–{hi}")
        return self.alphabet[signal]


# ── Plugboard ─────────────────────────────────────────────────────
class Plugboard:
    """Steckerbrett: applied on the way in and again on the way out."""

    def __init__(self, wiring: Permutation | None = None) -> None:
        if wiring is None:
            wiring = Permutation.identity()
        self.wiring: Permutation = wiring
        # equal to the wiring itself whenever it was built from pairs
        self.reciprocal: Permutation = self.wiring.invert()

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, str] | str]) -> "Plugboard":
        """Swap each pair symmetrically; pairs are assumed validated and disjoint."""
        table = list(range(SIZE))
        for a, b in pairs:
            ia, ib = to_index(a), to_index(b)
            table[ia], table[ib] = ib, ia
        return cls(Permutation(table))

    def forward(self, signal: int) -> int:
        out = self.wiring[signal]
        debug.log("plugboard", f"in  {to_letter(signal)}->{to_letter(out)}")
        return out

    def backward(self, signal: int) -> int:
        out = self.reciprocal[signal]
        debug.log("plugboard", f"out {to_letter(signal)}->{to_letter(out)}")
        return out

    apply = forward

    def pairs(self) -> list[str]:
        return [
            to_letter(a) + to_letter(b)
            for a, b in enumerate(self.wiring)
            if a < b
        ]

    # nicety for debugging
    def __repr__(self) -> str:
        return f"<Plugboard {' '.join(self.pairs())}>"
