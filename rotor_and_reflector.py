# rotor_and_reflector.py
from __future__ import annotations

from enum import Enum
from typing import NamedTuple

from debug import Debug
from permutation import SIZE, Permutation, to_letter

debug = Debug()


class Direction(Enum):
    FORWARD = "forward"
    REVERSE = "reverse"


class WheelTrace(NamedTuple):
    """Signal at each contact of one wheel for one pass."""

    input: int
    wires_input: int
    wires_output: int
    output: int


class Rotor:
    def __init__(
        self,
        wiring: Permutation,
        notch: int,
        *,
        ring_setting: int = 0,
        position: int = 0,
    ) -> None:
        self.set_wiring(wiring, notch)
        self.set_ring(ring_setting)
        self.set_position(position)

    # ── load-time setup ───────────────────────────────────────────
    def set_wiring(self, wiring: Permutation, notch: int) -> "Rotor":
        self.wiring = wiring
        self.wiring_inverse = wiring.invert()
        self.notch = notch
        return self

    def set_ring(self, ring: int) -> "Rotor":
        """Ringstellung as a 0-based offset (``A`` = 0)."""
        self.ring_setting = ring % SIZE
        return self

    def set_position(self, position: int) -> "Rotor":
        self.position = position % SIZE
        return self

    # ── stepping --------------------------------------------------
    def advance(self, steps: int = 1) -> None:
        self.position = (self.position + steps) % SIZE
        debug.log("rotor", f"position -> {to_letter(self.position)}")

    def at_notch(self) -> bool:
        return self.position == self.notch

    # ── signal paths ---------------------------------------------
    def trace(self, direction: Direction, sig: int) -> WheelTrace:
        offset = self.position - self.ring_setting
        shifted = (sig + offset + SIZE) % SIZE
        if direction is Direction.FORWARD:
            wired = self.wiring[shifted]
        else:
            wired = self.wiring_inverse[shifted]
        return WheelTrace(sig, shifted, wired, (wired - offset + SIZE) % SIZE)

    def signal(self, direction: Direction, sig: int) -> int:
        return self.trace(direction, sig).output

    def forward(self, sig: int) -> int:
        return self.trace(Direction.FORWARD, sig).output

    def backward(self, sig: int) -> int:
        return self.trace(Direction.REVERSE, sig).output

    # ── niceties --------------------------------------------------
    def __repr__(self) -> str:
        return (
            f"<Rotor pos={to_letter(self.position)} "
            f"ring={to_letter(self.ring_setting)} notch={to_letter(self.notch)}>"
        )


class Reflector:
    """Fixed substitution folding the signal back through the wheels.

    Historical reflectors are involutions without self-mapped letters; that
    is checked when the configuration is loaded, not here.
    """

    def __init__(self, wiring: Permutation) -> None:
        self.wiring = wiring

    def reflect(self, sig: int) -> int:
        out = self.wiring[sig]
        debug.log("reflector", f"{to_letter(sig)}->{to_letter(out)}")
        return out

    apply = reflect

    def __repr__(self) -> str:
        return f"<Reflector {self.wiring.letters()}>"
