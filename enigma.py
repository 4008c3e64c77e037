# enigma.py  ───────────────────────────────────────────────────────
from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

from debug import Debug
from keyboard_and_plugboard import Keyboard, Plugboard
from permutation import to_letter
from rotor_and_reflector import Direction, Reflector, Rotor, WheelTrace

debug = Debug()


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Every intermediate value of one keystroke, for whoever wants to look."""

    input_letter: str
    output_letter: str
    positions: tuple[int, ...]
    plugboard_in: int
    plugboard_out: int
    forward: tuple[WheelTrace, ...]
    reflector_in: int
    reflector_out: int
    reverse: tuple[WheelTrace, ...]      # indexed by wheel, not by pass order
    plugboard_back_in: int
    plugboard_back_out: int


Observer = Callable[[Snapshot], None]


class EnigmaMachine:
    """Plugboard, a stack of rotors and a reflector wired into one cipher.

    Rotor 0 is the rightmost wheel: it sees the signal first and steps on
    every key press.
    """

    def __init__(
        self,
        rotors: Sequence[Rotor],
        reflector: Reflector,
        plugboard: Plugboard | None = None,
        keyboard: Keyboard | None = None,
    ) -> None:
        self.rotors: tuple[Rotor, ...] = tuple(rotors)
        self.reflector = reflector
        self.plugboard = plugboard if plugboard is not None else Plugboard()
        self.kb = keyboard if keyboard is not None else Keyboard()

        self.last_snapshot: Snapshot | None = None
        self._observers: list[Observer] = []

    # ── state helpers ───────────────────────────────────────────

    @property
    def positions(self) -> tuple[int, ...]:
        return tuple(rotor.position for rotor in self.rotors)

    def window(self) -> str:
        """Rotor letters as read through the windows, left to right."""
        return "".join(to_letter(r.position) for r in reversed(self.rotors))

    def set_positions(self, positions: Sequence[int]) -> None:
        """Reset every rotor (wheel-index order) to a start position."""
        if len(positions) != len(self.rotors):
            raise ValueError("positions length mismatch")
        for rotor, pos in zip(self.rotors, positions):
            rotor.set_position(pos)

    # ── observers ───────────────────────────────────────────────

    def add_observer(self, callback: Observer) -> None:
        self._observers.append(callback)

    def remove_observer(self, callback: Observer) -> None:
        self._observers.remove(callback)

    # ── stepping logic  ─────────────────────────────────────────

    def _step_rotors(self) -> None:
        """Advance rotors for one key press.

        Each wheel looks at its right-hand neighbour *after* that neighbour
        may already have moved in this same pass.
        """
        for i, rotor in enumerate(self.rotors):
            if i == 0 or self.rotors[i - 1].at_notch():
                rotor.advance(1)
        debug.log("stepping", f"window {self.window()}")

    # ── encipher one symbol  ────────────────────────────────────

    def _encipher(self, sig: int) -> tuple[int, dict]:
        stages: dict = {"plugboard_in": sig}
        sig = self.plugboard.forward(sig)
        stages["plugboard_out"] = sig

        self._step_rotors()
        stages["positions"] = self.positions

        forward: list[WheelTrace] = []
        for rotor in self.rotors:
            trace = rotor.trace(Direction.FORWARD, sig)
            forward.append(trace)
            sig = trace.output

        stages["reflector_in"] = sig
        sig = self.reflector.reflect(sig)
        stages["reflector_out"] = sig

        reverse: list[WheelTrace] = []
        for rotor in reversed(self.rotors):
            trace = rotor.trace(Direction.REVERSE, sig)
            reverse.append(trace)
            sig = trace.output
        reverse.reverse()

        stages["plugboard_back_in"] = sig
        sig = self.plugboard.backward(sig)
        stages["plugboard_back_out"] = sig

        stages["forward"] = tuple(forward)
        stages["reverse"] = tuple(reverse)
        return sig, stages

    def feed_index(self, sig: int) -> int:
        return self._feed(sig)

    def feed_character(self, letter: str) -> str:
        """Encipher one letter A-Z, stepping the rotors first."""
        return self.kb.backward(self._feed(self.kb.forward(letter)))

    def feed(self, text: Iterable[str]) -> str:
        return "".join(self.feed_character(ch) for ch in text)

    def _feed(self, sig: int) -> int:
        out, stages = self._encipher(sig)
        snapshot = Snapshot(
            input_letter=to_letter(sig),
            output_letter=to_letter(out),
            **stages,
        )
        self.last_snapshot = snapshot
        debug.log("encipher", f"{snapshot.input_letter}->{snapshot.output_letter} window={self.window()}")
        for callback in self._observers:
            callback(snapshot)
        return out

    def __repr__(self) -> str:
        return f"<EnigmaMachine window={self.window()} rotors={len(self.rotors)}>"
