# visualize.py
"""ANSI picture of one keystroke travelling through the machine.

Everything here only reads a ``Snapshot``; nothing feeds back into the
cipher. Green marks the path in, yellow the path back out.
"""
from __future__ import annotations

from enigma import EnigmaMachine, Snapshot
from permutation import SIZE
from rotor_and_reflector import WheelTrace

GREEN = "\033[32m"
YELLOW = "\033[33m"
RED_BG = "\033[41m"
BLUE_BG = "\033[44m"
RESET = "\033[0m"
RULE = "=" * 47


def alphabet_row(offset: int, highlight_0: int, highlight_1: int) -> str:
    cells = []
    for i in range(SIZE):
        n = (i + offset) % SIZE
        ch = chr(ord("a") + n)
        if n == highlight_1:
            ch = f"{YELLOW}{ch}{RESET}"
        elif n == highlight_0:
            ch = f"{GREEN}{ch}{RESET}"
        cells.append(ch)
    return "".join(cells)


def wire_row(wire_start: int, wire_end: int) -> str:
    lo, hi = sorted((wire_start, wire_end))
    cells = []
    for i in range(SIZE):
        if i in (lo, hi):
            cells.append("+")
        elif lo < i < hi:
            cells.append("-")
        else:
            cells.append(" ")
    return "".join(cells)


def ring_row(position: int, ring_setting: int) -> str:
    letters = [chr(ord("A") + (i + position + ring_setting) % SIZE) for i in range(SIZE)]
    letters[0] = f"{RED_BG}{letters[0]}{RESET}"
    return "".join(letters) + " <- Ring Characters"


def render_wheel(
    index: int,
    position: int,
    ring_setting: int,
    fwd: WheelTrace,
    rev: WheelTrace,
) -> str:
    def rel(contact: int) -> int:
        return (contact - position) % SIZE

    lines = [
        f"{BLUE_BG}|{RESET}------------------------- : Walze {index}",
        alphabet_row(0, fwd.input, rev.output),
        alphabet_row(position, fwd.wires_input, rev.wires_output),
        GREEN + wire_row(rel(fwd.wires_input), rel(fwd.wires_output)) + RESET,
        YELLOW + wire_row(rel(rev.wires_input), rel(rev.wires_output)) + RESET,
        alphabet_row(position, fwd.wires_output, rev.wires_input),
        ring_row(position, ring_setting),
        alphabet_row(0, fwd.output, rev.input),
        f"{BLUE_BG}|{RESET}-------------------------",
    ]
    return "\n".join(lines)


def render_snapshot(machine: EnigmaMachine, snap: Snapshot) -> str:
    out = [
        f"Input Character : {snap.input_letter};",
        RULE,
        alphabet_row(0, snap.plugboard_in, snap.plugboard_back_out) + " : Steckerboard",
        GREEN + wire_row(snap.plugboard_in, snap.plugboard_out) + RESET,
        YELLOW + wire_row(snap.plugboard_back_in, snap.plugboard_back_out) + RESET,
        alphabet_row(0, snap.plugboard_out, snap.plugboard_back_in),
        RULE,
    ]
    for i, rotor in enumerate(machine.rotors):
        out.append(
            render_wheel(i, snap.positions[i], rotor.ring_setting, snap.forward[i], snap.reverse[i])
        )
    out += [
        RULE,
        alphabet_row(0, snap.reflector_in, snap.reflector_out) + " : Umkehrwalze",
        wire_row(snap.reflector_in, snap.reflector_out),
        RULE,
        f"Output Character : {snap.output_letter};",
        "",
    ]
    return "\n".join(out)
