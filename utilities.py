# utilities.py
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Mapping, Sequence, Tuple

from debug import Debug
from keyboard_and_plugboard import Plugboard
from permutation import ALPHABET, SIZE, Permutation, to_index
from rotor_and_reflector import Reflector, Rotor

debug = Debug()

# ────────────────────────────────────────────────────────────────────────
#  0. Configuration errors
# ────────────────────────────────────────────────────────────────────────


class ConfigurationError(ValueError):
    """Machine settings rejected before any machine is built."""


class InvalidPermutation(ConfigurationError):
    """A wiring table is not a bijection (or a reflector not an involution)."""


class InvalidSelector(ConfigurationError):
    """Unknown wheel name, bad letter, or malformed plugboard pair."""


class InvalidLength(ConfigurationError):
    """A setting string has the wrong number of entries."""


# ────────────────────────────────────────────────────────────────────────
#  1. Wheel database
# ────────────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class WheelSpec:
    wiring: str
    notch: str


@dataclass(frozen=True)
class Catalog:
    """Named rotor and reflector wirings a machine can be assembled from."""

    rotors: Mapping[str, WheelSpec]
    reflectors: Mapping[str, str]
    codes: Mapping[str, str] = field(default_factory=dict)   # "1" -> "I"

    def extended(
        self,
        rotors: Mapping[str, WheelSpec] | None = None,
        reflectors: Mapping[str, str] | None = None,
    ) -> "Catalog":
        """Return a new catalog with extra (validated) wheels added."""
        new_rotors = dict(self.rotors)
        for name, spec in (rotors or {}).items():
            validate_wiring(spec.wiring, f"rotor {name}")
            validate_notch(spec.notch, f"rotor {name}")
            new_rotors[name.upper()] = WheelSpec(spec.wiring.upper(), spec.notch.upper())

        new_reflectors = dict(self.reflectors)
        for name, wiring in (reflectors or {}).items():
            validate_reflector(wiring, f"reflector {name}")
            new_reflectors[name.upper()] = wiring.upper()

        return Catalog(new_rotors, new_reflectors, dict(self.codes))

    def rotor(self, name: str) -> WheelSpec:
        key = self.codes.get(name, name)
        try:
            return self.rotors[key]
        except KeyError:
            known = ", ".join(self.rotors)
            raise InvalidSelector(
                f"Invalid rotor type {name!r}. Must be one of {known}"
            ) from None

    def reflector(self, name: str) -> str:
        try:
            return self.reflectors[name]
        except KeyError:
            known = ", ".join(self.reflectors)
            raise InvalidSelector(
                f"Invalid reflector type {name!r}. Must be one of {known}"
            ) from None


# Enigma I / M3 wheels ---------------------------------------------------
DEFAULT_CATALOG = Catalog(
    rotors={
        "I":   WheelSpec("EKMFLGDQVZNTOWYHXUSPAIBRCJ", "Q"),
        "II":  WheelSpec("AJDKSIRUXBLHWTMCQGZNPYFVOE", "E"),
        "III": WheelSpec("BDFHJLCPRTXVZNYEIWGAKMUSQO", "V"),
        "IV":  WheelSpec("ESOVPZJAYQUIRHXLNFTGKDCMWB", "J"),
        "V":   WheelSpec("VZBRGITYUPSDNHLXAWMJQOFECK", "Z"),
    },
    reflectors={
        "A": "EJMZALYXVBWFCRQUONTSPIKHGD",
        "B": "YRUHQSLDPXNGOKMIEBFZCWVJAT",
        "C": "FVPJIAOYEDRZXWGCTKUQSBNMHL",
    },
    codes={"1": "I", "2": "II", "3": "III", "4": "IV", "5": "V"},
)

_sep_re = re.compile(r"[\s,]+")
_ascii_letters = frozenset(ALPHABET + ALPHABET.lower())


# ────────────────────────────────────────────────────────────────────────
#  2. Validation
# ────────────────────────────────────────────────────────────────────────


def validate_wiring(wiring: str, what: str = "wiring") -> Permutation:
    wiring = wiring.upper()
    if len(wiring) != SIZE or sorted(wiring) != list(ALPHABET):
        raise InvalidPermutation(
            f"Invalid {what} {wiring!r}: must use every letter A-Z exactly once"
        )
    return Permutation.from_letters(wiring)


def validate_reflector(wiring: str, what: str = "reflector") -> Permutation:
    perm = validate_wiring(wiring, what)
    if not perm.is_involution():
        raise InvalidPermutation(f"Invalid {what} {wiring!r}: wiring must pair letters")
    fixed = perm.fixed_points()
    if fixed:
        letter = ALPHABET[fixed[0]]
        raise InvalidPermutation(f"Invalid {what} {wiring!r}: {letter} maps to itself")
    return perm


def validate_notch(notch: str, what: str = "rotor") -> int:
    if len(notch) != 1 or notch.upper() not in ALPHABET:
        raise InvalidPermutation(f"Invalid notch {notch!r} for {what}. Must be one letter A-Z")
    return to_index(notch.upper())


def parse_rotor_order(selector: str | Sequence[str], catalog: Catalog = DEFAULT_CATALOG) -> List[str]:
    """Return canonical rotor names, left to right as written.

    ``"213"`` and ``"II I III"`` and ``["II", "I", "III"]`` are equivalent;
    a lone ``"III"`` is one rotor, not three.
    """
    if isinstance(selector, str):
        text = selector.strip().upper()
        if _sep_re.search(text):
            tokens = _sep_re.split(text)
        elif text and all(ch in catalog.codes for ch in text):
            tokens = list(text)         # compact codes, e.g. "213"
        else:
            tokens = [text]
    else:
        tokens = [str(t).strip().upper() for t in selector]
    tokens = [t for t in tokens if t]
    if not tokens:
        raise InvalidLength("Invalid rotor configuration: no rotors given")

    names = []
    for token in tokens:
        catalog.rotor(token)
        names.append(catalog.codes.get(token, token))
    return names


def parse_letters(setting: str | Sequence[int], count: int, what: str) -> List[int]:
    """Turn ``"XMV"`` (or ``[24, 13, 22]``, 1-based) into 0-based offsets.

    Returned left to right as written; callers reverse for wheel order.
    """
    if isinstance(setting, str):
        text = setting.strip().upper()
        if len(text) != count:
            raise InvalidLength(
                f"Invalid {what} {setting!r}: need exactly {count} letters"
            )
        for ch in text:
            if ch not in ALPHABET:
                raise InvalidSelector(
                    f"Invalid {what} character {ch!r}. Must be A-Z"
                )
        return [to_index(ch) for ch in text]

    values = list(setting)
    if len(values) != count:
        raise InvalidLength(f"Invalid {what} {values!r}: need exactly {count} numbers")
    for v in values:
        if isinstance(v, bool) or not isinstance(v, int) or not 1 <= v <= SIZE:
            raise InvalidSelector(f"Invalid {what} value {v!r}. Must be 1-{SIZE}")
    return [v - 1 for v in values]


def parse_plugboard(selector: str | Sequence[str]) -> List[Tuple[str, str]]:
    """Return validated, disjoint plugboard pairs from ``"AM,FI,NV"``."""
    if isinstance(selector, str):
        raw = [p for p in _sep_re.split(selector.strip().upper()) if p]
    else:
        raw = [str(p).strip().upper() for p in selector]

    if len(raw) > SIZE // 2:
        raise InvalidLength(f"Invalid steckerboard configuration: too many pairs (max {SIZE // 2})")

    used: set[str] = set()
    pairs: List[Tuple[str, str]] = []
    for pair in raw:
        if len(pair) != 2:
            raise InvalidLength(f"Invalid steckerboard pair {pair!r}: must be exactly 2 letters")
        a, b = pair
        bad = [c for c in pair if c not in ALPHABET]
        if bad:
            raise InvalidSelector(
                f"Invalid steckerboard configuration character {bad[0]!r}. Must be A-Z"
            )
        if a == b:
            raise InvalidSelector(f"Invalid steckerboard pair {pair!r}: cannot map to itself")
        if {a, b} & used:
            dup = ({a, b} & used).pop()
            raise InvalidSelector(f"Invalid steckerboard pair {pair!r}: {dup} already used")
        used.update(pair)
        pairs.append((a, b))
    return pairs


# ────────────────────────────────────────────────────────────────────────
#  3. Assembly
# ────────────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class ResolvedSettings:
    """Validated settings in wheel order (index 0 = rightmost)."""

    rotors: Tuple[WheelSpec, ...]
    rings: Tuple[int, ...]
    positions: Tuple[int, ...]
    reflector: Permutation
    plugs: Tuple[Tuple[str, str], ...]


def resolve_settings(
    rotors: str | Sequence[str],
    ring_settings: str | Sequence[int] | None,
    start_positions: str | Sequence[int] | None,
    reflector: str,
    plugboard: str | Sequence[str] = "",
    catalog: Catalog = DEFAULT_CATALOG,
) -> ResolvedSettings:
    names = parse_rotor_order(rotors, catalog)
    count = len(names)
    if ring_settings is None:
        ring_settings = "A" * count
    if start_positions is None:
        start_positions = "A" * count

    rings = parse_letters(ring_settings, count, "ringstellung")
    positions = parse_letters(start_positions, count, "rotor start position")
    reflector_name = reflector.strip().upper()
    reflector_perm = validate_reflector(catalog.reflector(reflector_name), f"reflector {reflector_name}")
    pairs = parse_plugboard(plugboard)

    specs = [catalog.rotor(n) for n in names]
    for name, spec in zip(names, specs):
        validate_wiring(spec.wiring, f"rotor {name}")
        validate_notch(spec.notch, f"rotor {name}")

    debug.log(
        "config",
        f"rotors={' '.join(names)} rings={ring_settings} start={start_positions} "
        f"reflector={reflector_name} plugs={pairs}",
    )
    # written left to right; wheel 0 is the rightmost
    return ResolvedSettings(
        rotors=tuple(reversed(specs)),
        rings=tuple(reversed(rings)),
        positions=tuple(reversed(positions)),
        reflector=reflector_perm,
        plugs=tuple(pairs),
    )


def build_components(settings: ResolvedSettings) -> Tuple[List[Rotor], Reflector, Plugboard]:
    rotors = [
        Rotor(
            Permutation.from_letters(spec.wiring),
            to_index(spec.notch),
            ring_setting=ring,
            position=pos,
        )
        for spec, ring, pos in zip(settings.rotors, settings.rings, settings.positions)
    ]
    return rotors, Reflector(settings.reflector), Plugboard.from_pairs(settings.plugs)


# ────────────────────────────────────────────────────────────────────────
#  4. Text preprocessing
# ────────────────────────────────────────────────────────────────────────


def preprocess_message(msg: str) -> str:
    """Upper-case and drop everything that is not a plain letter A-Z."""
    return "".join(ch.upper() for ch in msg if ch in _ascii_letters)


__all__ = [
    "Catalog",
    "ConfigurationError",
    "DEFAULT_CATALOG",
    "InvalidLength",
    "InvalidPermutation",
    "InvalidSelector",
    "WheelSpec",
    "build_components",
    "parse_letters",
    "parse_plugboard",
    "parse_rotor_order",
    "preprocess_message",
    "resolve_settings",
]
