"""Shared fixtures for the Enigma simulator tests."""
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))
sys.path.insert(0, str(Path(__file__).resolve().parent))

from enigma import EnigmaMachine  # noqa: E402
from keyboard_and_plugboard import Plugboard  # noqa: E402
from main import MachineConfig, build_machine  # noqa: E402
from permutation import Permutation  # noqa: E402
from rotor_and_reflector import Reflector, Rotor  # noqa: E402
from utilities import DEFAULT_CATALOG  # noqa: E402
from vectors import MANUAL_SETTINGS  # noqa: E402


@pytest.fixture
def repo_root():
    return ROOT


@pytest.fixture
def default_machine():
    """Rotors I II III (left to right), reflector B, AAA / AAA, no steckers."""
    return build_machine(MachineConfig())


@pytest.fixture
def manual_machine():
    return build_machine(MachineConfig(**MANUAL_SETTINGS))


@pytest.fixture
def make_rotor():
    def _make(name="I", ring=0, position=0):
        spec = DEFAULT_CATALOG.rotors[name]
        return Rotor(
            Permutation.from_letters(spec.wiring),
            ord(spec.notch) - ord("A"),
            ring_setting=ring,
            position=position,
        )
    return _make


@pytest.fixture
def make_machine(make_rotor):
    """Build a machine from wheel names given in wheel order (rightmost first)."""
    def _make(names=("III", "II", "I"), positions=None, reflector="B", plugboard=None):
        positions = positions or [0] * len(names)
        rotors = [make_rotor(n, position=p) for n, p in zip(names, positions)]
        refl = Reflector(Permutation.from_letters(DEFAULT_CATALOG.reflectors[reflector]))
        return EnigmaMachine(rotors, refl, plugboard or Plugboard())
    return _make
