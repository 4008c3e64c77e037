"""Tests for a single wheel and the reflector."""

import pytest

from permutation import SIZE, Permutation, to_index
from rotor_and_reflector import Direction, Reflector, Rotor, WheelTrace

A, E, J, K = (to_index(c) for c in "AEJK")


class TestRotorSignal:
    def test_straight_through_at_a_a(self, make_rotor):
        rotor = make_rotor("I")
        assert rotor.forward(A) == E
        assert rotor.backward(E) == A

    def test_position_shifts_the_wiring(self, make_rotor):
        # rotor I at B: A enters contact B, wired to K, leaves one back at J
        rotor = make_rotor("I", position=1)
        assert rotor.forward(A) == J

    def test_ring_setting_shifts_the_other_way(self, make_rotor):
        rotor = make_rotor("I", ring=1)
        assert rotor.forward(A) == K

    def test_equal_ring_and_position_cancel(self, make_rotor):
        plain = make_rotor("II")
        shifted = make_rotor("II", ring=7, position=7)
        for x in range(SIZE):
            assert shifted.forward(x) == plain.forward(x)

    def test_trace_records_every_contact(self, make_rotor):
        rotor = make_rotor("I", position=1)
        assert rotor.trace(Direction.FORWARD, A) == WheelTrace(A, 1, K, J)

    def test_signal_dispatches_on_direction(self, make_rotor):
        rotor = make_rotor("III", ring=3, position=11)
        for x in range(SIZE):
            assert rotor.signal(Direction.FORWARD, x) == rotor.forward(x)
            assert rotor.signal(Direction.REVERSE, x) == rotor.backward(x)

    @pytest.mark.parametrize("ring,position", [(0, 0), (5, 0), (0, 17), (23, 1), (25, 25)])
    def test_reverse_undoes_forward(self, make_rotor, ring, position):
        rotor = make_rotor("IV", ring=ring, position=position)
        outputs = {rotor.forward(x) for x in range(SIZE)}
        assert outputs == set(range(SIZE))
        for x in range(SIZE):
            assert rotor.backward(rotor.forward(x)) == x

    def test_matches_offset_formula(self, make_rotor):
        rotor = make_rotor("V", ring=13, position=4)
        wiring = rotor.wiring
        for x in range(SIZE):
            shifted = (x + 4 - 13 + 26) % 26
            expected = (wiring[shifted] - 4 + 13 + 26) % 26
            assert rotor.forward(x) == expected


class TestRotorState:
    def test_advance_wraps_around(self, make_rotor):
        rotor = make_rotor("I", position=25)
        rotor.advance()
        assert rotor.position == 0
        rotor.advance(27)
        assert rotor.position == 1

    def test_at_notch(self, make_rotor):
        rotor = make_rotor("I", position=to_index("P"))
        assert not rotor.at_notch()
        rotor.advance()
        assert rotor.at_notch()

    def test_set_wiring_derives_inverse(self, make_rotor):
        rotor = make_rotor("I")
        perm = Permutation.from_letters("BCDEFGHIJKLMNOPQRSTUVWXYZA")
        rotor.set_wiring(perm, 3)
        assert rotor.notch == 3
        assert rotor.wiring_inverse == perm.invert()
        assert rotor.forward(0) == 1
        assert rotor.backward(1) == 0

    def test_setters_reduce_modulo_26(self):
        rotor = Rotor(Permutation.identity(), 0, ring_setting=27, position=-1)
        assert rotor.ring_setting == 1
        assert rotor.position == 25

    def test_repr(self, make_rotor):
        assert repr(make_rotor("I", ring=1, position=2)) == "<Rotor pos=C ring=B notch=Q>"


class TestReflector:
    def test_reflects_by_table(self):
        refl = Reflector(Permutation.from_letters("YRUHQSLDPXNGOKMIEBFZCWVJAT"))
        assert refl.reflect(A) == to_index("Y")
        assert refl.apply(to_index("Y")) == A

    def test_is_its_own_inverse(self):
        refl = Reflector(Permutation.from_letters("EJMZALYXVBWFCRQUONTSPIKHGD"))
        for x in range(SIZE):
            assert refl.reflect(refl.reflect(x)) == x
            assert refl.reflect(x) != x
