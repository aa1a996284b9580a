"""Tests for LabeledCurve identifiers."""

import pytest

from sfc4q.curve.labeled import LabeledCurve
from sfc4q.curve.morton import MortonStrategy
from sfc4q.errors import BitWidthExceeded, InvalidFormat, InvalidSymbol, OutOfRange, UnsupportedBase


def test_key_label():
    lbl = LabeledCurve.configured(2, "morton").set_by_key(6)
    assert lbl.key.to_bit_string() == "0110"
    assert lbl.id_to_string() == "12"
    assert lbl.key_to_string("16h") == "6"
    assert lbl.key_to_string("2h") == "0110"


def test_half_level_label():
    lbl = LabeledCurve.configured(2.5, "morton", base="16h").set_by_key(17)
    assert lbl.key.bits == 5
    assert lbl.id_to_string() == "8H"
    assert lbl.id_to_string("4h") == "20H"


def test_grid_prefix():
    lbl = LabeledCurve(2, MortonStrategy(), id0=3, id0_bits=4).set_by_key(6)
    assert lbl.id0 == 3
    assert lbl.id0_bits == 4
    assert lbl.id.to_bit_string() == "00110110"
    assert lbl.id_to_string() == "0312"
    assert lbl.id_to_string("16h") == "36"
    assert lbl.key_to_string() == "12"


def test_grid_prefix_natural_width():
    lbl = LabeledCurve.configured(1, id0=5).set_by_key(2)
    assert lbl.id0_bits == 3
    assert lbl.id.to_bit_string() == "10110"


def test_set_id():
    lbl = LabeledCurve(2, MortonStrategy(), id0=3, id0_bits=4)
    lbl.set_id(0b00110110)
    assert lbl.key.value == 6
    with pytest.raises(OutOfRange):
        lbl.set_id(0b01000110)
    with pytest.raises(BitWidthExceeded):
        lbl.set_id(1 << 8)


def test_set_id_without_prefix():
    lbl = LabeledCurve.configured(1.5, "hilbert").set_id(5)
    assert lbl.key.value == 5
    assert lbl.key.bits == 3


def test_set_by_coordinate():
    lbl = LabeledCurve.configured(2, "morton").set_by_coordinate(2, 1)
    assert lbl.key.value == 6

    lbl = LabeledCurve.configured(0.5, "morton").set_by_coordinate(1, 1)
    assert lbl.key.value == 1
    assert lbl.cells() == ((0, 1), (1, 1))


def test_set_by_coordinate_outside_grid_is_ignored():
    lbl = LabeledCurve.configured(2, "morton")
    lbl.set_by_coordinate(9, 0)
    assert not lbl.is_set

    lbl.set_by_key(3).set_by_coordinate(0, 4)
    assert lbl.key.value == 3


def test_set_by_bkey():
    lbl = LabeledCurve.configured(0.5, "morton").set_by_bkey(3)
    assert lbl.key.bits == 2
    assert lbl.cells() == ((1, 1), None)
    with pytest.raises(OutOfRange):
        lbl.set_by_bkey(4)


def test_cells_integer_level():
    lbl = LabeledCurve.configured(1, "hilbert").set_by_key(3)
    assert lbl.cells() == ((1, 0), None)


def test_key_out_of_range():
    with pytest.raises(OutOfRange):
        LabeledCurve.configured(1.5).set_by_key(8)


def test_configure_clears_cell():
    lbl = LabeledCurve.configured(2).set_by_key(5)
    lbl.configure(3)
    assert not lbl.is_set
    assert lbl.id_to_string() == ""
    with pytest.raises(ValueError):
        lbl.cells()


def test_set_base():
    lbl = LabeledCurve.configured(2).set_by_key(15)
    assert lbl.set_base(16).id_to_string() == "f"
    assert lbl.base == "16js"
    with pytest.raises(UnsupportedBase):
        lbl.set_base("10")


def test_repr():
    lbl = LabeledCurve.configured(1).set_by_key(2)
    assert repr(lbl) == "LabeledCurve(level=1.0, curve='morton', base='4h', id=[2,2])"


@pytest.mark.parametrize("level", [2, 2.5])
@pytest.mark.parametrize("base", ["4h", "16h", "2h"])
def test_set_by_string_round_trip(level, base):
    lbl = LabeledCurve.configured(level, "hilbert", base=base)
    for key in range(lbl.grid.n_keys):
        text = lbl.set_by_key(key).id_to_string()
        other = LabeledCurve.configured(level, "hilbert", base=base).set_by_string(text)
        assert other.key == lbl.key
        assert other.cells() == lbl.cells()


def test_set_by_string_with_grid_prefix():
    lbl = LabeledCurve(2.5, MortonStrategy(), base="16h", id0=3, id0_bits=4)
    assert lbl.set_by_string("38H").key.value == 17
    assert lbl.set_by_string("0320H", "4h").key.value == 17
    with pytest.raises(OutOfRange):
        lbl.set_by_string("48H")


def test_set_by_string_rejects_ancestor_code():
    lbl = LabeledCurve.configured(2.5, "morton")
    with pytest.raises(InvalidFormat):
        lbl.set_by_string("2")
    with pytest.raises(InvalidFormat):
        lbl.set_by_string("")
    assert not lbl.is_set


def test_set_by_string_rejects_descendant_code():
    lbl = LabeledCurve.configured(2.5, "morton")
    with pytest.raises(BitWidthExceeded):
        lbl.set_by_string("201")


def test_set_by_string_bad_symbols():
    with pytest.raises(InvalidSymbol):
        LabeledCurve.configured(2).set_by_string("1x")


def test_grid_prefix_wider_than_width():
    with pytest.raises(BitWidthExceeded):
        LabeledCurve(2, MortonStrategy(), id0=5, id0_bits=2)
    lbl = LabeledCurve.configured(2)
    with pytest.raises(BitWidthExceeded):
        lbl.set_id0(8, 3)
    assert lbl.set_id0(7, 3).id0_bits == 3


def test_set_by_coordinate_ignores_non_integers():
    lbl = LabeledCurve.configured(2, "hilbert")
    lbl.set_by_coordinate(1.5, 0)
    assert not lbl.is_set
    lbl.set_by_key(2).set_by_coordinate(1, 0.0)
    assert lbl.key.value == 2
