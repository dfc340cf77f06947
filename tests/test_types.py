import pytest

from ultrahonk.bn254 import P
from ultrahonk.field import Fr
from ultrahonk.types import G1Point, RelationParameters, VerificationError, Wire


def test_wire_layout():
    assert [int(w) for w in Wire] == list(range(40))
    assert Wire(0) is Wire.QM
    assert Wire(27) is Wire.WL
    assert Wire(39) is Wire.Z_PERM_SHIFT
    assert Wire["WL"] == 27


def test_generator_is_valid():
    point = G1Point(1, 2)
    assert point.is_on_curve()
    assert point.checked() is point
    assert not point.is_dummy()


def test_dummy_point_is_rejected():
    dummy = G1Point(0, 0)
    assert dummy.is_dummy()
    with pytest.raises(VerificationError):
        dummy.checked()


def test_negation():
    point = G1Point(1, 2)
    neg = -point
    assert neg == G1Point(1, P - 2)
    assert neg.is_on_curve()
    assert -neg == point


def test_coordinates_are_reduced():
    assert G1Point(P + 1, P + 2) == G1Point(1, 2)


def test_relation_parameters_defaults():
    rp = RelationParameters(eta=Fr.one(), eta_two=Fr.one(), eta_three=Fr.one())
    assert rp.beta.is_zero()
    assert rp.public_inputs_delta == Fr.zero()