import pytest

from ultrahonk.bn254 import (
    G1_GENERATOR,
    G2_GENERATOR,
    R,
    Fq2,
    Fq12,
    final_exponentiation,
    g1_add,
    g1_is_on_curve,
    g1_mul,
    g1_neg,
    g2_is_on_curve,
    miller_loop,
    pairing,
)


@pytest.fixture(scope="module")
def base_pairing():
    return pairing(G1_GENERATOR, G2_GENERATOR)


def test_fq2_inverse_and_ring_laws():
    a = Fq2(5, 7)
    b = Fq2(11, 13)
    assert a * a.inverse() == Fq2(1, 0)
    assert (a + b) - b == a
    assert a + -a == Fq2(0, 0)
    assert a * b == b * a


def test_fq12_inverse_and_pow():
    x = Fq12(range(1, 13))
    y = Fq12(range(20, 32))
    assert x * x.inverse() == Fq12.one()
    assert x**3 == x * x * x
    assert x * (y + Fq12.one()) == x * y + x
    assert (x - y) + y == x


def test_g1_group_laws():
    double = g1_mul(G1_GENERATOR, 2)
    assert double == g1_add(G1_GENERATOR, G1_GENERATOR)
    assert g1_is_on_curve(double)
    assert g1_add(G1_GENERATOR, g1_neg(G1_GENERATOR)) is None
    assert g1_mul(G1_GENERATOR, R) is None
    assert g1_mul(G1_GENERATOR, 5) == g1_add(g1_mul(G1_GENERATOR, 2), g1_mul(G1_GENERATOR, 3))


def test_curve_membership():
    assert g1_is_on_curve(G1_GENERATOR)
    assert not g1_is_on_curve((1, 3))
    assert g2_is_on_curve(G2_GENERATOR)
    assert not g2_is_on_curve((G2_GENERATOR[0], G2_GENERATOR[0]))


def test_pairing_rejects_invalid_points():
    with pytest.raises(ValueError):
        pairing((1, 3), G2_GENERATOR)


def test_pairing_is_non_degenerate(base_pairing):
    assert base_pairing != Fq12.one()
    assert base_pairing**R == Fq12.one()


def test_pairing_bilinearity(base_pairing):
    neg = pairing(g1_neg(G1_GENERATOR), G2_GENERATOR)
    assert base_pairing * neg == Fq12.one()
    assert final_exponentiation(miller_loop(G2_GENERATOR, G1_GENERATOR)) == base_pairing