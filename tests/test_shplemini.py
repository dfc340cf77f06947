import pytest

from ultrahonk import bn254
from ultrahonk.field import Fr
from ultrahonk.shplemini import (
    LHS_G2,
    RHS_G2,
    batch_mul,
    pairing_check,
    verify_shplemini,
)
from ultrahonk.types import (
    G1Point,
    Proof,
    RelationParameters,
    Transcript,
    VerificationError,
    VerificationKey,
)

G = G1Point(1, 2)
OFF_CURVE = G1Point(1, 5)

VK_NAMES = (
    "qm qc ql qr qo q4 q_lookup q_arith q_range q_aux q_elliptic "
    "q_poseidon2_external q_poseidon2_internal s1 s2 s3 s4 id1 id2 id3 id4 "
    "t1 t2 t3 t4 lagrange_first lagrange_last"
).split()


def _multiple(k):
    x, y = bn254.g1_mul(bn254.G1_GENERATOR, k)
    return G1Point(x, y)


def _vk(log_n=3):
    return VerificationKey(
        circuit_size=1 << log_n,
        log_circuit_size=log_n,
        public_inputs_size=0,
        **{name: G for name in VK_NAMES},
    )


def _proof(**overrides):
    fields = dict(
        w1=G,
        w2=G,
        w3=G,
        w4=G,
        lookup_read_counts=G,
        lookup_read_tags=G,
        lookup_inverses=G,
        z_perm=G,
        sumcheck_univariates=[[Fr(0)] * 8 for _ in range(28)],
        sumcheck_evaluations=[Fr(i + 1) for i in range(40)],
        gemini_fold_comms=[G] * 27,
        gemini_a_evaluations=[Fr(i + 2) for i in range(28)],
        shplonk_q=G,
        kzg_quotient=G,
    )
    fields.update(overrides)
    return Proof(**fields)


def _transcript():
    return Transcript(
        rel_params=RelationParameters(eta=Fr(1), eta_two=Fr(2), eta_three=Fr(3)),
        alphas=[Fr(1)] * 25,
        gate_challenges=[Fr(2)] * 28,
        sumcheck_u_challenges=[Fr(11 + i) for i in range(28)],
        rho=Fr(5),
        gemini_r=Fr(3),
        shplonk_nu=Fr(7),
        shplonk_z=Fr(1000),
    )


def test_batch_mul_single_generator():
    assert batch_mul([G], [Fr(1)]) == bn254.G1_GENERATOR


def test_batch_mul_is_linear():
    result = batch_mul([G, _multiple(2)], [Fr(5), Fr(7)])
    assert result == bn254.g1_mul(bn254.G1_GENERATOR, 19)


def test_batch_mul_cancels_to_infinity():
    assert batch_mul([G, G], [Fr(5), -Fr(5)]) is None


def test_batch_mul_skips_zero_scalar_and_dummy():
    result = batch_mul([OFF_CURVE, G1Point(0, 0), G], [Fr(0), Fr(9), Fr(3)])
    assert result == bn254.g1_mul(bn254.G1_GENERATOR, 3)


def test_batch_mul_rejects_invalid_point():
    with pytest.raises(VerificationError, match="invalid G1 point"):
        batch_mul([OFF_CURVE], [Fr(1)])


def test_batch_mul_length_mismatch():
    with pytest.raises(ValueError, match="length mismatch"):
        batch_mul([G, G], [Fr(1)])


def test_fixed_g2_points_on_curve():
    assert bn254.g2_is_on_curve(LHS_G2)
    assert bn254.g2_is_on_curve(RHS_G2)


def test_pairing_check_of_infinity_holds():
    assert pairing_check(None, None) is True


def test_pairing_check_fails_for_generator_alone():
    assert pairing_check(bn254.G1_GENERATOR, None) is False


def test_pairing_check_rejects_off_curve():
    with pytest.raises(VerificationError):
        pairing_check((1, 5), None)


def test_verify_rejects_wrong_evaluation_count():
    proof = _proof(sumcheck_evaluations=[Fr(1)] * 39)
    with pytest.raises(VerificationError, match="sumcheck evaluations"):
        verify_shplemini(proof, _vk(), _transcript())


def test_verify_rejects_zero_log_size():
    with pytest.raises(VerificationError, match="log circuit size"):
        verify_shplemini(_proof(), _vk(log_n=0), _transcript())


def test_verify_rejects_off_curve_fold_commitment():
    proof = _proof(gemini_fold_comms=[OFF_CURVE] + [G] * 26)
    with pytest.raises(VerificationError, match="invalid G1 point"):
        verify_shplemini(proof, _vk(), _transcript())


def test_verify_rejects_off_curve_quotient():
    proof = _proof(kzg_quotient=OFF_CURVE)
    with pytest.raises(VerificationError, match="invalid G1 point"):
        verify_shplemini(proof, _vk(), _transcript())


def test_verify_fails_pairing_for_arbitrary_data():
    with pytest.raises(VerificationError, match="pairing check failed"):
        verify_shplemini(_proof(), _vk(), _transcript())