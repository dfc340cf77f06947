from dataclasses import replace

import pytest

from ultrahonk import bn254
from ultrahonk.field import Fr
from ultrahonk.transcript import generate_transcript, hash_to_fr, split_challenge
from ultrahonk.types import G1Point, Proof, VerificationError


def _point(k):
    return G1Point(*bn254.g1_mul(bn254.G1_GENERATOR, k))


def _proof():
    return Proof(
        w1=_point(1),
        w2=_point(2),
        w3=_point(3),
        w4=_point(4),
        lookup_read_counts=_point(5),
        lookup_read_tags=_point(6),
        lookup_inverses=_point(7),
        z_perm=_point(8),
        sumcheck_univariates=[[Fr(8 * r + i) for i in range(8)] for r in range(28)],
        sumcheck_evaluations=[Fr(1000 + i) for i in range(40)],
        gemini_fold_comms=[_point(10 + i) for i in range(27)],
        gemini_a_evaluations=[Fr(2000 + i) for i in range(28)],
        shplonk_q=_point(40),
        kzg_quotient=_point(41),
    )


def _transcript(proof, inputs=(b"\x00" * 31 + b"\x05",)):
    return generate_transcript(proof, list(inputs), 32, len(inputs), 1)


def test_split_challenge_halves():
    value = Fr.from_hex("0x" + "11" * 16 + "22" * 16)
    low, high = split_challenge(value)
    assert low == Fr.from_hex("22" * 16)
    assert high == Fr.from_hex("11" * 16)


def test_split_challenge_recombines():
    value = hash_to_fr(b"abc")
    low, high = split_challenge(value)
    assert low + high * Fr(1 << 128) == value


def test_hash_to_fr_empty_input():
    expected = Fr.from_hex("c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470")
    assert hash_to_fr(b"") == expected


def test_transcript_shapes_and_ranges():
    tx = _transcript(_proof())
    assert len(tx.alphas) == 25
    assert len(tx.gate_challenges) == 28
    assert len(tx.sumcheck_u_challenges) == 28
    challenges = tx.alphas + tx.gate_challenges + tx.sumcheck_u_challenges
    assert all(c.value < 1 << 128 for c in challenges)
    assert tx.rel_params.public_inputs_delta == Fr.zero()


def test_transcript_is_deterministic():
    first = _transcript(_proof())
    second = _transcript(_proof())
    assert [a.value for a in first.alphas] == [a.value for a in second.alphas]
    assert first.shplonk_z.value == second.shplonk_z.value
    assert first.rel_params.eta.value == second.rel_params.eta.value
    assert len({a.value for a in first.alphas}) == 25


def test_public_inputs_affect_eta():
    first = _transcript(_proof(), [b"\x00" * 31 + b"\x05"])
    second = _transcript(_proof(), [b"\x00" * 31 + b"\x06"])
    assert first.rel_params.eta != second.rel_params.eta
    assert first.shplonk_z != second.shplonk_z


def test_shplonk_q_only_changes_shplonk_z():
    base = _transcript(_proof())
    other = _transcript(replace(_proof(), shplonk_q=_point(50)))
    assert other.rho == base.rho
    assert other.gemini_r == base.gemini_r
    assert other.shplonk_nu == base.shplonk_nu
    assert other.shplonk_z != base.shplonk_z


def test_a_evaluations_change_nu_not_r():
    evals = [Fr(3000 + i) for i in range(28)]
    base = _transcript(_proof())
    other = _transcript(replace(_proof(), gemini_a_evaluations=evals))
    assert other.gemini_r == base.gemini_r
    assert other.shplonk_nu != base.shplonk_nu


def test_invalid_point_rejected():
    with pytest.raises(VerificationError):
        _transcript(replace(_proof(), w1=G1Point(1, 3)))


def test_circuit_size_out_of_range():
    with pytest.raises(ValueError):
        generate_transcript(_proof(), [], 1 << 64, 0, 1)