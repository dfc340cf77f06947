"""Shplemini batch-opening verification over BN254."""

from __future__ import annotations

import logging
from typing import Sequence

from . import bn254
from .debug import dbg_fr, dbg_vec, dump_pairs, logger
from .field import Fr
from .types import G1Point, Proof, Transcript, VerificationError, VerificationKey

NUMBER_UNSHIFTED = 35
NUMBER_SHIFTED = 5
NUMBER_OF_ENTITIES = NUMBER_UNSHIFTED + NUMBER_SHIFTED


def _fq_le(hex_le: str) -> int:
    return int.from_bytes(bytes.fromhex(hex_le), "little") % bn254.P


# The fixed right-hand G2 element is the group generator.
RHS_G2 = bn254.G2_GENERATOR

# The fixed left-hand G2 element from the SRS.
LHS_G2 = (
    bn254.Fq2(
        _fq_le("b0838893ec1f237e8b07323b0744599f4e97b598b3b589bcc2bc37b8d5c41801"),
        _fq_le("c18393c0fa30fe4e8b038e357ad851eae8de9107584effe7c7f1f651b2010e26"),
    ),
    bn254.Fq2(
        _fq_le("555eccdad4874a85a2cee6963fdde6115e61e514425b47562a63c0c0a3bdfe22"),
        _fq_le("e45f6ada803c41eea49bf94146a0f29c85729abbc15651d2e30f11f76963fc04"),
    ),
)

_DUMMY = G1Point(0, 0)


def batch_mul(commitments: Sequence[G1Point], scalars: Sequence[Fr]) -> bn254.G1Affine:
    """Return the sum of scalar * commitment, skipping zero scalars and dummy points.

    The result is an affine pair, or None for the point at infinity.
    """
    if len(commitments) != len(scalars):
        raise ValueError("commitments / scalars length mismatch")
    acc: bn254.G1Affine = None
    for commitment, scalar in zip(commitments, scalars):
        if scalar.is_zero() or commitment.is_dummy():
            continue
        if not commitment.is_on_curve():
            raise VerificationError("invalid G1 point")
        term = bn254.g1_mul((commitment.x, commitment.y), scalar.value)
        acc = bn254.g1_add(acc, term)
    return acc


def pairing_check(p0: bn254.G1Affine, p1: bn254.G1Affine) -> bool:
    """Check e(p0, RHS_G2) * e(p1, LHS_G2) == 1."""
    for point in (p0, p1):
        if not bn254.g1_is_on_curve(point):
            raise VerificationError("invalid G1 point (not on curve)")
    f = bn254.miller_loop(RHS_G2, p0) * bn254.miller_loop(LHS_G2, p1)
    return bn254.final_exponentiation(f) == bn254.Fq12.one()


def _entity_commitments(proof: Proof, vk: VerificationKey) -> list[G1Point]:
    return [
        vk.qm,
        vk.qc,
        vk.ql,
        vk.qr,
        vk.qo,
        vk.q4,
        vk.q_lookup,
        vk.q_arith,
        vk.q_range,
        vk.q_aux,
        vk.q_elliptic,
        vk.q_poseidon2_external,
        vk.q_poseidon2_internal,
        vk.s1,
        vk.s2,
        vk.s3,
        vk.s4,
        vk.id1,
        vk.id2,
        vk.id3,
        vk.id4,
        vk.t1,
        vk.t2,
        vk.t3,
        vk.t4,
        vk.lagrange_first,
        vk.lagrange_last,
        proof.w1,
        proof.w2,
        proof.w3,
        proof.w4,
        proof.z_perm,
        proof.lookup_inverses,
        proof.lookup_read_counts,
        proof.lookup_read_tags,
        # shifted entities
        proof.w1,
        proof.w2,
        proof.w3,
        proof.w4,
        proof.z_perm,
    ]


def verify_shplemini(proof: Proof, vk: VerificationKey, tx: Transcript) -> None:
    """Run the batched opening check; raise VerificationError on failure."""
    log_n = vk.log_circuit_size
    evaluations = proof.sumcheck_evaluations
    if len(evaluations) != NUMBER_OF_ENTITIES:
        raise VerificationError(
            f"expected {NUMBER_OF_ENTITIES} sumcheck evaluations, got {len(evaluations)}"
        )
    limit = min(
        len(proof.gemini_a_evaluations),
        len(proof.gemini_fold_comms) + 1,
        len(tx.sumcheck_u_challenges),
    )
    if not 1 <= log_n <= limit:
        raise VerificationError(f"log circuit size {log_n} outside 1..{limit}")

    r_pows = [tx.gemini_r]
    for _ in range(1, log_n):
        r_pows.append(r_pows[-1] * r_pows[-1])
    dbg_fr("gemini_r", tx.gemini_r)
    dbg_vec("r_pow", r_pows)

    nu = tx.shplonk_nu
    z = tx.shplonk_z
    pos0 = (z - r_pows[0]).inverse()
    neg0 = (z + r_pows[0]).inverse()
    unshifted = pos0 + nu * neg0
    shifted = tx.gemini_r.inverse() * (pos0 - nu * neg0)
    dbg_fr("pos0", pos0)
    dbg_fr("neg0", neg0)
    dbg_fr("unshifted", unshifted)
    dbg_fr("shifted", shifted)

    scalars: list[Fr] = [Fr.one()]
    commitments: list[G1Point] = [proof.shplonk_q]

    rho_pow = Fr.one()
    eval_acc = Fr.zero()
    for idx, evaluation in enumerate(evaluations):
        weight = unshifted if idx < NUMBER_UNSHIFTED else shifted
        scalars.append(-weight * rho_pow)
        eval_acc = eval_acc + evaluation * rho_pow
        rho_pow = rho_pow * tx.rho
    commitments.extend(_entity_commitments(proof, vk))
    dbg_fr("eval_acc_end", eval_acc)

    a_evals = proof.gemini_a_evaluations
    fold_pos = [Fr.zero()] * log_n
    cur = eval_acc
    for j in range(log_n, 0, -1):
        r2 = r_pows[j - 1]
        u = tx.sumcheck_u_challenges[j - 1]
        num = r2 * cur * 2 - a_evals[j - 1] * (r2 * (Fr.one() - u) - u)
        den = r2 * (Fr.one() - u) + u
        cur = num * den.inverse()
        fold_pos[j - 1] = cur
    dbg_fr("fold_pos_end", fold_pos[0])

    const_acc = fold_pos[0] * pos0 + a_evals[0] * nu * neg0
    v_pow = nu * nu
    dbg_fr("const_acc_start", const_acc)

    for j in range(1, log_n):
        pos_inv = (z - r_pows[j]).inverse()
        neg_inv = (z + r_pows[j]).inverse()
        scale_pos = v_pow * pos_inv
        scale_neg = v_pow * nu * neg_inv
        scalars.append(-(scale_pos + scale_neg))
        commitments.append(proof.gemini_fold_comms[j - 1])
        const_acc = const_acc + a_evals[j] * scale_neg + fold_pos[j] * scale_pos
        v_pow = v_pow * nu * nu
        dbg_fr("const_acc", const_acc)

    # Unused slot left by the folding layout.
    scalars.append(Fr.zero())
    commitments.append(_DUMMY)

    commitments.append(G1Point(*bn254.G1_GENERATOR))
    scalars.append(const_acc)

    commitments.append(proof.kzg_quotient)
    scalars.append(z)

    if logger.isEnabledFor(logging.DEBUG):
        dump_pairs(commitments, scalars, None)

    p0 = batch_mul(commitments, scalars)
    p1 = (-proof.kzg_quotient).checked()
    if not pairing_check(p0, (p1.x, p1.y)):
        raise VerificationError("Shplonk pairing check failed")