"""Evaluation and batching of the UltraHonk subrelations."""

from __future__ import annotations

from typing import Sequence

from .debug import logger
from .field import Fr
from .types import NUMBER_OF_SUBRELATIONS, RelationParameters, Wire

NUMBER_OF_ENTITIES = len(Wire)

NEG_HALF = Fr.from_hex("0x183227397098d014dc2822db40c0ac2e9419f4243cdcb848a1f0fac9f8000000")

INTERNAL_MATRIX_DIAGONAL = tuple(
    Fr.from_hex(h)
    for h in (
        "0x10dc6e9c006ea38b04b1e03b4bd9490c0d03f98929ca1d7fb56821fd19d3b6e7",
        "0x0c28145b6a44df3e0149b3d0a30b3bb599df9756d4dd9b84a86b38cfb45a740b",
        "0x00544b8338791518b2c7645a50392798b21f75bb60e3596170067d00141cac15",
        "0x222c01175718386f2e2e82eb122789e352e105a3b8fa852613bc534433ee428b",
    )
)

LIMB_SIZE = Fr.from_hex("0x100000000000000000")
SUBLIMB_SHIFT = Fr(1 << 14)
_B_NEG = Fr(17)


def _arithmetic(v: Sequence[Fr], d: Fr) -> list[Fr]:
    q = v[Wire.Q_ARITH]
    acc = (q - 3) * v[Wire.QM] * v[Wire.WR] * v[Wire.WL] * NEG_HALF
    acc = (
        acc
        + v[Wire.QL] * v[Wire.WL]
        + v[Wire.QR] * v[Wire.WR]
        + v[Wire.QO] * v[Wire.WO]
        + v[Wire.Q4] * v[Wire.W4]
        + v[Wire.QC]
    )
    first = (acc + (q - 1) * v[Wire.W4_SHIFT]) * q * d
    second = (
        (v[Wire.WL] + v[Wire.W4] - v[Wire.WL_SHIFT] + v[Wire.QM]) * (q - 2) * (q - 1) * q * d
    )
    return [first, second]


def _permutation(v: Sequence[Fr], rp: RelationParameters, d: Fr) -> list[Fr]:
    def grand_product(copies: tuple[Wire, Wire, Wire, Wire]) -> Fr:
        result = Fr.one()
        for wire, copy in zip((Wire.WL, Wire.WR, Wire.WO, Wire.W4), copies):
            result = result * (v[wire] + v[copy] * rp.beta + rp.gamma)
        return result

    num = grand_product((Wire.ID1, Wire.ID2, Wire.ID3, Wire.ID4))
    den = grand_product((Wire.SIGMA1, Wire.SIGMA2, Wire.SIGMA3, Wire.SIGMA4))
    first = (
        (v[Wire.Z_PERM] + v[Wire.LAGRANGE_FIRST]) * num
        - (v[Wire.Z_PERM_SHIFT] + v[Wire.LAGRANGE_LAST] * rp.public_inputs_delta) * den
    ) * d
    second = v[Wire.LAGRANGE_LAST] * v[Wire.Z_PERM_SHIFT] * d
    return [first, second]


def _lookup(v: Sequence[Fr], rp: RelationParameters, d: Fr) -> list[Fr]:
    write_term = (
        v[Wire.TABLE1]
        + rp.gamma
        + v[Wire.TABLE2] * rp.eta
        + v[Wire.TABLE3] * rp.eta_two
        + v[Wire.TABLE4] * rp.eta_three
    )
    derived_entry_2 = v[Wire.WR] + v[Wire.QM] * v[Wire.WR_SHIFT]
    derived_entry_3 = v[Wire.WO] + v[Wire.QC] * v[Wire.WO_SHIFT]
    read_term = (
        v[Wire.WL]
        + rp.gamma
        + v[Wire.QR] * v[Wire.WL_SHIFT]
        + derived_entry_2 * rp.eta
        + derived_entry_3 * rp.eta_two
        + v[Wire.QO] * rp.eta_three
    )
    inv = v[Wire.LOOKUP_INVERSES]
    tags, q_lookup = v[Wire.LOOKUP_READ_TAGS], v[Wire.Q_LOOKUP]
    inv_exists = tags + q_lookup - tags * q_lookup
    first = (read_term * write_term * inv - inv_exists) * d
    second = q_lookup * (write_term * inv) - v[Wire.LOOKUP_READ_COUNTS] * (read_term * inv)
    return [first, second]


def _range(v: Sequence[Fr], d: Fr) -> list[Fr]:
    deltas = (
        v[Wire.WR] - v[Wire.WL],
        v[Wire.WO] - v[Wire.WR],
        v[Wire.W4] - v[Wire.WO],
        v[Wire.WL_SHIFT] - v[Wire.W4],
    )
    out = []
    for delta in deltas:
        acc = delta
        for k in (1, 2, 3):
            acc = acc * (delta - k)
        out.append(acc * v[Wire.Q_RANGE] * d)
    return out


def _elliptic(v: Sequence[Fr], d: Fr) -> list[Fr]:
    x1, y1 = v[Wire.WR], v[Wire.WO]
    x2, y2 = v[Wire.WL_SHIFT], v[Wire.W4_SHIFT]
    x3, y3 = v[Wire.WR_SHIFT], v[Wire.WO_SHIFT]
    q_sign, q_double, q_gate = v[Wire.QL], v[Wire.QM], v[Wire.Q_ELLIPTIC]

    delta_x = x2 - x1
    y1_sq = y1 * y1

    y1y2 = y1 * y2 * q_sign
    x_add_id = (x3 + x2 + x1) * delta_x * delta_x - y2 * y2 - y1_sq + y1y2 + y1y2
    y_add_id = (y1 + y3) * delta_x + (x3 - x1) * (y2 * q_sign - y1)

    x_pow_4 = (y1_sq + _B_NEG) * x1
    x_double_id = (x3 + x1 + x1) * (y1_sq + y1_sq + y1_sq + y1_sq) - x_pow_4 * 9
    y_double_id = (x1 + x1 + x1) * x1 * (x1 - x3) - (y1 + y1) * (y1 + y3)

    add_factor = (Fr.one() - q_double) * q_gate * d
    double_factor = q_double * q_gate * d
    return [
        x_add_id * add_factor + x_double_id * double_factor,
        y_add_id * add_factor + y_double_id * double_factor,
    ]


def _aux(v: Sequence[Fr], rp: RelationParameters, d: Fr) -> list[Fr]:
    wl, wr, wo, w4 = v[Wire.WL], v[Wire.WR], v[Wire.WO], v[Wire.W4]
    wl_s, wr_s, wo_s, w4_s = v[Wire.WL_SHIFT], v[Wire.WR_SHIFT], v[Wire.WO_SHIFT], v[Wire.W4_SHIFT]
    ql, qr, qo, q4, qm, qc = v[Wire.QL], v[Wire.QR], v[Wire.QO], v[Wire.Q4], v[Wire.QM], v[Wire.QC]
    q_arith, q_aux = v[Wire.Q_ARITH], v[Wire.Q_AUX]

    limb_subproduct = wl * wr_s + wl_s * wr
    gate2 = (wl * w4 + wr * wo - wo_s) * LIMB_SIZE - w4_s + limb_subproduct
    gate2 = gate2 * q4
    limb_subproduct = limb_subproduct * LIMB_SIZE + wl_s * wr_s
    gate1 = (limb_subproduct - (wo + w4)) * qo
    gate3 = (limb_subproduct + w4 - (wo_s + w4_s)) * qm
    non_native_field_identity = (gate1 + gate2 + gate3) * qr

    limb_acc_1 = wr_s * SUBLIMB_SHIFT + wl_s
    for term in (wo, wr, wl):
        limb_acc_1 = limb_acc_1 * SUBLIMB_SHIFT + term
    limb_acc_1 = (limb_acc_1 - w4) * q4

    limb_acc_2 = wo_s * SUBLIMB_SHIFT + wr_s
    for term in (wl_s, w4, wo):
        limb_acc_2 = limb_acc_2 * SUBLIMB_SHIFT + term
    limb_acc_2 = (limb_acc_2 - w4_s) * qm

    limb_acc_identity = (limb_acc_1 + limb_acc_2) * qo

    partial = wo * rp.eta_three + wr * rp.eta_two + wl * rp.eta + qc
    memory_record = partial - w4

    idx_delta = wl_s - wl
    rec_delta = w4_s - w4
    idx_inc = idx_delta * idx_delta - idx_delta
    adj_match = (Fr.one() - idx_delta) * rec_delta

    access_type = w4 - partial
    access_check = access_type * access_type - access_type

    next_gate = w4_s - (wo_s * rp.eta_three + wr_s * rp.eta_two + wl_s * rp.eta)
    val_delta = wo_s - wo
    adj_match2 = (Fr.one() - idx_delta) * val_delta * (Fr.one() - next_gate)

    rom_consistency = memory_record * ql * qr
    ram_timestamp = (Fr.one() - idx_delta) * (wr_s - wr) - wo
    ram_consistency = access_check * q_arith
    memory_identity = (
        rom_consistency + ram_timestamp * q4 * ql + memory_record * qm * ql + ram_consistency
    )

    return [
        (memory_identity + non_native_field_identity + limb_acc_identity) * q_aux * d,
        adj_match * ql * qr * q_aux * d,
        idx_inc * ql * qr * q_aux * d,
        adj_match2 * q_arith * q_aux * d,
        idx_inc * q_arith * q_aux * d,
        (next_gate * next_gate - next_gate) * q_arith * q_aux * d,
    ]


def _poseidon(v: Sequence[Fr], d: Fr) -> list[Fr]:
    s1 = v[Wire.WL] + v[Wire.QL]
    s2 = v[Wire.WR] + v[Wire.QR]
    s3 = v[Wire.WO] + v[Wire.QO]
    s4 = v[Wire.W4] + v[Wire.Q4]
    u1, u2, u3, u4 = (s.pow(5) for s in (s1, s2, s3, s4))

    t0 = u1 + u2
    t1 = u3 + u4
    t2 = u2 + u2 + t1
    t3 = u4 + u4 + t0
    v4 = t1 + t1 + t1 + t1 + t3
    v2 = t0 + t0 + t0 + t0 + t2
    v1 = t3 + v2
    v3 = t2 + v4

    shifts = (v[Wire.WL_SHIFT], v[Wire.WR_SHIFT], v[Wire.WO_SHIFT], v[Wire.W4_SHIFT])
    q_ext = v[Wire.Q_POSEIDON2_EXTERNAL]
    external = [(value - shift) * q_ext * d for value, shift in zip((v1, v2, v3, v4), shifts)]

    internal_inputs = (u1, v[Wire.WR], v[Wire.WO], v[Wire.W4])
    u_sum = internal_inputs[0] + internal_inputs[1] + internal_inputs[2] + internal_inputs[3]
    q_int = v[Wire.Q_POSEIDON2_INTERNAL]
    internal = [
        (u * diag + u_sum - shift) * q_int * d
        for u, diag, shift in zip(internal_inputs, INTERNAL_MATRIX_DIAGONAL, shifts)
    ]
    return external + internal


def subrelation_evaluations(
    vals: Sequence[Fr], rp: RelationParameters, pow_partial: Fr
) -> list[Fr]:
    """Evaluate all 26 subrelations at the given entity values."""
    if len(vals) < NUMBER_OF_ENTITIES:
        raise ValueError(f"expected {NUMBER_OF_ENTITIES} evaluations, got {len(vals)}")
    d = pow_partial
    out = (
        _arithmetic(vals, d)
        + _permutation(vals, rp, d)
        + _lookup(vals, rp, d)
        + _range(vals, d)
        + _elliptic(vals, d)
        + _aux(vals, rp, d)
        + _poseidon(vals, d)
    )
    assert len(out) == NUMBER_OF_SUBRELATIONS
    return out


def _batch(evaluations: Sequence[Fr], alphas: Sequence[Fr]) -> Fr:
    if len(alphas) > len(evaluations) - 1:
        raise ValueError(f"at most {len(evaluations) - 1} alphas may be given, got {len(alphas)}")
    acc = evaluations[0]
    for evaluation, alpha in zip(evaluations[1:], alphas):
        acc = acc + evaluation * alpha
    return acc


def accumulate_relation_evaluations(
    vals: Sequence[Fr], rp: RelationParameters, alphas: Sequence[Fr], pow_partial: Fr
) -> Fr:
    """Evaluate all subrelations and batch them with the alpha challenges."""
    return _batch(subrelation_evaluations(vals, rp, pow_partial), alphas)


def dump_subrelations(
    vals: Sequence[Fr], rp: RelationParameters, alphas: Sequence[Fr], pow_partial: Fr
) -> Fr:
    """Like accumulate_relation_evaluations, logging every subrelation on the way."""
    evaluations = subrelation_evaluations(vals, rp, pow_partial)
    logger.debug("===== SUBRELATIONS =====")
    for i, value in enumerate(evaluations):
        logger.debug("rel[%02d] = 0x%s", i, value.to_bytes().hex())
    logger.debug("========================")
    return _batch(evaluations, alphas)