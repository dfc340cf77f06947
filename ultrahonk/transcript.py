"""Fiat-Shamir transcript for UltraHonk proofs."""

from __future__ import annotations

from typing import Iterable, Sequence

from .debug import dbg_fr, dbg_vec, logger
from .field import Fr
from .hashing import keccak256
from .types import CONST_PROOF_SIZE_LOG_N, G1Point, Proof, RelationParameters, Transcript
from .utils import fq_to_halves_be

NUMBER_OF_ALPHAS = 25

_LOW_128 = (1 << 128) - 1


def split_challenge(value: Fr) -> tuple[Fr, Fr]:
    """Split a field element into its low and high 128-bit halves."""
    return Fr(value.value & _LOW_128), Fr(value.value >> 128)


def hash_to_fr(data: bytes) -> Fr:
    """Keccak-256 of ``data`` read as a big-endian field element."""
    return Fr.from_bytes(keccak256(data))


def _point_bytes(points: Iterable[G1Point]) -> bytes:
    out = bytearray()
    for point in points:
        checked = point.checked()
        for coord in (checked.x, checked.y):
            low, high = fq_to_halves_be(coord)
            out += low + high
    return bytes(out)


def _fr_bytes(values: Iterable[Fr]) -> bytes:
    return b"".join(value.to_bytes() for value in values)


def _u64_be32(value: int) -> bytes:
    if not 0 <= value < 1 << 64:
        raise ValueError(f"value {value} does not fit in 64 bits")
    return value.to_bytes(32, "big")


def _challenge_stream(current: Fr) -> Iterable[Fr]:
    while True:
        current = hash_to_fr(current.to_bytes())
        yield current


def generate_transcript(
    proof: Proof,
    public_inputs: Sequence[bytes],
    circuit_size: int,
    public_inputs_size: int,
    offset: int,
) -> Transcript:
    """Derive every challenge of the proof from its contents."""
    data = (
        _u64_be32(circuit_size)
        + _u64_be32(public_inputs_size)
        + _u64_be32(offset)
        + b"".join(bytes(pi) for pi in public_inputs)
        + _point_bytes((proof.w1, proof.w2, proof.w3))
    )
    h = hash_to_fr(data)
    eta, eta_two = split_challenge(h)
    current = hash_to_fr(h.to_bytes())
    eta_three, _ = split_challenge(current)

    current = hash_to_fr(
        current.to_bytes()
        + _point_bytes((proof.lookup_read_counts, proof.lookup_read_tags, proof.w4))
    )
    beta, gamma = split_challenge(current)
    rel_params = RelationParameters(
        eta=eta, eta_two=eta_two, eta_three=eta_three, beta=beta, gamma=gamma
    )

    current = hash_to_fr(
        current.to_bytes() + _point_bytes((proof.lookup_inverses, proof.z_perm))
    )
    alphas = list(split_challenge(current))
    stream = _challenge_stream(current)
    while len(alphas) < NUMBER_OF_ALPHAS:
        current = next(stream)
        alphas.extend(split_challenge(current))
    alphas = alphas[:NUMBER_OF_ALPHAS]

    gate_challenges = []
    stream = _challenge_stream(current)
    for _ in range(CONST_PROOF_SIZE_LOG_N):
        current = next(stream)
        gate_challenges.append(split_challenge(current)[0])

    u_challenges = []
    for univariate in proof.sumcheck_univariates[:CONST_PROOF_SIZE_LOG_N]:
        current = hash_to_fr(current.to_bytes() + _fr_bytes(univariate))
        u_challenges.append(split_challenge(current)[0])
    if len(u_challenges) != CONST_PROOF_SIZE_LOG_N:
        raise ValueError("proof holds too few sumcheck univariates")

    current = hash_to_fr(current.to_bytes() + _fr_bytes(proof.sumcheck_evaluations))
    rho = split_challenge(current)[0]

    current = hash_to_fr(current.to_bytes() + _point_bytes(proof.gemini_fold_comms))
    gemini_r = split_challenge(current)[0]

    current = hash_to_fr(current.to_bytes() + _fr_bytes(proof.gemini_a_evaluations))
    shplonk_nu = split_challenge(current)[0]

    current = hash_to_fr(current.to_bytes() + _point_bytes((proof.shplonk_q,)))
    shplonk_z = split_challenge(current)[0]

    logger.debug("===== TRANSCRIPT =====")
    dbg_fr("eta", eta)
    dbg_fr("eta_two", eta_two)
    dbg_fr("eta_three", eta_three)
    dbg_fr("beta", beta)
    dbg_fr("gamma", gamma)
    dbg_vec("alpha", alphas)
    dbg_vec("gate_ch", gate_challenges)
    dbg_vec("u_ch", u_challenges)
    dbg_fr("rho", rho)
    dbg_fr("gemini_r", gemini_r)
    dbg_fr("shplonk_nu", shplonk_nu)
    dbg_fr("shplonk_z", shplonk_z)
    logger.debug("======================")

    return Transcript(
        rel_params=rel_params,
        alphas=alphas,
        gate_challenges=gate_challenges,
        sumcheck_u_challenges=u_challenges,
        rho=rho,
        gemini_r=gemini_r,
        shplonk_nu=shplonk_nu,
        shplonk_z=shplonk_z,
    )