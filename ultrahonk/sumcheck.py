"""Sum-check verification."""

from __future__ import annotations

import logging
from typing import Sequence

from .debug import dbg_fr, dbg_vec, logger
from .field import Fr
from .relations import accumulate_relation_evaluations, dump_subrelations
from .types import Proof, Transcript, VerificationError, VerificationKey

BATCHED_RELATION_PARTIAL_LENGTH = 8

BARYCENTRIC_WEIGHTS = tuple(
    Fr.from_hex(h)
    for h in (
        "0x30644e72e131a029b85045b68181585d2833e84879b9709143e1f593efffec51",
        "0x00000000000000000000000000000000000000000000000000000000000002d0",
        "0x30644e72e131a029b85045b68181585d2833e84879b9709143e1f593efffff11",
        "0x0000000000000000000000000000000000000000000000000000000000000090",
        "0x30644e72e131a029b85045b68181585d2833e84879b9709143e1f593efffff71",
        "0x00000000000000000000000000000000000000000000000000000000000000f0",
        "0x30644e72e131a029b85045b68181585d2833e84879b9709143e1f593effffd31",
        "0x00000000000000000000000000000000000000000000000000000000000013b0",
    )
)


def next_target(univariate: Sequence[Fr], chi: Fr) -> Fr:
    """Evaluate at ``chi`` the polynomial given by its values at 0..7."""
    if len(univariate) < BATCHED_RELATION_PARTIAL_LENGTH:
        raise ValueError(
            f"expected {BATCHED_RELATION_PARTIAL_LENGTH} evaluations, got {len(univariate)}"
        )
    b = Fr.one()
    for i in range(BATCHED_RELATION_PARTIAL_LENGTH):
        b = b * (chi - i)
    acc = Fr.zero()
    for i, (value, weight) in enumerate(zip(univariate, BARYCENTRIC_WEIGHTS)):
        acc = acc + value * (weight * (chi - i)).inverse()
    return b * acc


def update_pow(pow_partial: Fr, gate_challenge: Fr, chi: Fr) -> Fr:
    """Fold one round's challenge into the partial pow polynomial evaluation."""
    return pow_partial * (Fr.one() + chi * (gate_challenge - 1))


def verify_sumcheck(proof: Proof, tx: Transcript, vk: VerificationKey) -> None:
    """Check every sum-check round and the final relation; raise VerificationError on failure."""
    log_n = vk.log_circuit_size
    rounds = min(
        len(proof.sumcheck_univariates), len(tx.sumcheck_u_challenges), len(tx.gate_challenges)
    )
    if log_n > rounds:
        raise VerificationError(f"log circuit size {log_n} exceeds the {rounds} proof rounds")

    target = Fr.zero()
    pow_partial = Fr.one()
    logger.debug("===== SUMCHECK =====")
    for r in range(log_n):
        univariate = proof.sumcheck_univariates[r]
        dbg_vec(f"u[{r}]", univariate)
        dbg_fr("target_before", target)
        if univariate[0] + univariate[1] != target:
            raise VerificationError(f"sum-check round {r}: linear check failed")
        chi = tx.sumcheck_u_challenges[r]
        target = next_target(univariate, chi)
        pow_partial = update_pow(pow_partial, tx.gate_challenges[r], chi)
        dbg_fr("chi", chi)
        dbg_fr("target_after", target)
        dbg_fr("pow_partial", pow_partial)

    grand = accumulate_relation_evaluations(
        proof.sumcheck_evaluations, tx.rel_params, tx.alphas, pow_partial
    )
    if logger.isEnabledFor(logging.DEBUG):
        dbg_fr("beta", tx.rel_params.beta)
        dbg_fr("gamma", tx.rel_params.gamma)
        dbg_fr("public_inputs_delta", tx.rel_params.public_inputs_delta)
        dump_subrelations(proof.sumcheck_evaluations, tx.rel_params, tx.alphas, pow_partial)
    dbg_fr("grand_relation", grand)
    dbg_fr("target", target)

    if grand != target:
        raise VerificationError("Final relation ≠ target")