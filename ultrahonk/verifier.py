"""Top-level UltraHonk proof verification."""

from __future__ import annotations

from typing import Sequence

from .field import Fr
from .shplemini import verify_shplemini
from .sumcheck import verify_sumcheck
from .transcript import generate_transcript
from .types import VerificationError, VerificationKey
from .utils import load_proof, load_vk_from_json

PUBLIC_INPUTS_OFFSET = 1


def public_inputs_delta(
    public_inputs: Sequence[bytes], beta: Fr, gamma: Fr, offset: int, n: int
) -> Fr:
    """Permutation correction term contributed by the public inputs."""
    num = Fr.one()
    den = Fr.one()
    num_acc = gamma + beta * (n + offset)
    den_acc = gamma - beta * (offset + 1)
    for raw in public_inputs:
        pi = Fr.from_bytes(bytes(raw))
        num = num * (num_acc + pi)
        den = den * (den_acc + pi)
        num_acc = num_acc + beta
        den_acc = den_acc - beta
    return num * den.inverse()


class UltraHonkVerifier:
    """Verifies UltraHonk proofs against one verification key."""

    def __init__(self, vk: VerificationKey) -> None:
        self.vk = vk

    @classmethod
    def from_json(cls, json_data: str) -> UltraHonkVerifier:
        return cls(load_vk_from_json(json_data))

    def verify(self, proof_bytes: bytes, public_inputs: Sequence[bytes]) -> None:
        """Verify a proof; raise VerificationError if it does not hold."""
        proof = load_proof(proof_bytes)

        if len(public_inputs) != self.vk.public_inputs_size:
            raise VerificationError(
                f"expected {self.vk.public_inputs_size} public inputs, "
                f"got {len(public_inputs)}"
            )

        tx = generate_transcript(
            proof,
            public_inputs,
            self.vk.circuit_size,
            self.vk.public_inputs_size,
            PUBLIC_INPUTS_OFFSET,
        )
        tx.rel_params.public_inputs_delta = public_inputs_delta(
            public_inputs,
            tx.rel_params.beta,
            tx.rel_params.gamma,
            PUBLIC_INPUTS_OFFSET,
            self.vk.circuit_size,
        )

        verify_sumcheck(proof, tx, self.vk)
        verify_shplemini(proof, self.vk, tx)