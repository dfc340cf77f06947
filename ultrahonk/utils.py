"""Loading proofs and verification keys, and byte/field/point conversions."""

from __future__ import annotations

import json
from typing import Sequence

from . import bn254
from .field import Fr
from .types import CONST_PROOF_SIZE_LOG_N, G1Point, Proof, VerificationKey

PROOF_NUM_FIELDS = 440
PROOF_SIZE = PROOF_NUM_FIELDS * 32

NUMBER_OF_ENTITIES = 40
BATCHED_RELATION_PARTIAL_LENGTH = 8

_G1_SIZE = 128
_FR_SIZE = 32
_HALF_SHIFT = 136
_LOW_MASK = (1 << _HALF_SHIFT) - 1
_U64_MASK = (1 << 64) - 1

_VK_POINTS_START = 20
_VK_MIN_FIELDS = 128
_VK_POINT_NAMES = (
    "qm",
    "qc",
    "ql",
    "qr",
    "qo",
    "q4",
    "q_lookup",
    "q_arith",
    "q_range",
    "q_aux",
    "q_elliptic",
    "q_poseidon2_external",
    "q_poseidon2_internal",
    "s1",
    "s2",
    "s3",
    "s4",
    "id1",
    "id2",
    "id3",
    "id4",
    "t1",
    "t2",
    "t3",
    "t4",
    "lagrange_first",
    "lagrange_last",
)


def fq_to_be_bytes(value: int) -> bytes:
    """Encode a base-field element as 32 big-endian bytes."""
    return (value % bn254.P).to_bytes(32, "big")


def fq_to_halves_be(value: int) -> tuple[bytes, bytes]:
    """Split a base-field element into its low 136 and high 120 bits, each as 32 BE bytes."""
    reduced = value % bn254.P
    return (reduced & _LOW_MASK).to_bytes(32, "big"), (reduced >> _HALF_SHIFT).to_bytes(32, "big")


def _coordinate(low: int, high: int) -> int:
    combined = (high << _HALF_SHIFT) | low
    if combined.bit_length() > 256:
        raise ValueError("coordinate does not fit in 32 bytes")
    return combined


def g1_from_bytes(data: bytes) -> G1Point:
    """Decode 128 bytes laid out as x_low, x_high, y_low, y_high."""
    if len(data) != _G1_SIZE:
        raise ValueError(f"expected {_G1_SIZE} bytes for a G1 point, got {len(data)}")
    x_low, x_high, y_low, y_high = (
        int.from_bytes(data[start : start + 32], "big") for start in range(0, _G1_SIZE, 32)
    )
    return G1Point(_coordinate(x_low, x_high), _coordinate(y_low, y_high))


class _Reader:
    """Sequential reader over proof bytes."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._pos = 0

    def take(self, size: int) -> bytes:
        end = self._pos + size
        if end > len(self._data):
            raise ValueError("proof data truncated")
        chunk = self._data[self._pos : end]
        self._pos = end
        return chunk

    def g1(self) -> G1Point:
        return g1_from_bytes(self.take(_G1_SIZE))

    def fr(self) -> Fr:
        return Fr.from_bytes(self.take(_FR_SIZE))

    def g1s(self, count: int) -> list[G1Point]:
        return [self.g1() for _ in range(count)]

    def frs(self, count: int) -> list[Fr]:
        return [self.fr() for _ in range(count)]


def load_proof(data: bytes) -> Proof:
    """Parse a serialized proof."""
    reader = _Reader(data)
    w1, w2, w3 = reader.g1s(3)
    lookup_read_counts, lookup_read_tags = reader.g1s(2)
    w4 = reader.g1()
    lookup_inverses, z_perm = reader.g1s(2)
    univariates = [
        reader.frs(BATCHED_RELATION_PARTIAL_LENGTH) for _ in range(CONST_PROOF_SIZE_LOG_N)
    ]
    evaluations = reader.frs(NUMBER_OF_ENTITIES)
    fold_comms = reader.g1s(CONST_PROOF_SIZE_LOG_N - 1)
    a_evaluations = reader.frs(CONST_PROOF_SIZE_LOG_N)
    shplonk_q, kzg_quotient = reader.g1s(2)
    return Proof(
        w1=w1,
        w2=w2,
        w3=w3,
        w4=w4,
        lookup_read_counts=lookup_read_counts,
        lookup_read_tags=lookup_read_tags,
        lookup_inverses=lookup_inverses,
        z_perm=z_perm,
        sumcheck_univariates=univariates,
        sumcheck_evaluations=evaluations,
        gemini_fold_comms=fold_comms,
        gemini_a_evaluations=a_evaluations,
        shplonk_q=shplonk_q,
        kzg_quotient=kzg_quotient,
    )


def _parse_hex(text: str) -> int:
    return int(text.removeprefix("0x"), 16)


def combine_fields(low: str, high: str) -> int:
    """Join two hex-encoded limbs as high << 136 | low."""
    return (_parse_hex(high) << _HALF_SHIFT) | _parse_hex(low)


def load_vk_from_json(json_data: str) -> VerificationKey:
    """Build a verification key from a JSON array of hex field elements."""
    fields = json.loads(json_data)
    if not isinstance(fields, list) or not all(isinstance(item, str) for item in fields):
        raise ValueError("VK JSON must be an array of hex strings")
    if len(fields) < _VK_MIN_FIELDS:
        raise ValueError("VK JSON must contain at least 128 field elements")

    circuit_size = _parse_hex(fields[0]) & _U64_MASK
    public_inputs_size = _parse_hex(fields[1]) & _U64_MASK
    log_circuit_size = max(circuit_size.bit_length() - 1, 0)

    limbs = iter(fields[_VK_POINTS_START:])
    points = {
        name: G1Point(
            _coordinate(_parse_hex(low_x), _parse_hex(high_x)),
            _coordinate(_parse_hex(low_y), _parse_hex(high_y)),
        )
        for name, (low_x, high_x, low_y, high_y) in zip(_VK_POINT_NAMES, zip(*[limbs] * 4))
    }
    return VerificationKey(
        circuit_size=circuit_size,
        log_circuit_size=log_circuit_size,
        public_inputs_size=public_inputs_size,
        **points,
    )


def load_proof_and_public_inputs(data: bytes) -> tuple[list[Fr], bytes]:
    """Split a header-prefixed blob into public inputs and raw proof bytes."""
    if len(data) < 4:
        raise ValueError("missing field-count header")
    total_fields = int.from_bytes(data[:4], "big")
    if total_fields < PROOF_NUM_FIELDS:
        raise ValueError("total_fields < proof field count")
    end = 4 + (total_fields - PROOF_NUM_FIELDS) * _FR_SIZE
    if len(data) < end:
        raise ValueError("public inputs truncated")
    public_inputs = [Fr.from_bytes(data[start : start + _FR_SIZE]) for start in range(4, end, _FR_SIZE)]
    proof_bytes = bytes(data[end:])
    if len(proof_bytes) != PROOF_SIZE:
        raise ValueError("invalid proof length")
    return public_inputs, proof_bytes


def encode_public_inputs(values: Sequence[Fr]) -> list[bytes]:
    """Encode field elements as the 32-byte strings the verifier takes."""
    return [value.to_bytes() for value in values]