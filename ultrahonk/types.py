"""Data structures shared by the verifier."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

from . import bn254
from .field import Fr

NUMBER_OF_SUBRELATIONS = 26
CONST_PROOF_SIZE_LOG_N = 28


class VerificationError(Exception):
    """A proof failed to verify or held malformed data."""


class Wire(IntEnum):
    """Positions of the entities in the sumcheck evaluation vector."""

    QM = 0
    QC = 1
    QL = 2
    QR = 3
    QO = 4
    Q4 = 5
    Q_LOOKUP = 6
    Q_ARITH = 7
    Q_RANGE = 8
    Q_ELLIPTIC = 9
    Q_AUX = 10
    Q_POSEIDON2_EXTERNAL = 11
    Q_POSEIDON2_INTERNAL = 12
    SIGMA1 = 13
    SIGMA2 = 14
    SIGMA3 = 15
    SIGMA4 = 16
    ID1 = 17
    ID2 = 18
    ID3 = 19
    ID4 = 20
    TABLE1 = 21
    TABLE2 = 22
    TABLE3 = 23
    TABLE4 = 24
    LAGRANGE_FIRST = 25
    LAGRANGE_LAST = 26
    WL = 27
    WR = 28
    WO = 29
    W4 = 30
    Z_PERM = 31
    LOOKUP_INVERSES = 32
    LOOKUP_READ_COUNTS = 33
    LOOKUP_READ_TAGS = 34
    WL_SHIFT = 35
    WR_SHIFT = 36
    WO_SHIFT = 37
    W4_SHIFT = 38
    Z_PERM_SHIFT = 39


@dataclass(frozen=True)
class G1Point:
    """An affine G1 point; (0, 0) stands for an unused slot."""

    x: int
    y: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", self.x % bn254.P)
        object.__setattr__(self, "y", self.y % bn254.P)

    def is_dummy(self) -> bool:
        return self.x == 0 and self.y == 0

    def is_on_curve(self) -> bool:
        return bn254.g1_is_on_curve((self.x, self.y))

    def checked(self) -> G1Point:
        """Return the point itself, raising if it is not on the curve."""
        if not self.is_on_curve():
            raise VerificationError("invalid G1 point (not on curve)")
        return self

    def __neg__(self) -> G1Point:
        return G1Point(self.x, -self.y)


@dataclass
class VerificationKey:
    circuit_size: int
    log_circuit_size: int
    public_inputs_size: int
    qm: G1Point
    qc: G1Point
    ql: G1Point
    qr: G1Point
    qo: G1Point
    q4: G1Point
    q_lookup: G1Point
    q_arith: G1Point
    q_range: G1Point
    q_aux: G1Point
    q_elliptic: G1Point
    q_poseidon2_external: G1Point
    q_poseidon2_internal: G1Point
    s1: G1Point
    s2: G1Point
    s3: G1Point
    s4: G1Point
    id1: G1Point
    id2: G1Point
    id3: G1Point
    id4: G1Point
    t1: G1Point
    t2: G1Point
    t3: G1Point
    t4: G1Point
    lagrange_first: G1Point
    lagrange_last: G1Point


@dataclass
class Proof:
    w1: G1Point
    w2: G1Point
    w3: G1Point
    w4: G1Point
    lookup_read_counts: G1Point
    lookup_read_tags: G1Point
    lookup_inverses: G1Point
    z_perm: G1Point
    sumcheck_univariates: list[list[Fr]]
    sumcheck_evaluations: list[Fr]
    gemini_fold_comms: list[G1Point]
    gemini_a_evaluations: list[Fr]
    shplonk_q: G1Point
    kzg_quotient: G1Point


@dataclass
class RelationParameters:
    eta: Fr
    eta_two: Fr
    eta_three: Fr
    beta: Fr = field(default_factory=Fr.zero)
    gamma: Fr = field(default_factory=Fr.zero)
    public_inputs_delta: Fr = field(default_factory=Fr.zero)


@dataclass
class Transcript:
    """All Fiat-Shamir challenges of one proof."""

    rel_params: RelationParameters
    alphas: list[Fr]
    gate_challenges: list[Fr]
    sumcheck_u_challenges: list[Fr]
    rho: Fr
    gemini_r: Fr
    shplonk_nu: Fr
    shplonk_z: Fr