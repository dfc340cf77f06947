"""BN254 curve arithmetic and the optimal ate pairing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

P = 0x30644E72E131A029B85045B68181585D97816A916871CA8D3C208C16D87CFD47
R = 0x30644E72E131A029B85045B68181585D2833E84879B9709143E1F593F0000001

ATE_LOOP_COUNT = 29793968203157093288
_LOG_ATE_LOOP_COUNT = 63

G1Affine = Optional[Tuple[int, int]]


@dataclass(frozen=True)
class Fq2:
    """Element c0 + c1*i of Fq[i]/(i^2 + 1)."""

    c0: int = 0
    c1: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "c0", self.c0 % P)
        object.__setattr__(self, "c1", self.c1 % P)

    def __add__(self, other: Fq2) -> Fq2:
        return Fq2(self.c0 + other.c0, self.c1 + other.c1)

    def __sub__(self, other: Fq2) -> Fq2:
        return Fq2(self.c0 - other.c0, self.c1 - other.c1)

    def __mul__(self, other: Fq2 | int) -> Fq2:
        if isinstance(other, int):
            return Fq2(self.c0 * other, self.c1 * other)
        return Fq2(
            self.c0 * other.c0 - self.c1 * other.c1,
            self.c0 * other.c1 + self.c1 * other.c0,
        )

    def __neg__(self) -> Fq2:
        return Fq2(-self.c0, -self.c1)

    def inverse(self) -> Fq2:
        norm = (self.c0 * self.c0 + self.c1 * self.c1) % P
        if norm == 0:
            raise ZeroDivisionError("zero has no inverse")
        inv = pow(norm, -1, P)
        return Fq2(self.c0 * inv, -self.c1 * inv)


G2Affine = Optional[Tuple[Fq2, Fq2]]

# w^12 - 18 w^6 + 82 = 0
_MODULUS = (82, 0, 0, 0, 0, 0, -18 % P, 0, 0, 0, 0, 0)


def _deg(poly: list[int]) -> int:
    d = len(poly) - 1
    while d and poly[d] == 0:
        d -= 1
    return d


def _poly_div(a: list[int], b: list[int]) -> list[int]:
    da, db = _deg(a), _deg(b)
    temp = list(a)
    out = [0] * len(a)
    inv_lead = pow(b[db], -1, P)
    for i in range(da - db, -1, -1):
        q = temp[db + i] * inv_lead % P
        out[i] = q
        for c in range(db + 1):
            temp[c + i] = (temp[c + i] - q * b[c]) % P
    return out


@dataclass(frozen=True)
class Fq12:
    """Element of Fq[w]/(w^12 - 18 w^6 + 82), as 12 coefficients."""

    coeffs: Tuple[int, ...]

    def __init__(self, coeffs: Iterable[int]) -> None:
        values = tuple(c % P for c in coeffs)
        if len(values) != 12:
            raise ValueError("Fq12 needs exactly 12 coefficients")
        object.__setattr__(self, "coeffs", values)

    @classmethod
    def one(cls) -> Fq12:
        return cls([1] + [0] * 11)

    @classmethod
    def scalar(cls, value: int) -> Fq12:
        return cls([value] + [0] * 11)

    def __add__(self, other: Fq12) -> Fq12:
        return Fq12(a + b for a, b in zip(self.coeffs, other.coeffs))

    def __sub__(self, other: Fq12) -> Fq12:
        return Fq12(a - b for a, b in zip(self.coeffs, other.coeffs))

    def __neg__(self) -> Fq12:
        return Fq12(-a for a in self.coeffs)

    def __mul__(self, other: Fq12 | int) -> Fq12:
        if isinstance(other, int):
            return Fq12(a * other for a in self.coeffs)
        prod = [0] * 23
        for i, x in enumerate(self.coeffs):
            if x:
                for j, y in enumerate(other.coeffs):
                    prod[i + j] += x * y
        for k in range(22, 11, -1):
            top = prod[k]
            prod[k - 6] += 18 * top
            prod[k - 12] -= 82 * top
        return Fq12(prod[:12])

    __rmul__ = __mul__

    def __pow__(self, exponent: int) -> Fq12:
        base = self
        if exponent < 0:
            base, exponent = self.inverse(), -exponent
        result = Fq12.one()
        while exponent:
            if exponent & 1:
                result = result * base
            base = base * base
            exponent >>= 1
        return result

    def inverse(self) -> Fq12:
        if not any(self.coeffs):
            raise ZeroDivisionError("zero has no inverse")
        lm, hm = [1] + [0] * 12, [0] * 13
        low, high = list(self.coeffs) + [0], list(_MODULUS) + [1]
        while _deg(low):
            r = _poly_div(high, low)
            r += [0] * (13 - len(r))
            nm, new = list(hm), list(high)
            for i in range(13):
                for j in range(13 - i):
                    nm[i + j] -= lm[i] * r[j]
                    new[i + j] -= low[i] * r[j]
            nm = [x % P for x in nm]
            new = [x % P for x in new]
            lm, low, hm, high = nm, new, lm, low
        return Fq12(lm[:12]) * pow(low[0], -1, P)


G1_GENERATOR: Tuple[int, int] = (1, 2)
G2_GENERATOR: Tuple[Fq2, Fq2] = (
    Fq2(
        0x1800DEEF121F1E76426A00665E5C4479674322D4F75EDADD46DEBD5CD992F6ED,
        0x198E9393920D483A7260BFB731FB5D25F1AA493335A9E71297E485B7AEF312C2,
    ),
    Fq2(
        0x12C85EA5DB8C6DEB4AAB71808DCB408FE3D1E7690C43D37B4CE6CC0166FA7DAA,
        0x090689D0585FF075EC9E99AD690C3395BC4B313370B38EF355ACDADCD122975B,
    ),
)
_B2 = Fq2(3, 0) * Fq2(9, 1).inverse()


def g1_is_on_curve(point: G1Affine) -> bool:
    if point is None:
        return True
    x, y = point
    return (y * y - x * x * x - 3) % P == 0


def g1_neg(point: G1Affine) -> G1Affine:
    if point is None:
        return None
    return point[0], -point[1] % P


def g1_add(p: G1Affine, q: G1Affine) -> G1Affine:
    if p is None:
        return q
    if q is None:
        return p
    x1, y1 = p
    x2, y2 = q
    if x1 == x2:
        if (y1 + y2) % P == 0:
            return None
        m = 3 * x1 * x1 * pow(2 * y1, -1, P) % P
    else:
        m = (y2 - y1) * pow(x2 - x1, -1, P) % P
    x3 = (m * m - x1 - x2) % P
    return x3, (m * (x1 - x3) - y1) % P


def g1_mul(point: G1Affine, scalar: int) -> G1Affine:
    if scalar < 0:
        return g1_mul(g1_neg(point), -scalar)
    result: G1Affine = None
    addend = point
    while scalar:
        if scalar & 1:
            result = g1_add(result, addend)
        addend = g1_add(addend, addend)
        scalar >>= 1
    return result


def g2_is_on_curve(point: G2Affine) -> bool:
    if point is None:
        return True
    x, y = point
    return y * y - x * x * x == _B2


def _twist(q: Tuple[Fq2, Fq2]) -> Tuple[Fq12, Fq12]:
    w = Fq12([0, 1] + [0] * 10)
    out = []
    for coord in q:
        coeffs = [0] * 12
        coeffs[0] = coord.c0 - 9 * coord.c1
        coeffs[6] = coord.c1
        out.append(Fq12(coeffs))
    return out[0] * w**2, out[1] * w**3


def _line(p1, p2, t) -> Fq12:
    x1, y1 = p1
    x2, y2 = p2
    xt, yt = t
    if x1 != x2:
        m = (y2 - y1) * (x2 - x1).inverse()
    elif y1 == y2:
        m = x1 * x1 * 3 * (y1 * 2).inverse()
    else:
        return xt - x1
    return m * (xt - x1) - (yt - y1)


def _fq12_add(p1, p2):
    x1, y1 = p1
    x2, y2 = p2
    if x1 == x2:
        if y1 != y2:
            return None
        m = x1 * x1 * 3 * (y1 * 2).inverse()
    else:
        m = (y2 - y1) * (x2 - x1).inverse()
    x3 = m * m - x1 - x2
    return x3, m * (x1 - x3) - y1


def miller_loop(q: G2Affine, p: G1Affine) -> Fq12:
    """Miller loop of the optimal ate pairing, without final exponentiation."""
    if q is None or p is None:
        return Fq12.one()
    big_q = _twist(q)
    t = (Fq12.scalar(p[0]), Fq12.scalar(p[1]))
    acc = big_q
    f = Fq12.one()
    for i in range(_LOG_ATE_LOOP_COUNT, -1, -1):
        f = f * f * _line(acc, acc, t)
        acc = _fq12_add(acc, acc)
        if ATE_LOOP_COUNT & (1 << i):
            f = f * _line(acc, big_q, t)
            acc = _fq12_add(acc, big_q)
    q1 = (big_q[0] ** P, big_q[1] ** P)
    nq2 = (q1[0] ** P, -(q1[1] ** P))
    f = f * _line(acc, q1, t)
    acc = _fq12_add(acc, q1)
    return f * _line(acc, nq2, t)


def final_exponentiation(f: Fq12) -> Fq12:
    return f ** ((P**12 - 1) // R)


def pairing(p: G1Affine, q: G2Affine) -> Fq12:
    """Optimal ate pairing e(p, q) for p in G1 and q in G2."""
    if not g1_is_on_curve(p):
        raise ValueError("G1 point is not on the curve")
    if not g2_is_on_curve(q):
        raise ValueError("G2 point is not on the curve")
    return final_exponentiation(miller_loop(q, p))