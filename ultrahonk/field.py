"""Elements of the BN254 scalar field."""

from __future__ import annotations

from dataclasses import dataclass

MODULUS = 0x30644E72E131A029B85045B68181585D2833E84879B9709143E1F593F0000001

_U64_MASK = (1 << 64) - 1


def _normalize_hex(text: str) -> str:
    raw = text[2:] if text.startswith("0x") else text
    return "0" + raw if len(raw) % 2 else raw


def _coerce(other: object) -> int | None:
    if isinstance(other, Fr):
        return other.value
    if isinstance(other, int):
        return other % MODULUS
    return None


@dataclass(frozen=True)
class Fr:
    """An element of the BN254 scalar field, always kept reduced."""

    value: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", self.value % MODULUS)

    @classmethod
    def from_u64(cls, x: int) -> Fr:
        return cls(x)

    @classmethod
    def from_hex(cls, s: str) -> Fr:
        """Parse a big-endian hex string, with or without a 0x prefix."""
        data = bytes.fromhex(_normalize_hex(s))
        if len(data) > 32:
            raise ValueError("hex value longer than 32 bytes")
        return cls.from_bytes(data.rjust(32, b"\x00"))

    @classmethod
    def from_bytes(cls, data: bytes) -> Fr:
        """Build from 32 big-endian bytes, reducing modulo the field order."""
        if len(data) != 32:
            raise ValueError(f"expected 32 bytes, got {len(data)}")
        return cls(int.from_bytes(data, "big"))

    @classmethod
    def zero(cls) -> Fr:
        return cls(0)

    @classmethod
    def one(cls) -> Fr:
        return cls(1)

    def to_bytes(self) -> bytes:
        return self.value.to_bytes(32, "big")

    def to_hex(self) -> str:
        return "0x" + self.to_bytes().hex()

    def inverse(self) -> Fr:
        if self.value == 0:
            raise ZeroDivisionError("zero has no inverse")
        return Fr(pow(self.value, -1, MODULUS))

    def pow(self, exp: int) -> Fr:
        """Raise to a power; the exponent is taken as a 64-bit unsigned value."""
        return Fr(pow(self.value, exp & _U64_MASK, MODULUS))

    def is_zero(self) -> bool:
        return self.value == 0

    def __add__(self, other: object) -> Fr:
        v = _coerce(other)
        return NotImplemented if v is None else Fr(self.value + v)

    __radd__ = __add__

    def __sub__(self, other: object) -> Fr:
        v = _coerce(other)
        return NotImplemented if v is None else Fr(self.value - v)

    def __rsub__(self, other: object) -> Fr:
        v = _coerce(other)
        return NotImplemented if v is None else Fr(v - self.value)

    def __mul__(self, other: object) -> Fr:
        v = _coerce(other)
        return NotImplemented if v is None else Fr(self.value * v)

    __rmul__ = __mul__

    def __truediv__(self, other: object) -> Fr:
        v = _coerce(other)
        if v is None:
            return NotImplemented
        return self * Fr(v).inverse()

    def __neg__(self) -> Fr:
        return Fr(-self.value)

    def __int__(self) -> int:
        return self.value

    def __repr__(self) -> str:
        return f"Fr({self.to_hex()})"