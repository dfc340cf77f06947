"""Trace output helpers, emitted on the ``ultrahonk.trace`` logger at DEBUG."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from .field import Fr
from .types import G1Point

logger = logging.getLogger("ultrahonk.trace")


def fr_to_hex(fr: Fr) -> str:
    """Big-endian fixed-width hex of a field element."""
    return f"0x{fr.value:064x}"


def g1_to_hex(point: G1Point) -> tuple[str, str]:
    return f"0x{point.x:064x}", f"0x{point.y:064x}"


def dump_pairs(
    commitments: Sequence[G1Point],
    scalars: Sequence[Fr],
    head_tail: Optional[int] = None,
) -> None:
    """Log commitment/scalar pairs, eliding the middle unless head_tail is None."""
    if len(commitments) != len(scalars):
        raise ValueError("commitment / scalar length mismatch")
    length = len(commitments)
    logger.debug("========= FULL LIST =========")
    for i, (com, scalar) in enumerate(zip(commitments, scalars)):
        if head_tail is not None and head_tail <= i < length - head_tail:
            if i == head_tail:
                logger.debug("    ...")
            continue
        x_hex, y_hex = g1_to_hex(com)
        logger.debug(
            "[#%02d]  s = %66s  C.x = %66s  C.y = %66s", i, fr_to_hex(scalar), x_hex, y_hex
        )
    logger.debug("================================")


def dbg_vec(tag: str, values: Sequence[Fr]) -> None:
    for i, value in enumerate(values):
        logger.debug("%s[%02d] = 0x%s", tag, i, value.to_bytes().hex())


def dbg_fr(tag: str, value: Fr) -> None:
    logger.debug("%-18s: 0x%s", tag, value.to_bytes().hex())