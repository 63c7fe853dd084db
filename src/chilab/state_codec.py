"""Encoding piece positions to and from text.

Two reversible formats are supported:

- decimal: comma-separated coordinates, ``"x0,y0,x1,y1,..."``. Any integers allowed.
- packed: fixed-width bytes in base64. With 4 bits per coordinate each position
  is one byte ``x | (y << 4)``; with 8 bits each position is the two bytes ``x, y``.
"""

from __future__ import annotations

import base64
import binascii
import re
from typing import Hashable, Iterable, List, Optional, Sequence

from .types import Pos

_INT_RE = re.compile(r"-?[0-9]+")
PACKED_BITS = (4, 8)
INT32_MIN = -(1 << 31)
INT32_MAX = (1 << 31) - 1


class StateDecodeError(ValueError):
    """Raised when a state string cannot be decoded."""


def encode_positions(positions: Iterable[Pos]) -> str:
    """Encode positions as ``"x0,y0,x1,y1,..."``. The empty list encodes to ``""``."""

    return ",".join(f"{p.x},{p.y}" for p in positions)


def decode_positions(text: str) -> List[Pos]:
    """Decode text produced by :func:`encode_positions`.

    Raises:
        StateDecodeError: on empty tokens, non-integers, values outside the 32-bit
            signed range or an odd number of coordinates.
    """

    if text == "":
        return []
    parts = text.split(",")
    for part in parts:
        if not _INT_RE.fullmatch(part):
            raise StateDecodeError(f"Invalid coordinate '{part}'")
    if len(parts) % 2 != 0:
        raise StateDecodeError("Odd number of coordinates")
    ints = [int(part) for part in parts]
    for value in ints:
        if not INT32_MIN <= value <= INT32_MAX:
            raise StateDecodeError(f"Coordinate {value} out of 32-bit range")
    return [Pos(ints[i], ints[i + 1]) for i in range(0, len(ints), 2)]


def _check_bits(bits: int) -> None:
    if bits not in PACKED_BITS:
        raise ValueError(f"bits must be one of {PACKED_BITS}, got {bits}")


def encode_packed(positions: Iterable[Pos], bits: int = 8) -> str:
    """Pack positions into base64. Raises ``ValueError`` for coordinates that do not fit."""

    _check_bits(bits)
    limit = 1 << bits
    data = bytearray()
    for p in positions:
        if not (0 <= p.x < limit and 0 <= p.y < limit):
            raise ValueError(f"Position {p} out of range for {bits}-bit packing")
        if bits == 4:
            data.append(p.x | (p.y << 4))
        else:
            data.extend((p.x, p.y))
    return base64.b64encode(bytes(data)).decode("ascii")


def decode_packed(text: str, bits: int = 8) -> List[Pos]:
    """Unpack text produced by :func:`encode_packed` with the same ``bits``."""

    _check_bits(bits)
    try:
        data = base64.b64decode(text.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError) as exc:
        raise StateDecodeError(f"Invalid base64 payload: {exc}") from exc
    if bits == 4:
        return [Pos(b & 0xF, (b >> 4) & 0xF) for b in data]
    if len(data) % 2 != 0:
        raise StateDecodeError("Truncated packed payload")
    return [Pos(data[i], data[i + 1]) for i in range(0, len(data), 2)]


def all_distinct(items: Iterable[Hashable]) -> bool:
    seen = set()
    for item in items:
        if item in seen:
            return False
        seen.add(item)
    return True


def validate_positions(
    positions: Sequence[Pos],
    count: int,
    width: Optional[int] = None,
    height: Optional[int] = None,
) -> bool:
    """Check that ``positions`` is a usable piece configuration.

    Requires exactly ``count`` pairwise distinct positions. When both ``width`` and
    ``height`` are given, every position must also lie inside that grid.
    """

    if len(positions) != count or not all_distinct(positions):
        return False
    if width is None or height is None:
        return True
    return all(0 <= p.x < width and 0 <= p.y < height for p in positions)
