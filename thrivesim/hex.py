"""Hex grid helpers for flat-topped hexagons in axial coordinates.

The coordinate system is horizontally mirrored compared to the usual
textbook layout.
"""

from __future__ import annotations

import math
from typing import NamedTuple

DEFAULT_HEX_SIZE = 0.75

# Maximum hex coordinate value that can be encoded with encode_axial()
ENCODE_AXIAL_OFFSET = 256

# Multiplier for the q coordinate used in encode_axial()
ENCODE_AXIAL_SHIFT = ENCODE_AXIAL_OFFSET * 10

_hex_size = DEFAULT_HEX_SIZE


class Axial(NamedTuple):
    """Axial hex coordinates."""

    q: int
    r: int


class Cube(NamedTuple):
    """Cube hex coordinates."""

    x: int
    y: int
    z: int


class Point3(NamedTuple):
    """Cartesian position."""

    x: float
    y: float
    z: float


def _c_round(value: float) -> float:
    """Round half away from zero."""
    return math.copysign(math.floor(abs(value) + 0.5), value)


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b >= 0) else -quotient


def _trunc_mod(a: int, b: int) -> int:
    return a - b * _trunc_div(a, b)


def get_hex_size() -> float:
    """Return the size of a single hex."""
    return _hex_size


def axial_to_cartesian(q: float, r: float) -> Point3:
    """Return the cartesian position of the centre of hex (q, r)."""
    x = q * _hex_size * 3.0 / 2.0
    z = _hex_size * math.sqrt(3) * (r + q / 2.0)
    return Point3(x, 0.0, z)


def cartesian_to_axial(x: float, z: float) -> Axial:
    """Return the axial coordinates of the hex containing (x, z)."""
    cx = x * (2.0 / 3.0) / _hex_size
    cy = z / (_hex_size * math.sqrt(3)) - cx / 2.0
    cz = -(cx + cy)

    rx = _c_round(cx)
    ry = _c_round(cy)
    rz = _c_round(cz)

    x_diff = abs(rx - cx)
    y_diff = abs(ry - cy)
    z_diff = abs(rz - cz)

    if x_diff > y_diff and x_diff > z_diff:
        rx = -(ry + rz)
    elif y_diff > z_diff:
        ry = -(rx + rz)

    return cube_to_axial(rx, ry, rz)


def axial_to_cube(q: float, r: float) -> Cube:
    """Convert axial coordinates to cube coordinates."""
    return Cube(int(q), int(r), int(-(q + r)))


def cube_to_axial(x: float, y: float, z: float) -> Axial:
    """Convert cube coordinates to axial coordinates."""
    del z
    return Axial(int(x), int(y))


def cube_hex_round(x: float, y: float, z: float) -> Cube:
    """Round fractional cube coordinates to the nearest hex."""
    rx = _c_round(x)
    ry = _c_round(y)
    rz = _c_round(z)

    x_diff = abs(rx - x)
    y_diff = abs(ry - y)
    z_diff = abs(rz - z)

    if x_diff > y_diff and x_diff > z_diff:
        rx = -(ry + rz)
    elif y_diff > z_diff:
        ry = -(rx + rz)
    else:
        rz = -(ry + rx)

    return Cube(int(rx), int(ry), int(rz))


def encode_axial(q: float, r: float) -> int:
    """Encode axial coordinates into a single integer.

    Raises ValueError when either coordinate is not smaller in magnitude
    than ENCODE_AXIAL_OFFSET.
    """
    if abs(q) >= ENCODE_AXIAL_OFFSET or abs(r) >= ENCODE_AXIAL_OFFSET:
        raise ValueError(
            "Coordinates out of range, q and r need to be smaller than "
            f"{ENCODE_AXIAL_OFFSET}"
        )
    return int(
        (q + ENCODE_AXIAL_OFFSET) * ENCODE_AXIAL_SHIFT + r + ENCODE_AXIAL_OFFSET
    )


def decode_axial(s: int) -> Axial:
    """Reverse encode_axial()."""
    r = _trunc_mod(s, ENCODE_AXIAL_SHIFT) - ENCODE_AXIAL_OFFSET
    q = (
        _trunc_div(s - r - ENCODE_AXIAL_OFFSET, ENCODE_AXIAL_SHIFT)
        - ENCODE_AXIAL_OFFSET
    )
    return Axial(q, r)


def rotate_axial(q: float, r: float) -> Axial:
    """Rotate a hex by 60 degrees clockwise about the origin."""
    return Axial(int(-r), int(q + r))


def rotate_axial_n_times(q: float, r: float, n: int) -> Axial:
    """Rotate a hex by 60 * n degrees clockwise about the origin."""
    result = Axial(int(q), int(r))
    for _ in range((n & 0xFFFFFFFF) % 6):
        result = rotate_axial(*result)
    return result


def flip_horizontally(q: float, r: float) -> Axial:
    """Mirror a hex horizontally about the (0, x) axis."""
    return Axial(int(-q), int(q + r))