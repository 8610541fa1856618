"""Small numeric helpers: powers of two, clamping and colour-space conversion."""

from __future__ import annotations

from collections.abc import Sequence

_U32 = 0xFFFFFFFF

_RGB_TO_XYZ = (
    (0.4124564, 0.3575761, 0.1804375),
    (0.2126729, 0.7151522, 0.0721750),
    (0.0193339, 0.1191920, 0.9503041),
)

_XYZ_TO_RGB = (
    (3.2404542, -1.5371385, -0.4985314),
    (-0.9692660, 1.8760108, 0.0415560),
    (0.0556434, -0.2040259, 1.0572252),
)


def _smear_bits(v: int) -> int:
    for shift in (1, 2, 4, 8, 16):
        v |= v >> shift
    return v


def next_pow2(v: int) -> int:
    """Smallest power of two not below v, with 32-bit unsigned wrap-around."""
    v = (int(v) - 1) & _U32
    return (_smear_bits(v) + 1) & _U32


def prev_pow2(v: int) -> int:
    """Largest power of two not above v (0 for 0), on 32-bit unsigned values."""
    v = _smear_bits(int(v) & _U32)
    return v - (v >> 1)


def clamp_value(v: float, lo: float, hi: float) -> float:
    """Clamp v into the range [lo, hi]."""
    if v <= lo:
        return lo
    if v >= hi:
        return hi
    return v


def saturate_value(v: float) -> float:
    """Clamp v into the range [0.0, 1.0]."""
    return clamp_value(v, 0.0, 1.0)


def dot_product(a: Sequence[float], b: Sequence[float]) -> float:
    """Dot product of the first three components of a and b."""
    return sum(x * y for x, y in zip(a[:3], b[:3]))


def convert_rgb_to_yxy(rgb: Sequence[float]) -> tuple[float, float, float]:
    """Convert an RGB triple to the Yxy colour space."""
    xyz = [dot_product(row, rgb) for row in _RGB_TO_XYZ]
    inv = 1.0 / dot_product(xyz, (1.0, 1.0, 1.0))
    return xyz[1], xyz[0] * inv, xyz[1] * inv


def convert_yxy_to_rgb(yxy: Sequence[float]) -> tuple[float, float, float]:
    """Convert a Yxy triple back to the RGB colour space."""
    big_y, x, y = yxy[0], yxy[1], yxy[2]
    xyz = (
        big_y * x / y,
        big_y,
        big_y * (1.0 - x - y) / y,
    )
    r, g, b = (dot_product(row, xyz) for row in _XYZ_TO_RGB)
    return r, g, b