"""sRGB to CIE L*a*b* conversion (D65 white, 2 degree observer) and hex helpers.

rgb_to_lab is pure and memoised: every distinct RGB triple is converted once
per process no matter how many samples or palette entries share it.
"""

import functools
import re

from deltae_vision.core.types import LAB, RGB

# D65 reference white
WHITE_X = 0.95047
WHITE_Y = 1.00000
WHITE_Z = 1.08883

# Linear sRGB -> XYZ (D65)
SRGB_TO_XYZ = (
    (0.4124564, 0.3575761, 0.1804375),
    (0.2126729, 0.7151522, 0.0721750),
    (0.0193339, 0.1191920, 0.9503041),
)

EPSILON = (6 / 29) ** 3
KAPPA = (29 / 6) ** 2 / 3
OFFSET = 4 / 29

_HEX_RE = re.compile(r'^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$')


def _linearise(channel: int) -> float:
    c = channel / 255
    if c <= 0.04045:
        return c / 12.92
    return ((c + 0.055) / 1.055) ** 2.4


def _f(t: float) -> float:
    if t > EPSILON:
        return t ** (1 / 3)
    return t * KAPPA + OFFSET


@functools.lru_cache(maxsize=65536)
def rgb_to_lab(rgb: RGB) -> LAB:
    """Convert an (r, g, b) triple in [0, 255] to (L, a, b)."""
    r, g, b = (_linearise(c) for c in rgb)
    (m00, m01, m02), (m10, m11, m12), (m20, m21, m22) = SRGB_TO_XYZ
    x = (m00 * r + m01 * g + m02 * b) / WHITE_X
    y = (m10 * r + m11 * g + m12 * b) / WHITE_Y
    z = (m20 * r + m21 * g + m22 * b) / WHITE_Z

    fx, fy, fz = _f(x), _f(y), _f(z)
    return (116 * fy - 16, 500 * (fx - fy), 200 * (fy - fz))


def hex_to_rgb(hex_str: str) -> RGB:
    """Parse '#rrggbb' or '#rgb' (hash optional, any case). Raises ValueError otherwise."""
    m = _HEX_RE.match(hex_str.strip())
    if not m:
        raise ValueError(f'Invalid hex colour: {hex_str!r}')
    digits = m.group(1)
    if len(digits) == 3:
        digits = ''.join(ch * 2 for ch in digits)
    return (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))


def rgb_to_hex(rgb: RGB) -> str:
    r, g, b = rgb
    return f'#{r:02x}{g:02x}{b:02x}'
