"""Delta E colour differences between two L*a*b* colours.

All three functions take (sample, reference). CIE76 is symmetric; CIE94 and
CIEDE2000 weight by the first argument's chroma or by pair means, and are only
guaranteed to be zero for identical inputs, not symmetric.

Hue quantities are kept in degrees throughout and converted with math.radians
exactly where a trig function is called.
"""

from __future__ import annotations

import enum
import math
from collections.abc import Callable

from deltae_vision.core.types import LAB, ConfigError

# CIE94 graphic-arts constants
K1 = 0.045
K2 = 0.015

# Weighting factors, all unity for both CIE94 and CIEDE2000
K_L = K_C = K_H = 1.0

POW7_25 = 25.0**7


class DistanceFormula(enum.Enum):
    CIE76 = 'CIE76'
    CIE94 = 'CIE94'
    CIEDE2000 = 'CIEDE2000'

    @classmethod
    def parse(cls, name: str | DistanceFormula) -> DistanceFormula:
        """Parse a formula name, case-insensitive. 'CIE2000' and 'DE2000' mean CIEDE2000."""
        if isinstance(name, cls):
            return name
        key = str(name).strip().upper().replace('-', '').replace('_', '')
        key = _ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            choices = ', '.join(f.value for f in cls)
            raise ConfigError(f'Unknown distance formula: {name!r}. Choose from {choices}') from None


_ALIASES = {
    'CIE2000': 'CIEDE2000',
    'DE2000': 'CIEDE2000',
    'DE76': 'CIE76',
    'DE94': 'CIE94',
}


def _sqrt(value: float) -> float:
    """Square root of a quantity that can only be negative through rounding error."""
    return math.sqrt(max(0.0, value))


def delta_e_76(lab1: LAB, lab2: LAB) -> float:
    """Euclidean distance in L*a*b*."""
    L1, a1, b1 = lab1
    L2, a2, b2 = lab2
    return math.sqrt((L1 - L2) ** 2 + (a1 - a2) ** 2 + (b1 - b2) ** 2)


def delta_e_94(lab1: LAB, lab2: LAB) -> float:
    """CIE94 with graphic-arts weights. lab1 is the sample whose chroma scales SC and SH."""
    L1, a1, b1 = lab1
    L2, a2, b2 = lab2

    C1 = math.hypot(a1, b1)
    C2 = math.hypot(a2, b2)
    dL = L1 - L2
    dC = C1 - C2
    da = a1 - a2
    db = b1 - b2
    dH = _sqrt(da**2 + db**2 - dC**2)

    S_L = 1.0
    S_C = 1.0 + K1 * C1
    S_H = 1.0 + K2 * C1

    return _sqrt((dL / (K_L * S_L)) ** 2 + (dC / (K_C * S_C)) ** 2 + (dH / (K_H * S_H)) ** 2)


def _hue_degrees(b: float, a_prime: float) -> float:
    """Hue angle in [0, 360). Defined as 0 at the origin."""
    if a_prime == 0 and b == 0:
        return 0.0
    h = math.degrees(math.atan2(b, a_prime))
    return h + 360.0 if h < 0 else h


def _hue_difference(h1: float, h2: float) -> float:
    """h2 - h1 wrapped into (-180, 180]. Opposite hues give +180 whichever comes first."""
    dh = h2 - h1
    if dh > 180:
        return dh - 360
    if dh <= -180:
        return dh + 360
    return dh


def delta_e_2000(lab1: LAB, lab2: LAB) -> float:
    """CIEDE2000 colour difference.

    Follows Sharma, Wu & Dalal (2005), including the G-factor rescaling of a*
    that reduces sensitivity near the neutral axis and the blue-region rotation
    term R_T.
    """
    L1, a1, b1 = lab1
    L2, a2, b2 = lab2

    C_bar = (math.hypot(a1, b1) + math.hypot(a2, b2)) / 2
    C_bar_7 = C_bar**7
    G = 0.5 * (1 - _sqrt(C_bar_7 / (C_bar_7 + POW7_25)))

    a1_p = a1 * (1 + G)
    a2_p = a2 * (1 + G)
    C1_p = math.hypot(a1_p, b1)
    C2_p = math.hypot(a2_p, b2)
    h1_p = _hue_degrees(b1, a1_p)
    h2_p = _hue_degrees(b2, a2_p)

    dL_p = L2 - L1
    dC_p = C2_p - C1_p

    chroma_product = C1_p * C2_p
    dh_p = 0.0 if chroma_product == 0 else _hue_difference(h1_p, h2_p)
    dH_p = 2 * _sqrt(chroma_product) * math.sin(math.radians(dh_p / 2))

    L_bar_p = (L1 + L2) / 2
    C_bar_p = (C1_p + C2_p) / 2

    if chroma_product == 0:
        H_bar_p = h1_p + h2_p
    elif abs(h1_p - h2_p) <= 180:
        H_bar_p = (h1_p + h2_p) / 2
    elif h1_p + h2_p < 360:
        H_bar_p = (h1_p + h2_p + 360) / 2
    else:
        H_bar_p = (h1_p + h2_p - 360) / 2

    T = (
        1
        - 0.17 * math.cos(math.radians(H_bar_p - 30))
        + 0.24 * math.cos(math.radians(2 * H_bar_p))
        + 0.32 * math.cos(math.radians(3 * H_bar_p + 6))
        - 0.20 * math.cos(math.radians(4 * H_bar_p - 63))
    )

    L_50_sq = (L_bar_p - 50) ** 2
    S_L = 1 + (0.015 * L_50_sq) / math.sqrt(20 + L_50_sq)
    S_C = 1 + 0.045 * C_bar_p
    S_H = 1 + 0.015 * C_bar_p * T

    d_theta = 30 * math.exp(-(((H_bar_p - 275) / 25) ** 2))
    C_bar_p_7 = C_bar_p**7
    R_C = 2 * _sqrt(C_bar_p_7 / (C_bar_p_7 + POW7_25))
    R_T = -math.sin(math.radians(2 * d_theta)) * R_C

    l_term = dL_p / (K_L * S_L)
    c_term = dC_p / (K_C * S_C)
    h_term = dH_p / (K_H * S_H)
    return _sqrt(l_term**2 + c_term**2 + h_term**2 + R_T * c_term * h_term)


FORMULAS: dict[DistanceFormula, Callable[[LAB, LAB], float]] = {
    DistanceFormula.CIE76: delta_e_76,
    DistanceFormula.CIE94: delta_e_94,
    DistanceFormula.CIEDE2000: delta_e_2000,
}


def distance_function(formula: DistanceFormula | str) -> Callable[[LAB, LAB], float]:
    """Resolve a formula selector (enum or name) to its distance function."""
    return FORMULAS[DistanceFormula.parse(formula)]
