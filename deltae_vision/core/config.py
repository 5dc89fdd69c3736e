"""Analysis settings and where they come from.

Precedence (first wins):
  1. Command-line flags.
  2. Environment: the process environment over a .env file (see core.env):
       DELTAE_FORMULA     CIE76 | CIE94 | CIEDE2000   (default CIEDE2000)
       DELTAE_CLUSTERS    dominant colour count        (default 5)
       DELTAE_ITERATIONS  k-means rounds               (default 6)
       DELTAE_PALETTE     path to a name -> hex JSON   (default: CSS named colours)
  3. Defaults below.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from deltae_vision.core.delta_e import DistanceFormula
from deltae_vision.core.palette import Palette, default_palette, load_palette
from deltae_vision.core.types import ConfigError

DEFAULT_FORMULA = DistanceFormula.CIEDE2000
DEFAULT_CLUSTERS = 5
DEFAULT_ITERATIONS = 6
DEFAULT_TOP_COLOURS = 5

ENV_FORMULA = 'DELTAE_FORMULA'
ENV_CLUSTERS = 'DELTAE_CLUSTERS'
ENV_ITERATIONS = 'DELTAE_ITERATIONS'
ENV_PALETTE = 'DELTAE_PALETTE'


@dataclass(frozen=True)
class AnalysisConfig:
    """One analysis pass's settings. Validated on construction."""

    formula: DistanceFormula = DEFAULT_FORMULA
    cluster_count: int = DEFAULT_CLUSTERS
    iterations: int = DEFAULT_ITERATIONS
    top_colours: int = DEFAULT_TOP_COLOURS

    def __post_init__(self) -> None:
        object.__setattr__(self, 'formula', DistanceFormula.parse(self.formula))
        if self.cluster_count < 1:
            raise ConfigError(f'cluster count must be >= 1, got {self.cluster_count}')
        if self.iterations < 1:
            raise ConfigError(f'iterations must be >= 1, got {self.iterations}')
        if self.top_colours < 1:
            raise ConfigError(f'top colours must be >= 1, got {self.top_colours}')


def _env_int(environ: Mapping[str, str], key: str) -> int | None:
    raw = environ.get(key, '').strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f'{key} must be an integer, got {raw!r}') from None


def _first(*values):
    return next((v for v in values if v is not None), None)


def build_config(
    formula: str | None = None,
    clusters: int | None = None,
    iterations: int | None = None,
    top: int | None = None,
    environ: Mapping[str, str] | None = None,
) -> AnalysisConfig:
    """Merge explicit values over environment variables over defaults."""
    env = os.environ if environ is None else environ
    return AnalysisConfig(
        formula=_first(formula, env.get(ENV_FORMULA) or None, DEFAULT_FORMULA),
        cluster_count=_first(clusters, _env_int(env, ENV_CLUSTERS), DEFAULT_CLUSTERS),
        iterations=_first(iterations, _env_int(env, ENV_ITERATIONS), DEFAULT_ITERATIONS),
        top_colours=_first(top, DEFAULT_TOP_COLOURS),
    )


def resolve_palette(path: str | None = None, environ: Mapping[str, str] | None = None) -> Palette:
    """Load the palette named on the command line or in DELTAE_PALETTE, else the default."""
    env = os.environ if environ is None else environ
    path = path or env.get(ENV_PALETTE) or None
    if path is None:
        return default_palette()
    return load_palette(path)
