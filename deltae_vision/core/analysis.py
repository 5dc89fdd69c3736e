"""One analysis pass over a sample snapshot.

Runs the two independent pipelines on the same samples:
  - palette matching: each sample -> LAB -> nearest palette entry -> tally
  - dominant colours: k-means over the raw RGB samples

and derives the percentage mapping that is exported and reported.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from deltae_vision.core.colour_space import rgb_to_lab
from deltae_vision.core.config import AnalysisConfig
from deltae_vision.core.delta_e import DistanceFormula
from deltae_vision.core.kmeans import cluster
from deltae_vision.core.palette import Palette
from deltae_vision.core.types import RGB, Subject


def tally(samples: Sequence[RGB], palette: Palette, formula: DistanceFormula | str) -> dict[str, int]:
    """Count samples per nearest palette entry.

    Keys appear in order of first match and only for entries with a hit.
    Each distinct RGB value is matched once per call. Samples may be tuples or
    lists of ints.
    """
    formula = DistanceFormula.parse(formula)
    nearest: dict[RGB, str] = {}
    counts: dict[str, int] = {}
    for r, g, b in samples:
        rgb = (int(r), int(g), int(b))
        name = nearest.get(rgb)
        if name is None:
            entry, _distance = palette.match(rgb_to_lab(rgb), formula)
            name = nearest[rgb] = entry.name
        counts[name] = counts.get(name, 0) + 1
    return counts


def percentages(counts: dict[str, int]) -> dict[str, str]:
    """Share of each name as a one-decimal percentage string. Empty when nothing was counted."""
    total = sum(counts.values())
    if total == 0:
        return {}
    return {name: f'{count / total * 100:.1f}' for name, count in counts.items()}


def top_colours(shares: dict[str, str], limit: int = 5, show_all: bool = False) -> list[tuple[str, str]]:
    """Names sorted by share, highest first. Ties keep tally order.

    Unless show_all, entries that round to 0.0 are dropped and at most `limit` are kept.
    """
    ordered = sorted(shares.items(), key=lambda x: -float(x[1]))
    if show_all:
        return ordered
    return [(name, pct) for name, pct in ordered if float(pct) > 0][:limit]


@dataclass
class AnalysisResult:
    tally: dict[str, int] = field(default_factory=dict)
    centroids: list[RGB] = field(default_factory=list)
    sample_count: int = 0

    def percentages(self) -> dict[str, str]:
        return percentages(self.tally)

    def top_colours(self, limit: int = 5, show_all: bool = False) -> list[tuple[str, str]]:
        return top_colours(self.percentages(), limit=limit, show_all=show_all)


def analyse(samples: Sequence[RGB], palette: Palette, config: AnalysisConfig | None = None) -> AnalysisResult:
    """Match and cluster one snapshot of samples.

    The caller must not mutate `samples` during the call; pass a tuple to be sure.
    """
    config = config or AnalysisConfig()
    snapshot = tuple((int(r), int(g), int(b)) for r, g, b in samples)
    return AnalysisResult(
        tally=tally(snapshot, palette, config.formula),
        centroids=cluster(snapshot, config.cluster_count, config.iterations),
        sample_count=len(snapshot),
    )


def analyse_subject(subject: Subject, palette: Palette, config: AnalysisConfig) -> AnalysisResult:
    """analyse() a loaded image, once per palette and config.

    Techniques run in the same process share the result, so `all` matches
    every sample once.
    """
    key = (palette, config)
    if key not in subject.analyses:
        subject.analyses[key] = analyse(subject.samples, palette, config)
    return subject.analyses[key]
