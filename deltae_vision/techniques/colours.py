"""Dominant colour extraction per image using deterministic k-means.

Clusters the 1600 samples into --clusters (default 5) centroids over
--iterations (default 6) rounds. The first K samples seed the centroids,
so the same image always gives the same swatches in the same order.
Clustering runs in RGB space, not L*a*b*.

Each centroid is also labelled with its nearest palette colour under the
selected Delta E formula.

Example:
    uv run deltae-tool colours ./out photo.jpg --clusters 8
"""

from deltae_vision.core.analysis import analyse_subject
from deltae_vision.core.colour_space import rgb_to_hex, rgb_to_lab
from deltae_vision.core.types import Report, Subject, Technique

technique = Technique(
    name='colours',
    help='Dominant colours per image (deterministic k-means in RGB).',
)


@technique.run
def run(subjects: list[Subject], report: Report, args) -> None:
    palette = args.palette
    config = args.config

    for subject in subjects:
        dominant = []
        for r, g, b in analyse_subject(subject, palette, config).centroids:
            entry, _dist = palette.match(rgb_to_lab((r, g, b)), config.formula)
            dominant.append({'hex': rgb_to_hex((r, g, b)), 'r': r, 'g': g, 'b': b, 'nearest': entry.name})
        report.add(subject.name, 'colours', {'dominant': dominant})
