"""Match every sample to its nearest palette colour. Output percentages.

Each image is resampled to 80x80 and every 4th pixel is taken (1600
samples). Every sample is converted to CIE L*a*b* and compared against
every palette colour with the selected Delta E formula (--formula,
default CIEDE2000). The first palette colour at the minimum distance wins,
so palette order decides ties.

Output: percentages for every matched colour (one decimal place), plus the
top 5 (or --top N) for display. --all-colours lists every match, including
those that round to 0.0%.

Different from 'colours': colours finds dominant clusters via k-means,
census maps every sample to a known named colour.

Example:
    uv run deltae-tool census ./out photo.jpg --formula CIE94
"""

from deltae_vision.core.analysis import analyse_subject
from deltae_vision.core.types import Report, Subject, Technique

technique = Technique(
    name='census',
    help='Map every sample to the nearest palette colour (Delta E). Output percentages per image.',
)


@technique.run
def run(subjects: list[Subject], report: Report, args) -> None:
    palette = args.palette
    config = args.config
    show_all = getattr(args, 'all_colours', False)

    for subject in subjects:
        result = analyse_subject(subject, palette, config)
        shares = result.percentages()
        top = result.top_colours(limit=config.top_colours, show_all=show_all)
        report.add(
            subject.name,
            'census',
            {
                'formula': config.formula.value,
                'samples': len(subject.samples),
                'counts': result.tally,
                'percentages': shares,
                'top': [{'name': name, 'hex': palette.get(name).hex, 'pct': pct} for name, pct in top],
            },
        )
