"""Run every analysis technique, combine into a single report.

Runs: census, colours, export.
Skips: pick (needs --point — run explicitly).

Example:
    uv run deltae-tool all ./out photo.jpg
    uv run deltae-tool all ./out photo.jpg other.png --json
"""

from deltae_vision.core.types import Report, Subject, Technique

technique = Technique(
    name='all',
    help='Run census, colours and export. Combine into a single report.',
)

# Techniques never run automatically
SKIP = {'all', 'pick'}


@technique.run
def run(subjects: list[Subject], report: Report, args) -> None:
    from deltae_vision.registry import all_techniques

    for name, tech in sorted(all_techniques().items()):
        if name in SKIP:
            continue
        tech.execute(subjects, report, args)
