"""Name the palette colour under one point of the image.

Requires --point X,Y in full-image pixel coordinates. The point is mapped
onto the same 80x80 canvas census samples from, and that canvas pixel is
matched against the palette with the selected formula.

Example:
    uv run deltae-tool pick ./out photo.jpg --point 120,48
"""

from deltae_vision.core.colour_space import rgb_to_hex, rgb_to_lab
from deltae_vision.core.sampling import canvas_point
from deltae_vision.core.types import Report, Subject, Technique

technique = Technique(
    name='pick',
    help='Nearest palette colour at --point X,Y.',
)


def parse_point(text: str) -> tuple[float, float]:
    """Parse 'X,Y' into floats. Raises ValueError on anything else."""
    parts = text.split(',')
    if len(parts) != 2:
        raise ValueError(f'Point must be X,Y, got {text!r}')
    return float(parts[0]), float(parts[1])


@technique.run
def run(subjects: list[Subject], report: Report, args) -> None:
    point = getattr(args, 'point', None)
    if not point:
        for subject in subjects:
            report.add(subject.name, 'pick', {'error': '--point X,Y required'})
        return

    for subject in subjects:
        try:
            x, y = parse_point(point)
            cx, cy = canvas_point(subject.image.size, x, y)
        except ValueError as exc:
            report.add(subject.name, 'pick', {'error': str(exc)})
            continue

        r, g, b = subject.canvas.getpixel((cx, cy))[:3]
        entry, dist = args.palette.match(rgb_to_lab((r, g, b)), args.config.formula)
        report.add(
            subject.name,
            'pick',
            {
                'x': x,
                'y': y,
                'rgb_hex': rgb_to_hex((r, g, b)),
                'name': entry.name,
                'hex': entry.hex,
                'distance': round(dist, 2),
            },
        )
