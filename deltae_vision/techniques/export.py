"""Write each image's colour percentages to <out_dir>/<image>.json.

The file is a JSON object of palette name -> percentage string with one
decimal place, in the order colours were first matched:

    {
      "white": "62.5",
      "black": "37.5"
    }

An image with no samples exports an empty object.

Example:
    uv run deltae-tool export ./out photo.jpg --formula CIE76
"""

import json
import os

from deltae_vision.core.analysis import analyse_subject
from deltae_vision.core.types import Report, Subject, Technique

technique = Technique(
    name='export',
    help='Write palette percentages per image to <out_dir>/<image>.json.',
)


@technique.run
def run(subjects: list[Subject], report: Report, args) -> None:
    os.makedirs(args.out_dir, exist_ok=True)
    for subject in subjects:
        shares = analyse_subject(subject, args.palette, args.config).percentages()
        path = os.path.join(args.out_dir, f'{subject.name}.json')
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(shares, f, indent=2)
            f.write('\n')
        report.add(subject.name, 'export', {'file': path, 'colours': len(shares)})
