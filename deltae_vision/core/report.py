"""Report builder — text and JSON output for deltae-tool results."""

import json
from typing import Any

from deltae_vision.core.types import Report


def _swatch_line(colours: list[dict]) -> str:
    return '  '.join(c['hex'] + (f' ({c["nearest"]})' if c.get('nearest') else '') for c in colours)


def format_text(report: Report) -> str:
    """Format report as human-readable text."""
    lines = [f'deltae-tool: {len(report.images)} image(s), {report.formula}, {report.palette_size} palette colours']
    lines.append('')

    for image_name, image_data in report.images.items():
        size = image_data.get('size')
        dim = f' {size[0]}×{size[1]}' if size else ''
        lines.append(f'── {image_name}{dim} ({image_data.get("samples", 0)} samples)')

        techniques = image_data.get('techniques', {})
        for tech_name, tech_data in techniques.items():
            if 'error' in tech_data:
                lines.append(f'  {tech_name}: error: {tech_data["error"]}')
            elif tech_name == 'census':
                for row in tech_data.get('top', []):
                    lines.append(f'  {row["name"]:<22} {row["hex"]}  {row["pct"]:>5}%')
                hidden = len(tech_data.get('percentages', {})) - len(tech_data.get('top', []))
                if hidden > 0:
                    lines.append(f'  ... {hidden} more (use --all-colours)')
            elif tech_name == 'colours':
                lines.append(f'  dominant: {_swatch_line(tech_data.get("dominant", []))}')
            elif tech_name == 'pick':
                lines.append(
                    f'  pick ({tech_data["x"]},{tech_data["y"]}): {tech_data["rgb_hex"]} → '
                    f'{tech_data["name"]} {tech_data["hex"]}  ΔE={tech_data["distance"]}'
                )
            elif tech_name == 'export':
                lines.append(f'  exported: {tech_data["file"]}')
            else:
                # Generic fallback
                for k, v in tech_data.items():
                    lines.append(f'  {tech_name}.{k}: {v}')

        lines.append('')

    return '\n'.join(lines)


def format_json(report: Report) -> str:
    """Format report as JSON."""
    obj: dict[str, Any] = {
        'formula': report.formula,
        'palette_size': report.palette_size,
        'images': [],
    }
    for image_name, image_data in report.images.items():
        obj['images'].append(
            {
                'name': image_name,
                'path': image_data.get('path'),
                'size': image_data.get('size'),
                'samples': image_data.get('samples', 0),
                'techniques': image_data.get('techniques', {}),
            }
        )
    return json.dumps(obj, indent=2)
