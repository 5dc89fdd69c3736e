"""Reference palette: immutable, ordered table of named colours with precomputed LAB.

A Palette is built once per process and passed explicitly to whatever needs
it. Matching is a linear scan in stored order with strict less-than, so when
two entries are equally close the one listed first wins. Do not sort the
entries or swap the scan for a spatial index; both change which name wins a tie.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass

from deltae_vision.core.colour_space import hex_to_rgb, rgb_to_hex, rgb_to_lab
from deltae_vision.core.delta_e import DistanceFormula, distance_function
from deltae_vision.core.types import LAB, RGB, ConfigError

# CSS Color Module Level 4 named colours, in specification order.
# Aliases with identical values (aqua/cyan, fuchsia/magenta) are both present;
# the earlier name wins ties.
NAMED_COLOURS: dict[str, str] = {
    'black': '#000000',
    'silver': '#c0c0c0',
    'gray': '#808080',
    'white': '#ffffff',
    'maroon': '#800000',
    'red': '#ff0000',
    'purple': '#800080',
    'fuchsia': '#ff00ff',
    'green': '#008000',
    'lime': '#00ff00',
    'olive': '#808000',
    'yellow': '#ffff00',
    'navy': '#000080',
    'blue': '#0000ff',
    'teal': '#008080',
    'aqua': '#00ffff',
    'aliceblue': '#f0f8ff',
    'antiquewhite': '#faebd7',
    'aquamarine': '#7fffd4',
    'azure': '#f0ffff',
    'beige': '#f5f5dc',
    'bisque': '#ffe4c4',
    'blanchedalmond': '#ffebcd',
    'blueviolet': '#8a2be2',
    'brown': '#a52a2a',
    'burlywood': '#deb887',
    'cadetblue': '#5f9ea0',
    'chartreuse': '#7fff00',
    'chocolate': '#d2691e',
    'coral': '#ff7f50',
    'cornflowerblue': '#6495ed',
    'cornsilk': '#fff8dc',
    'crimson': '#dc143c',
    'cyan': '#00ffff',
    'darkblue': '#00008b',
    'darkcyan': '#008b8b',
    'darkgoldenrod': '#b8860b',
    'darkgray': '#a9a9a9',
    'darkgreen': '#006400',
    'darkkhaki': '#bdb76b',
    'darkmagenta': '#8b008b',
    'darkolivegreen': '#556b2f',
    'darkorange': '#ff8c00',
    'darkorchid': '#9932cc',
    'darkred': '#8b0000',
    'darksalmon': '#e9967a',
    'darkseagreen': '#8fbc8f',
    'darkslateblue': '#483d8b',
    'darkslategray': '#2f4f4f',
    'darkturquoise': '#00ced1',
    'darkviolet': '#9400d3',
    'deeppink': '#ff1493',
    'deepskyblue': '#00bfff',
    'dimgray': '#696969',
    'dodgerblue': '#1e90ff',
    'firebrick': '#b22222',
    'floralwhite': '#fffaf0',
    'forestgreen': '#228b22',
    'gainsboro': '#dcdcdc',
    'ghostwhite': '#f8f8ff',
    'gold': '#ffd700',
    'goldenrod': '#daa520',
    'greenyellow': '#adff2f',
    'honeydew': '#f0fff0',
    'hotpink': '#ff69b4',
    'indianred': '#cd5c5c',
    'indigo': '#4b0082',
    'ivory': '#fffff0',
    'khaki': '#f0e68c',
    'lavender': '#e6e6fa',
    'lavenderblush': '#fff0f5',
    'lawngreen': '#7cfc00',
    'lemonchiffon': '#fffacd',
    'lightblue': '#add8e6',
    'lightcoral': '#f08080',
    'lightcyan': '#e0ffff',
    'lightgoldenrodyellow': '#fafad2',
    'lightgray': '#d3d3d3',
    'lightgreen': '#90ee90',
    'lightpink': '#ffb6c1',
    'lightsalmon': '#ffa07a',
    'lightseagreen': '#20b2aa',
    'lightskyblue': '#87cefa',
    'lightslategray': '#778899',
    'lightsteelblue': '#b0c4de',
    'lightyellow': '#ffffe0',
    'limegreen': '#32cd32',
    'linen': '#faf0e6',
    'magenta': '#ff00ff',
    'mediumaquamarine': '#66cdaa',
    'mediumblue': '#0000cd',
    'mediumorchid': '#ba55d3',
    'mediumpurple': '#9370db',
    'mediumseagreen': '#3cb371',
    'mediumslateblue': '#7b68ee',
    'mediumspringgreen': '#00fa9a',
    'mediumturquoise': '#48d1cc',
    'mediumvioletred': '#c71585',
    'midnightblue': '#191970',
    'mintcream': '#f5fffa',
    'mistyrose': '#ffe4e1',
    'moccasin': '#ffe4b5',
    'navajowhite': '#ffdead',
    'oldlace': '#fdf5e6',
    'olivedrab': '#6b8e23',
    'orange': '#ffa500',
    'orangered': '#ff4500',
    'orchid': '#da70d6',
    'palegoldenrod': '#eee8aa',
    'palegreen': '#98fb98',
    'paleturquoise': '#afeeee',
    'palevioletred': '#db7093',
    'papayawhip': '#ffefd5',
    'peachpuff': '#ffdab9',
    'peru': '#cd853f',
    'pink': '#ffc0cb',
    'plum': '#dda0dd',
    'powderblue': '#b0e0e6',
    'rebeccapurple': '#663399',
    'rosybrown': '#bc8f8f',
    'royalblue': '#4169e1',
    'saddlebrown': '#8b4513',
    'salmon': '#fa8072',
    'sandybrown': '#f4a460',
    'seagreen': '#2e8b57',
    'seashell': '#fff5ee',
    'sienna': '#a0522d',
    'skyblue': '#87ceeb',
    'slateblue': '#6a5acd',
    'slategray': '#708090',
    'snow': '#fffafa',
    'springgreen': '#00ff7f',
    'steelblue': '#4682b4',
    'tan': '#d2b48c',
    'thistle': '#d8bfd8',
    'tomato': '#ff6347',
    'turquoise': '#40e0d0',
    'violet': '#ee82ee',
    'wheat': '#f5deb3',
    'whitesmoke': '#f5f5f5',
    'yellowgreen': '#9acd32',
}


@dataclass(frozen=True)
class PaletteEntry:
    name: str
    hex: str
    rgb: RGB
    lab: LAB


class Palette:
    """Fixed, insertion-ordered sequence of PaletteEntry.

    Raises ConfigError when empty or when two entries share a name.
    """

    def __init__(self, entries: Iterable[PaletteEntry]):
        entries = tuple(entries)
        if not entries:
            raise ConfigError('Palette is empty')
        seen: set[str] = set()
        for entry in entries:
            if entry.name in seen:
                raise ConfigError(f'Duplicate palette name: {entry.name!r}')
            seen.add(entry.name)
        self._entries = entries
        self._by_name = {e.name: e for e in entries}

    @classmethod
    def from_hex(cls, items: Mapping[str, str] | Iterable[tuple[str, str]]) -> Palette:
        """Build a palette from name -> hex pairs, converting each colour to LAB once."""
        pairs = items.items() if isinstance(items, Mapping) else items
        entries = []
        for name, hex_str in pairs:
            try:
                rgb = hex_to_rgb(hex_str)
            except (ValueError, AttributeError) as exc:
                raise ConfigError(f'Palette entry {name!r}: {exc}') from None
            entries.append(PaletteEntry(name=name, hex=rgb_to_hex(rgb), rgb=rgb, lab=rgb_to_lab(rgb)))
        return cls(entries)

    def __iter__(self) -> Iterator[PaletteEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def get(self, name: str) -> PaletteEntry | None:
        return self._by_name.get(name)

    def match(self, sample_lab: LAB, formula: DistanceFormula | str) -> tuple[PaletteEntry, float]:
        """Closest entry to sample_lab and its distance. First entry wins ties."""
        distance = distance_function(formula)
        closest = self._entries[0]
        min_distance = float('inf')
        for entry in self._entries:
            d = distance(sample_lab, entry.lab)
            if d < min_distance:
                min_distance = d
                closest = entry
        return closest, min_distance


def default_palette() -> Palette:
    """The CSS named colours as a Palette."""
    return Palette.from_hex(NAMED_COLOURS)


def load_palette(path: str) -> Palette:
    """Load a palette from a JSON object of name -> hex, keeping file order."""
    try:
        with open(path, encoding='utf-8') as f:
            # pairs, not a dict, so a repeated name reaches Palette and is rejected
            data = json.load(f, object_pairs_hook=list)
    except OSError as exc:
        raise ConfigError(f'Cannot read palette {path}: {exc.strerror}') from None
    except json.JSONDecodeError as exc:
        raise ConfigError(f'Palette {path} is not valid JSON: {exc.msg} (line {exc.lineno})') from None
    if not isinstance(data, list) or not all(isinstance(pair, tuple) for pair in data):
        raise ConfigError(f'Palette {path} must be a JSON object of name -> hex')
    return Palette.from_hex(data)
