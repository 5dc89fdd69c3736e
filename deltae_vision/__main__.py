"""deltae-tool — Perceptual colour analysis of images with Delta E matching.

Usage: uv run deltae-tool <technique> <out_dir> <image> [<image> ...] [options]

Techniques are auto-discovered from deltae_vision/techniques/.
Each technique module's docstring is its documentation.
Run `deltae-tool help <technique>` for full module docs.

Settings (flags win over environment, environment wins over defaults):
  --formula     / DELTAE_FORMULA     CIE76 | CIE94 | CIEDE2000 (default CIEDE2000)
  --clusters    / DELTAE_CLUSTERS    dominant colour count (default 5)
  --iterations  / DELTAE_ITERATIONS  k-means rounds (default 6)
  --palette     / DELTAE_PALETTE     JSON object of name -> hex (default CSS named colours)

Environment variables / .env loading:
  OS environment variables are always used first.
  If a variable is not set, deltae-tool looks for a .env file starting from
  the current directory and walking up, stopping at the nearest .git boundary.
  Use --env-file to override the .env location explicitly.
"""

import argparse
import importlib
import os
import sys
from collections.abc import Mapping

from deltae_vision import registry
from deltae_vision.core.config import build_config, resolve_palette
from deltae_vision.core.env import load_env
from deltae_vision.core.report import format_json, format_text
from deltae_vision.core.sampling import load_subject
from deltae_vision.core.types import ConfigError, Report, Subject


def _load_technique_module(name: str) -> object:
    """Load the raw module for a technique (for docstring access)."""
    return importlib.import_module(f'deltae_vision.techniques.{name}')


def _build_parser() -> argparse.ArgumentParser:
    techniques = registry.all_techniques()

    epilog = (
        'Examples:\n'
        '  deltae-tool census ./out photo.jpg\n'
        '  deltae-tool census ./out photo.jpg --formula CIE94 --all-colours\n'
        '  deltae-tool colours ./out photo.jpg --clusters 8 --iterations 10\n'
        '  deltae-tool pick ./out photo.jpg --point 120,48\n'
        '  deltae-tool all ./out a.png b.png --json\n'
        '  deltae-tool all ./out photo.jpg --palette brand.json\n'
        '  deltae-tool help census\n'
        '  deltae-tool palette\n'
    )
    parser = argparse.ArgumentParser(
        prog='deltae-tool',
        description='Perceptual colour analysis of images: palette matching and dominant colours.',
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    # Global --env-file option before subcommand
    parser.add_argument(
        '--env-file',
        metavar='PATH',
        default=None,
        help='Path to .env file (default: walk up from cwd to .git boundary)',
    )
    sub = parser.add_subparsers(dest='technique', help='Technique to run')

    # Auto-register each technique as a subcommand using module docstring
    for name, tech in sorted(techniques.items()):
        mod = _load_technique_module(name)
        short_help = (mod.__doc__ or '').strip().splitlines()[0] if (mod.__doc__ or '').strip() else tech.help

        p = sub.add_parser(name, help=short_help)
        p.add_argument('out_dir', help='Directory for exported files')
        p.add_argument('images', nargs='+', metavar='image', help='Path to image(s) to analyse')
        _add_settings(p)
        p.add_argument('-j', '--json', action='store_true', help='Output JSON instead of text')
        p.add_argument('-t', '--top', type=int, default=None, metavar='N', help='Colours to list (default: 5)')
        p.add_argument('-a', '--all-colours', action='store_true', help='List every matched colour')
        p.add_argument('-p', '--point', metavar='X,Y', help='Image coordinate for the pick technique')

    # `help` subcommand — prints full module docstring for a technique
    help_parser = sub.add_parser('help', help='Print full docs for a technique')
    help_parser.add_argument('command', nargs='?', help='Technique name')

    # `palette` subcommand — prints the palette that would be used
    palette_parser = sub.add_parser('palette', help='Print the loaded palette with LAB values')
    palette_parser.add_argument('-P', '--palette', default=None, metavar='PATH', help='Palette JSON file')

    return parser


def _add_settings(p: argparse.ArgumentParser) -> None:
    p.add_argument('-f', '--formula', default=None, help='CIE76, CIE94 or CIEDE2000 (default: CIEDE2000)')
    p.add_argument('-k', '--clusters', type=int, default=None, metavar='K', help='Dominant colours (default: 5)')
    p.add_argument('-i', '--iterations', type=int, default=None, metavar='N', help='K-means rounds (default: 6)')
    p.add_argument('-P', '--palette', default=None, metavar='PATH', help='Palette JSON file (name -> hex)')


def _print_help(command: str | None) -> None:
    """Print full module docstring for a technique."""
    techniques = registry.all_techniques()

    if command is None:
        print('Available techniques:\n')
        for name, tech in sorted(techniques.items()):
            mod = _load_technique_module(name)
            short = (mod.__doc__ or '').strip().splitlines()[0] if (mod.__doc__ or '').strip() else tech.help
            print(f'  {name:<14} {short}')
        print('\nRun: deltae-tool help <technique> for full docs.')
        return

    if command not in techniques:
        print(f'Unknown technique: {command}', file=sys.stderr)
        print(f'Available: {", ".join(sorted(techniques))}', file=sys.stderr)
        sys.exit(1)

    mod = _load_technique_module(command)
    doc = (mod.__doc__ or '').strip()
    if not doc:
        print(f'(No module docs for {command!r})')
        return
    print(doc)


def _print_palette(path: str | None, environ: Mapping[str, str]) -> None:
    """Print every palette entry in match order."""
    palette = resolve_palette(path, environ=environ)
    for entry in palette:
        L, a, b = entry.lab
        print(f'{entry.name:<22} {entry.hex}  L={L:6.2f} a={a:7.2f} b={b:7.2f}')
    print(f'\n{len(palette)} colours')


def _load_subjects(paths: list[str]) -> list[Subject]:
    """Load each image once. Names are file stems; a taken name gets the first free -2, -3, ... suffix."""
    subjects = []
    used: set[str] = set()
    for path in paths:
        subject = load_subject(path)
        name, n = subject.name, 1
        while name in used:
            n += 1
            name = f'{subject.name}-{n}'
        subject.name = name
        used.add(name)
        subjects.append(subject)
    return subjects


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    # OS environment first, then .env
    env = load_env(env_file=args.env_file)
    if env.path:
        print(f'deltae-tool: loaded {env.path}', file=sys.stderr)

    if not args.technique:
        parser.print_help()
        sys.exit(1)

    # Handle `help` subcommand
    if args.technique == 'help':
        _print_help(getattr(args, 'command', None))
        return

    try:
        # Handle `palette` subcommand
        if args.technique == 'palette':
            _print_palette(args.palette, env.values)
            return

        args.config = build_config(
            formula=args.formula,
            clusters=args.clusters,
            iterations=args.iterations,
            top=args.top,
            environ=env.values,
        )
        args.palette = resolve_palette(args.palette, environ=env.values)
    except ConfigError as exc:
        print(f'Error: {exc}', file=sys.stderr)
        sys.exit(1)

    # Load images
    for path in args.images:
        if not os.path.isfile(path):
            print(f'Error: image not found: {path}', file=sys.stderr)
            sys.exit(1)

    try:
        subjects = _load_subjects(args.images)
    except OSError as exc:
        # PIL.UnidentifiedImageError is an OSError
        print(f'Error: {exc}', file=sys.stderr)
        sys.exit(1)

    # Build report
    report = Report(formula=args.config.formula.value, palette_size=len(args.palette))
    for s in subjects:
        report.set_source(s)

    # Run technique
    tech = registry.get(args.technique)
    tech.execute(subjects, report, args)

    # Output
    if args.json:
        print(format_json(report))
    else:
        print(format_text(report))


if __name__ == '__main__':
    main()
