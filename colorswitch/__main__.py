"""colorswitch — Hue rotation and hue stretch of images, written as PNGs.

Usage: colorswitch <variant> <out_dir> <image> [options]

Variants are auto-discovered from colorswitch/variants/.
Each variant module's docstring is its documentation.
Run `colorswitch help <variant>` for full module docs.

Configuration / .env loading:
  Command-line flags win, then OS environment variables.
  If a variable is not set, colorswitch looks for a .env file starting from
  the current directory and walking up, stopping at the nearest .git boundary.
  Use --env-file to override the .env location explicitly.
"""

import argparse
import importlib
import os
import sys

from PIL import UnidentifiedImageError

from colorswitch import registry
from colorswitch.core.calibration import calibration_chart
from colorswitch.core.config import Settings, load_env, load_settings
from colorswitch.core.imageio import load_image, save_png
from colorswitch.core.report import format_json, format_text
from colorswitch.core.types import Report


def _load_variant_module(name: str) -> object:
    """Load the raw module for a variant (for docstring access)."""
    return importlib.import_module(f'colorswitch.variants.{name}')


def _short_help(name: str, fallback: str) -> str:
    doc = (_load_variant_module(name).__doc__ or '').strip()
    return doc.splitlines()[0] if doc else fallback


def _build_parser() -> argparse.ArgumentParser:
    variants = registry.all_variants()

    epilog = (
        'Examples:\n'
        '  colorswitch all ./out cells.jpg\n'
        '  colorswitch rotated ./out cells.jpg --caption\n'
        '  colorswitch stretch ./out assay.png --json --workers 4\n'
        '  colorswitch rotated ./out cells.jpg --no-clamp\n'
        '  colorswitch rotated ./out cells.jpg --no-caption   (override COLORSWITCH_CAPTION=1)\n'
        '  colorswitch calibrate ./out --width 1024 --height 600\n'
        '  colorswitch help stretch\n'
        '\n'
        'Environment (set in .env or environment):\n'
        '  COLORSWITCH_CLAMP_SATURATION=1|0   clamp saturation after the x4 boost\n'
        '  COLORSWITCH_WORKERS=N              engine threads\n'
        '  COLORSWITCH_CAPTION=1|0            caption strip under each image\n'
    )
    parser = argparse.ArgumentParser(
        prog='colorswitch',
        description='Hue rotation and hue stretch of images, written as PNGs.',
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        '--env-file',
        metavar='PATH',
        default=None,
        help='Path to .env file (default: walk up from cwd to .git boundary)',
    )
    sub = parser.add_subparsers(dest='variant', help='Variant to write')

    for name, var in sorted(variants.items()):
        p = sub.add_parser(name, help=_short_help(name, var.help))
        p.add_argument('out_dir', help='Directory for output PNGs')
        p.add_argument('image', help='Path to input image (any format PIL reads)')
        p.add_argument('-j', '--json', action='store_true', help='Output JSON instead of text')
        p.add_argument(
            '-c',
            '--caption',
            action=argparse.BooleanOptionalAction,
            default=None,
            help='Add a caption strip under each image (default: COLORSWITCH_CAPTION or off)',
        )
        p.add_argument(
            '--clamp',
            dest='clamp_saturation',
            action=argparse.BooleanOptionalAction,
            default=None,
            help='Clamp saturation to [0,1] after the x4 boost (default: COLORSWITCH_CLAMP_SATURATION or on)',
        )
        p.add_argument('-w', '--workers', type=int, default=None, metavar='N', help='Engine threads (default: 1)')

    help_parser = sub.add_parser('help', help='Print full docs for a variant')
    help_parser.add_argument('command', nargs='?', help='Variant name')

    cal = sub.add_parser('calibrate', help='Write a calibration chart PNG')
    cal.add_argument('out_dir', help='Directory for the chart')
    cal.add_argument('--width', type=int, default=1024, help='Chart width in pixels (default: 1024)')
    cal.add_argument('--height', type=int, default=600, help='Chart height in pixels (default: 600)')

    return parser


def _print_help(command: str | None) -> None:
    """Print full module docstring for a variant."""
    variants = registry.all_variants()

    if command is None:
        print('Available variants:\n')
        for name, var in sorted(variants.items()):
            print(f'  {name:<10} {_short_help(name, var.help)}')
        print('\nRun: colorswitch help <variant> for full docs.')
        return

    if command not in variants:
        print(f'Unknown variant: {command}', file=sys.stderr)
        print(f'Available: {", ".join(sorted(variants))}', file=sys.stderr)
        sys.exit(1)

    doc = (_load_variant_module(command).__doc__ or '').strip()
    if not doc:
        print(f'(No module docs for {command!r})')
        return
    print(doc)


def _apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """Command-line flags override environment settings when given."""
    if args.clamp_saturation is not None:
        settings.clamp_saturation = args.clamp_saturation
    if args.caption is not None:
        settings.caption = args.caption
    if args.workers is not None:
        if args.workers < 1:
            print(f'Error: --workers must be >= 1, got {args.workers}', file=sys.stderr)
            sys.exit(1)
        settings.max_workers = args.workers
    return settings


def _calibrate(args: argparse.Namespace) -> None:
    try:
        chart = calibration_chart(args.width, args.height)
    except ValueError as e:
        print(f'Error: {e}', file=sys.stderr)
        sys.exit(1)
    path = save_png(chart, os.path.join(args.out_dir, 'calibration.png'))
    print(f'colorswitch: wrote {path}', file=sys.stderr)


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    # Load .env before anything else — OS env vars always win
    env_path = load_env(env_file=getattr(args, 'env_file', None))
    if env_path:
        print(f'colorswitch: loaded {env_path}', file=sys.stderr)

    if not args.variant:
        parser.print_help()
        sys.exit(1)

    if args.variant == 'help':
        _print_help(getattr(args, 'command', None))
        return

    if args.variant == 'calibrate':
        _calibrate(args)
        return

    try:
        settings = _apply_overrides(load_settings(), args)
    except ValueError as e:
        print(f'Error: {e}', file=sys.stderr)
        sys.exit(1)

    if not os.path.isfile(args.image):
        print(f'Error: image not found: {args.image}', file=sys.stderr)
        sys.exit(1)

    try:
        source = load_image(args.image)
    except (UnidentifiedImageError, OSError) as e:
        print(f'Error: cannot read image {args.image}: {e}', file=sys.stderr)
        sys.exit(1)

    report = Report(
        image_path=args.image,
        image_width=source.width,
        image_height=source.height,
    )

    var = registry.get(args.variant)
    var.execute(source, report, settings, args.out_dir)

    for data in report.outputs.values():
        print(f'colorswitch: wrote {data["file"]}', file=sys.stderr)

    if args.json:
        print(format_json(report))
    else:
        print(format_text(report))


if __name__ == '__main__':
    main()
