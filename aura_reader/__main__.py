"""aura-tool: Aura photo reader: chakra colours, a reading, and a glow overlay.

Usage: uv run aura-tool <command> <out_dir> <image> [options]

Commands are auto-discovered from aura_reader/commands/.
Each command module's docstring is its documentation.
Run `aura-tool help <command>` for full module docs.

Environment variables / .env loading:
  OS environment variables are always used first.
  If a variable is not set, aura-tool looks for a .env file starting from
  the current directory and walking up, stopping at the nearest .git boundary.
  Use --env-file to override the .env location explicitly.
"""

import argparse
import importlib
import json
import os
import sys

from aura_reader import registry
from aura_reader.core.codec import decode_image
from aura_reader.core.env import load_env
from aura_reader.core.palette import CHAKRAS
from aura_reader.core.report import chakra_dict, format_json, format_text
from aura_reader.core.types import ContractViolation, DecodeError, Report, SourceImage


def _load_command_module(name: str) -> object:
    """Load the raw module for a command (for docstring access)."""
    return importlib.import_module(f'aura_reader.commands.{name}')


def _short_doc(name: str, fallback: str) -> str:
    doc = (_load_command_module(name).__doc__ or '').strip()
    return doc.splitlines()[0] if doc else fallback


def _build_parser() -> argparse.ArgumentParser:
    commands = registry.all_commands()

    epilog = (
        'Examples:\n'
        '  aura-tool all ./out portrait.jpg\n'
        '  aura-tool all ./out portrait.jpg --json --seed 3\n'
        '  aura-tool chakras ./out portrait.jpg\n'
        '  aura-tool overlay ./out portrait.jpg --chakras violet,blue --quality 80\n'
        '  aura-tool overlay ./out portrait.jpg --no-accents\n'
        '  aura-tool palette\n'
        '  aura-tool help overlay\n'
        '\n'
        'Settings (env or .env):\n'
        '  AURA_JPEG_QUALITY=90   overlay JPEG quality (1-95)\n'
        '  AURA_ACCENTS=0         disable crown/side glows\n'
    )
    parser = argparse.ArgumentParser(
        prog='aura-tool',
        description='Aura photo reader: chakra colours, a reading, and a glow overlay.',
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        '--env-file',
        metavar='PATH',
        default=None,
        help='Path to .env file (default: walk up from cwd to .git boundary)',
    )
    sub = parser.add_subparsers(dest='command', help='Command to run')

    for name, cmd in sorted(commands.items()):
        p = sub.add_parser(name, help=_short_doc(name, cmd.help))
        p.add_argument('out_dir', help='Directory for output images')
        p.add_argument('image', help='Path to photo (JPEG/PNG/...)')
        p.add_argument('-j', '--json', action='store_true', help='Output JSON instead of text')
        p.add_argument('-c', '--chakras', help='Force a selection, e.g. "red,indigo" (skips colour mapping)')
        p.add_argument('-s', '--seed', type=int, default=None, help='Seed for reading template choice')
        p.add_argument('-q', '--quality', type=int, default=None, metavar='N', help='Overlay JPEG quality 1-95')
        p.add_argument('--no-accents', action='store_true', help='Skip crown and side glows')

    help_parser = sub.add_parser('help', help='Print full docs for a command')
    help_parser.add_argument('topic', nargs='?', help='Command name')

    palette_parser = sub.add_parser('palette', help='List the seven chakra colours')
    palette_parser.add_argument('-j', '--json', action='store_true', help='Output JSON instead of text')

    return parser


def _print_help(topic: str | None) -> None:
    """Print full module docstring for a command."""
    commands = registry.all_commands()

    if topic is None:
        print('Available commands:\n')
        for name, cmd in sorted(commands.items()):
            print(f'  {name:<10} {_short_doc(name, cmd.help)}')
        print('\nRun: aura-tool help <command> for full docs.')
        return

    if topic not in commands:
        print(f'Unknown command: {topic}', file=sys.stderr)
        print(f'Available: {", ".join(sorted(commands))}', file=sys.stderr)
        sys.exit(1)

    doc = (_load_command_module(topic).__doc__ or '').strip()
    print(doc if doc else f'(No module docs for {topic!r})')


def _print_palette(as_json: bool) -> None:
    if as_json:
        print(json.dumps([chakra_dict(c) for c in CHAKRAS], indent=2))
        return
    for i, c in enumerate(CHAKRAS):
        print(f'  {i}  {c.name:<7} {c.hex}  {c.chakra:<13} {c.element:<8} {", ".join(c.traits[:3])}')


def _load_source(path: str) -> SourceImage:
    """Read the photo bytes and try to decode them. Decode failure is recorded, not raised."""
    with open(path, 'rb') as f:
        data = f.read()
    source = SourceImage(path=path, data=data)
    try:
        source.image = decode_image(data)
    except DecodeError as e:
        source.decode_error = str(e)
    return source


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    # Load .env before anything else, OS env vars always win
    env_path = load_env(env_file=getattr(args, 'env_file', None))
    if env_path:
        print(f'aura-tool: loaded {env_path}', file=sys.stderr)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == 'help':
        _print_help(getattr(args, 'topic', None))
        return

    if args.command == 'palette':
        _print_palette(args.json)
        return

    if not os.path.isfile(args.image):
        print(f'Error: image not found: {args.image}', file=sys.stderr)
        sys.exit(1)

    source = _load_source(args.image)
    if source.decode_error:
        print(f'aura-tool: {source.decode_error}; using seed fallback', file=sys.stderr)

    report = Report(image_path=args.image)
    if source.image is not None:
        report.image_width, report.image_height = source.image.size

    try:
        registry.get(args.command).execute(source, report, args)
    except ContractViolation as e:
        print(f'aura-tool: {e}', file=sys.stderr)
        sys.exit(1)

    print(format_json(report) if args.json else format_text(report).rstrip())

    if report.errors:
        for err in report.errors:
            print(f'aura-tool: {err}', file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
