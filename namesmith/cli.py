#!/usr/bin/env python3
"""
Namesmith CLI
=============
Command-line interface for syllable-based name generation.

Usage:
    namesmith generate -n 10 --preset soft
    namesmith generate --syllables 2-4 --seed 7 --capitalize
    namesmith vary ta ri on -n 5
    namesmith check "kazzz" --preset harsh
    namesmith presets
    namesmith export --preset soft -o soft.yaml
"""

import argparse
import json
import logging
import sys

from . import __version__
from .config import dump_yaml, generator_to_dict, load_generator
from .generators.mutation import syllable_reroll_transformer
from .generators.name import Name
from .generators.phonemes import list_presets, preset_generator
from .settings import get_setting, resolve_path
from .ui import get_ui

logger = logging.getLogger(__name__)


# =============================================================================
# Utilities
# =============================================================================

class Output:
    """Handles CLI output with quiet mode support."""

    def __init__(self, quiet: bool = False, plain: bool = None):
        self.quiet = quiet
        self.ui = get_ui(plain=plain)

    def __getattr__(self, attr):
        # Rendering calls go to the UI unless quiet
        render = getattr(self.ui, attr)

        def call(*args, **kwargs):
            if not self.quiet:
                return render(*args, **kwargs)
        return call

    def data(self, text: str):
        """Machine-readable output. Printed even in quiet mode."""
        print(text)

    def error(self, msg: str):
        self.ui.error(msg)


def configure_logging(verbose: bool = False):
    level_name = str(get_setting('logging.level', 'WARNING')).upper()
    level = logging.DEBUG if verbose else getattr(logging, level_name, logging.WARNING)
    logging.basicConfig(
        level=level,
        format=get_setting('logging.format', '%(levelname)s %(name)s: %(message)s'),
        stream=sys.stderr,
    )


def parse_syllable_range(value: str) -> tuple:
    """Parse ``"3"`` or ``"2-4"`` into an inclusive (min, max) pair."""
    try:
        if '-' in value:
            low, high = value.split('-', 1)
            minimum, maximum = int(low), int(high)
        else:
            minimum = maximum = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected N or MIN-MAX, got {value!r}") from None
    if minimum < 1 or maximum < minimum:
        raise argparse.ArgumentTypeError(f"invalid syllable range {value!r}")
    return minimum, maximum


def build_generator(args):
    """Generator from ``--config`` if given, otherwise from ``--preset``."""
    if getattr(args, 'config', None):
        logger.debug(f"Loading generator from {args.config}")
        return load_generator(resolve_path(args.config), seed=args.seed)
    preset = args.preset or get_setting('cli.default_preset', 'default')
    logger.debug(f"Using preset '{preset}'")
    return preset_generator(preset, seed=args.seed)


def _name_record(name: Name) -> dict:
    return {'name': name.render(), 'display': name.display(), 'syllables': list(name.syllables)}


# =============================================================================
# Commands
# =============================================================================

def cmd_generate(args, out: Output):
    """Generate names."""
    generator = build_generator(args)
    if args.syllables:
        generator.using_syllable_count(*args.syllables)

    names = [generator.next_name() for _ in range(args.count)]

    if args.json:
        out.data(json.dumps([_name_record(n) for n in names], indent=2))
    else:
        title = args.config or f"{args.preset or get_setting('cli.default_preset', 'default')} preset"
        out.print_names(names, title=title, capitalize=args.capitalize)
    return 0


def cmd_vary(args, out: Output):
    """Produce variations of a name given as syllables."""
    generator = build_generator(args)
    if generator.transformer is None:
        # Presets without mutations fall back to re-rolling a syllable
        generator.using_transformer(syllable_reroll_transformer(generator.syllables, seed=args.seed))

    source = Name(list(args.syllables))
    variations = [generator.next_variation(source) for _ in range(args.count)]

    if args.json:
        out.data(json.dumps([_name_record(v) for v in variations], indent=2))
    else:
        out.print_variations(source, variations, capitalize=args.capitalize)
    return 0


def cmd_check(args, out: Output):
    """Run a configuration's filter over a name. Exit 1 if rejected."""
    generator = build_generator(args)
    # "ta-ri" is checked as syllables, "tari" as plain text
    target = Name(args.name.split('-')) if '-' in args.name else args.name
    text = str(target)

    matched = generator.filter.first_match(target) if generator.filter is not None else None
    if args.json:
        out.data(json.dumps({'name': text, 'valid': matched is None, 'matched': matched}))
    else:
        out.print_check(text, matched)
    return 0 if matched is None else 1


def cmd_presets(args, out: Output):
    """List available presets."""
    presets = list_presets()
    if args.json:
        out.data(json.dumps(presets, indent=2))
    else:
        out.print_presets(presets)
    return 0


def cmd_export(args, out: Output):
    """Write a preset or config as YAML."""
    text = dump_yaml(generator_to_dict(build_generator(args)))
    if args.output:
        with open(resolve_path(args.output), "w", encoding="utf-8") as f:
            f.write(text)
        out.print_text(f"Exported to {args.output}")
    else:
        out.data(text.rstrip('\n'))
    return 0


# =============================================================================
# Main
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='namesmith',
        description='Namesmith - Syllable-Based Name Generator',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s generate -n 10 --preset soft
  %(prog)s generate --syllables 2-4 --seed 7 --capitalize
  %(prog)s generate --config my_names.yaml --json
  %(prog)s vary ta ri on -n 5
  %(prog)s check "ka-rok" --preset harsh
  %(prog)s presets
  %(prog)s export --preset soft -o soft.yaml
"""
    )

    parser.add_argument('--version', '-V', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--quiet', '-q', action='store_true', help='Suppress non-essential output')
    parser.add_argument('--plain', action='store_true', help='Plain output, one item per line')

    # Options shared by every command that builds a generator
    source = argparse.ArgumentParser(add_help=False)
    source.add_argument('--preset', '-p', help='Preset name (default: from app.yaml)')
    source.add_argument('--config', '-c', help='Generator YAML file (overrides --preset)')
    source.add_argument('--seed', type=int, help='Seed for reproducible output')
    source.add_argument('--verbose', '-v', action='store_true', help='Debug logging')
    source.add_argument('--json', '-j', action='store_true', help='Output as JSON')

    default_count = int(get_setting('cli.default_count', 10))
    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # --- generate ---
    p = subparsers.add_parser('generate', aliases=['gen', 'g'], parents=[source], help='Generate names')
    p.add_argument('-n', '--count', type=int, default=default_count,
                   help=f'Number of names (default: {default_count})')
    p.add_argument('--syllables', '-s', type=parse_syllable_range, metavar='MIN[-MAX]',
                   help='Syllable count or range')
    p.add_argument('--capitalize', action='store_true', help='Capitalize the first letter')

    # --- vary ---
    p = subparsers.add_parser('vary', aliases=['v'], parents=[source], help='Produce variations of a name')
    p.add_argument('syllables', nargs='+', metavar='SYLLABLE', help='Syllables of the source name')
    p.add_argument('-n', '--count', type=int, default=default_count,
                   help=f'Number of variations (default: {default_count})')
    p.add_argument('--capitalize', action='store_true', help='Capitalize the first letter')

    # --- check ---
    p = subparsers.add_parser('check', aliases=['c'], parents=[source],
                              help="Check a name against a configuration's filter")
    p.add_argument('name', help='Name to check; separate syllables with "-"')

    # --- presets ---
    p = subparsers.add_parser('presets', help='List available presets')
    p.add_argument('--json', '-j', action='store_true', help='Output as JSON')

    # --- export ---
    p = subparsers.add_parser('export', parents=[source], help='Write a preset or config as YAML')
    p.add_argument('--output', '-o', help='Output file path (default: stdout)')

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    # Handle aliases
    cmd_map = {
        'gen': 'generate', 'g': 'generate',
        'v': 'vary',
        'c': 'check',
    }
    command = cmd_map.get(args.command, args.command)

    configure_logging(getattr(args, 'verbose', False))
    out = Output(quiet=args.quiet, plain=True if args.plain else None)

    if getattr(args, 'count', 1) < 1:
        out.error("Count must be a positive number")
        return 1

    commands = {
        'generate': cmd_generate,
        'vary': cmd_vary,
        'check': cmd_check,
        'presets': cmd_presets,
        'export': cmd_export,
    }

    try:
        return commands[command](args, out)
    except KeyboardInterrupt:
        out.error("Cancelled.")
        return 130
    except Exception as e:
        out.error(str(e))
        if getattr(args, 'verbose', False):
            import traceback
            traceback.print_exc()
        return 1


if __name__ == '__main__':
    sys.exit(main())
