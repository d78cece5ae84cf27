"""
spendpivot CLI - Command-line interface.

Usage:
    spendpivot run export.tsv               # Category x month pivot for the latest year
    pbpaste | spendpivot run - --save       # Read a paste from stdin and keep it
    spendpivot run --year 2024 --category Dining --month 3
    spendpivot inspect export.tsv           # Show detected columns and sign convention
    spendpivot sample --year 2025 > demo.tsv
"""

import argparse
import os
import sys

from ._version import VERSION
from .colors import C
from .config_loader import find_config_dir, load_config
from .report import SORT_COLUMNS
from .store import TextStore


# ============================================================================
# SHARED HELPERS
# ============================================================================

def print_error(message, hints=()):
    """Print an error (and optional hint lines) to stderr."""
    print(f"{C.RED}Error:{C.RESET} {message}", file=sys.stderr)
    for hint in hints:
        print(hint, file=sys.stderr)


def print_warnings(config):
    for warning in config.get('_warnings', []):
        print(f"{C.YELLOW}Warning:{C.RESET} {warning['message']}", file=sys.stderr)


def resolve_config(args):
    """Load config from --config, an auto-detected directory, or defaults.

    Exits with status 1 when an explicitly given config can't be loaded.
    """
    config_dir = getattr(args, 'config', None)
    if config_dir:
        config_dir = os.path.abspath(config_dir)
    else:
        config_dir = find_config_dir()

    try:
        config = load_config(config_dir, getattr(args, 'settings', 'settings.yaml'))
    except (FileNotFoundError, ValueError) as e:
        print_error(str(e))
        sys.exit(1)

    print_warnings(config)
    return config


def read_source_text(path, config):
    """Read export text from a file, stdin ('-'), the configured data_file, or the store.

    Returns:
        (text, source_label)
    """
    if path == '-':
        return sys.stdin.read(), '<stdin>'

    if path:
        filepath = os.path.abspath(path)
        if not os.path.exists(filepath):
            print_error(f"File not found: {filepath}")
            sys.exit(1)
        with open(filepath, 'r', encoding='utf-8-sig') as f:
            return f.read(), filepath

    if config.get('data_file'):
        if not os.path.exists(config['data_file']):
            print_error(f"Configured data_file not found: {config['data_file']}")
            sys.exit(1)
        with open(config['data_file'], 'r', encoding='utf-8-sig') as f:
            return f.read(), config['data_file']

    store = TextStore(config.get('store_path'))
    text = store.load()
    if not text.strip():
        print_error(
            "No input given and nothing saved yet.",
            hints=(
                "\nPass a file, or pipe a paste and keep it:",
                "  spendpivot run export.tsv",
                "  pbpaste | spendpivot run - --save",
            ),
        )
        sys.exit(1)
    return text, store.path


# ============================================================================
# SMALL COMMANDS
# ============================================================================

def cmd_years(args):
    """Handle the 'years' subcommand - list years present in the data."""
    from .aggregator import get_available_years
    from .parser import parse_tsv

    config = resolve_config(args)
    text, _ = read_source_text(args.file, config)
    years = get_available_years(parse_tsv(text, config['decimal_separator']))
    if not years:
        print("No dated transactions found.", file=sys.stderr)
        sys.exit(1)
    for year in years:
        print(year)


def cmd_sample(args):
    """Handle the 'sample' subcommand - write a synthetic export."""
    from .sample_data import generate_sample_tsv

    if args.rows < 1:
        print_error("--rows must be at least 1")
        sys.exit(1)

    text = generate_sample_tsv(
        args.year,
        rows=args.rows,
        seed=args.seed,
        negative_expenses=not args.positive_expenses,
    )
    if args.output:
        with open(args.output, 'w', encoding='utf-8', newline='') as f:
            f.write(text)
        print(f"Wrote {args.rows} sample transactions to {args.output}", file=sys.stderr)
    else:
        sys.stdout.write(text)


def _month(value):
    month = int(value)
    if not 1 <= month <= 12:
        raise argparse.ArgumentTypeError(f"month must be 1-12, got {value}")
    return month


def build_parser():
    parser = argparse.ArgumentParser(
        prog='spendpivot',
        description='Turn pasted transaction exports into a category by month spending pivot.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest='command', title='commands', metavar='<command>')

    def add_config_args(sub):
        sub.add_argument(
            '--config', '-c',
            help='Path to config directory (default: ./config, ./spendpivot/config or $SPENDPIVOT_CONFIG)'
        )
        sub.add_argument(
            '--settings', '-s',
            default='settings.yaml',
            help='Settings file name (default: settings.yaml)'
        )

    # run subcommand
    run_parser = subparsers.add_parser(
        'run',
        help='Parse an export and print the category x month pivot'
    )
    run_parser.add_argument(
        'file',
        nargs='?',
        help="Tab-separated export ('-' for stdin; default: data_file from settings, then the saved paste)"
    )
    add_config_args(run_parser)
    run_parser.add_argument(
        '--year', '-y',
        type=int,
        help='Year to summarize (default: settings year, else most recent year in the data)'
    )
    run_parser.add_argument(
        '--category',
        help='Show the transactions behind one cell (requires --month)'
    )
    run_parser.add_argument(
        '--month', '-m',
        type=_month,
        help='Month (1-12) of the cell to show (requires --category)'
    )
    run_parser.add_argument(
        '--sort',
        choices=SORT_COLUMNS,
        help='Sort column for the cell transactions (default: settings sort_column)'
    )
    direction = run_parser.add_mutually_exclusive_group()
    direction.add_argument('--asc', dest='direction', action='store_const', const='asc',
                           help='Sort ascending')
    direction.add_argument('--desc', dest='direction', action='store_const', const='desc',
                           help='Sort descending')
    run_parser.add_argument(
        '--format', '-f',
        choices=['text', 'markdown', 'json'],
        default='text',
        help='Output format: text (default), markdown, json'
    )
    run_parser.add_argument(
        '--save',
        action='store_true',
        help='Save the input text so later runs can omit the file'
    )
    run_parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Minimal output'
    )
    run_parser.add_argument(
        '-v', '--verbose',
        action='count',
        default=0,
        help='Show the detected column mapping and sign convention'
    )

    # inspect subcommand
    inspect_parser = subparsers.add_parser(
        'inspect',
        help='Show detected columns, date coverage and sign convention of an export',
    )
    inspect_parser.add_argument(
        'file',
        nargs='?',
        help="Tab-separated export to inspect ('-' for stdin)"
    )
    add_config_args(inspect_parser)
    inspect_parser.add_argument(
        '--rows', '-n',
        type=int,
        default=5,
        help='Number of sample rows to display (default: 5)'
    )

    # years subcommand
    years_parser = subparsers.add_parser(
        'years',
        help='List the years present in an export, most recent first'
    )
    years_parser.add_argument('file', nargs='?', help="Tab-separated export ('-' for stdin)")
    add_config_args(years_parser)

    # sample subcommand
    sample_parser = subparsers.add_parser(
        'sample',
        help='Write a synthetic tab-separated export for trying things out'
    )
    sample_parser.add_argument('--year', '-y', type=int, default=2025, help='Year of the sample dates (default: 2025)')
    sample_parser.add_argument('--rows', '-n', type=int, default=60, help='Number of transactions (default: 60)')
    sample_parser.add_argument('--seed', type=int, default=0, help='Random seed (default: 0)')
    sample_parser.add_argument('--positive-expenses', action='store_true',
                               help='Record expenses as positive amounts (default: negative)')
    sample_parser.add_argument('--output', '-o', help='Write to a file instead of stdout')

    # version subcommand
    subparsers.add_parser('version', help='Show version information')

    return parser


def main(argv=None):
    """Main entry point for spendpivot CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == 'run':
        from .commands.run import cmd_run
        cmd_run(args)
    elif args.command == 'inspect':
        from .commands.inspect import cmd_inspect
        cmd_inspect(args)
    elif args.command == 'years':
        cmd_years(args)
    elif args.command == 'sample':
        cmd_sample(args)
    elif args.command == 'version':
        print(f"spendpivot {VERSION}")


if __name__ == '__main__':
    main()
