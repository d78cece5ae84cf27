"""
spendpivot 'run' command - Parse an export and print the spending pivot.
"""

import json
import sys

from ..aggregator import MONTHS, get_available_years, get_transactions_for_cell, pivot_data
from ..cli import print_error, read_source_text, resolve_config
from ..colors import C
from ..column_mapper import describe_mapping, map_columns
from ..parser import collect_amounts, data_rows, header_cells, parse_tsv
from ..report import (
    pivot_to_dict,
    render_pivot_markdown,
    render_pivot_text,
    render_transactions_markdown,
    render_transactions_text,
    sort_transactions,
    transaction_to_dict,
)
from ..sign_convention import summarize_signs
from ..store import TextStore


def _print_detection(text, decimal_separator):
    """Show how the header was mapped and which sign convention was picked."""
    headers = header_cells(text)
    mapping = map_columns(headers)

    print(f"{C.BOLD}Detected columns:{C.RESET}", file=sys.stderr)
    for field_name, header in describe_mapping(headers, mapping):
        shown = header if header is not None else f"{C.DIM}(absent){C.RESET}"
        print(f"  {field_name:<20} {shown}", file=sys.stderr)

    summary = summarize_signs(collect_amounts(data_rows(text), mapping, decimal_separator))
    verdict = 'inverted' if summary.invert else 'kept as-is'
    print(f"{C.BOLD}Sign convention:{C.RESET} {summary.negative_count} negative, "
          f"{summary.positive_count} positive -> amounts {verdict}", file=sys.stderr)
    print(file=sys.stderr)


def _pick_year(args, config, years):
    if args.year is not None:
        return args.year
    if config.get('year') is not None:
        return config['year']
    return years[0] if years else None


def cmd_run(args):
    """Handle the 'run' subcommand."""
    config = resolve_config(args)

    if (args.category is None) != (args.month is None):
        print_error("--category and --month must be given together")
        sys.exit(1)

    text, source = read_source_text(args.file, config)

    if args.save:
        store = TextStore(config.get('store_path'))
        store.save(text)
        if not args.quiet:
            print(f"Saved input to {store.path}", file=sys.stderr)

    decimal_separator = config['decimal_separator']
    transactions = parse_tsv(text, decimal_separator)
    if not transactions:
        print_error(
            f"No transactions found in {source}",
            hints=("\nExpected a header line followed by tab-separated rows.",
                   "Use 'spendpivot inspect <file>' to check column detection."),
        )
        sys.exit(1)

    if args.verbose:
        _print_detection(text, decimal_separator)

    years = get_available_years(transactions)
    year = _pick_year(args, config, years)
    if year is None:
        print_error(
            "No transaction dates could be read",
            hints=("Supported formats: YYYY-MM-DD, YYYY/MM/DD, MM/DD/YYYY, DD/MM/YYYY",),
        )
        sys.exit(1)
    if year not in years:
        print(f"{C.YELLOW}Warning:{C.RESET} No transactions dated {year}. "
              f"Available years: {', '.join(str(y) for y in years) or 'none'}", file=sys.stderr)

    pivot = pivot_data(transactions, year)
    currency_format = config['currency_format']

    cell = None
    if args.category is not None:
        column = args.sort or config['sort_column']
        direction = args.direction or (config['sort_direction'] if not args.sort else None)
        cell = sort_transactions(
            get_transactions_for_cell(transactions, args.category, year, args.month),
            column,
            direction,
        )

    if args.format == 'json':
        output = pivot_to_dict(pivot)
        output['available_years'] = years
        output['transaction_count'] = len(transactions)
        if cell is not None:
            output['cell'] = {
                'category': args.category,
                'month': args.month,
                'transactions': [transaction_to_dict(t) for t in cell],
            }
        print(json.dumps(output, indent=2))
        return

    if args.format == 'markdown':
        print(render_pivot_markdown(pivot, currency_format))
        if cell is not None:
            print()
            print(f"### {args.category} - {MONTHS[args.month - 1]} {year}")
            print()
            print(render_transactions_markdown(cell, currency_format))
        return

    if not args.quiet:
        dated = sum(1 for t in transactions if t.resolved_date())
        print(f"{C.BOLD}Spending by category - {year}{C.RESET}")
        print(f"{C.DIM}{len(transactions)} transactions from {source} "
              f"({len(transactions) - dated} without a readable date){C.RESET}")
        print()

    print(render_pivot_text(pivot, currency_format))

    if cell is not None:
        print()
        print(f"{C.BOLD}Transactions for {args.category} - {MONTHS[args.month - 1]} {year}{C.RESET}")
        print(render_transactions_text(cell, currency_format))
