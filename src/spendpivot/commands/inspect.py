"""
spendpivot 'inspect' command - Show how an export will be read.
"""

import sys

from ..aggregator import get_available_years
from ..cli import print_error, read_source_text, resolve_config
from ..colors import C
from ..column_mapper import describe_mapping, map_columns, unmapped_headers
from ..parser import collect_amounts, data_rows, header_cells, parse_tsv
from ..report import format_currency_decimal
from ..sign_convention import summarize_signs


def _analyze_dates(transactions, max_samples=5):
    """Count resolvable dates and collect samples of the ones that aren't."""
    resolved = 0
    unresolved_samples = []
    for txn in transactions:
        if txn.resolved_date():
            resolved += 1
        elif len(unresolved_samples) < max_samples:
            unresolved_samples.append(txn.date)
    return {
        'resolved': resolved,
        'unresolved': len(transactions) - resolved,
        'unresolved_samples': unresolved_samples,
    }


def cmd_inspect(args):
    """Handle the 'inspect' subcommand - show columns, dates and sign convention."""
    config = resolve_config(args)
    text, source = read_source_text(args.file, config)
    decimal_separator = config['decimal_separator']

    headers = header_cells(text)
    if not headers:
        print_error(f"{source} appears to be empty.")
        sys.exit(1)

    mapping = map_columns(headers)
    rows = data_rows(text)

    print(f"Inspecting: {source}")
    print("=" * 70)

    print(f"\n{C.BOLD}Column Detection:{C.RESET}")
    print("-" * 70)
    for field_name, header in describe_mapping(headers, mapping):
        if header is None:
            print(f"  {field_name:<20} {C.DIM}(absent){C.RESET}")
        else:
            print(f"  {field_name:<20} [{mapping.index_of(field_name):2}] {header}")

    ignored = unmapped_headers(headers, mapping)
    if ignored:
        print(f"\n  Ignored columns: {', '.join(h.strip() or '(blank)' for h in ignored)}")
    if not mapping.is_mapped('date'):
        print(f"\n  {C.YELLOW}⚠ No date column found - nothing will show up in the pivot{C.RESET}")
    if not mapping.is_mapped('amount'):
        print(f"\n  {C.YELLOW}⚠ No amount column found - all amounts will be 0{C.RESET}")

    transactions = parse_tsv(text, decimal_separator)

    print(f"\n{C.BOLD}Dates:{C.RESET}")
    print("-" * 70)
    dates = _analyze_dates(transactions)
    print(f"  Readable:   {dates['resolved']} of {len(transactions)}")
    if dates['unresolved']:
        print(f"  Unreadable: {dates['unresolved']} (kept, but left out of the pivot)")
        for sample in dates['unresolved_samples']:
            print(f"    {sample!r}")
    years = get_available_years(transactions)
    if years:
        print(f"  Years:      {', '.join(str(y) for y in years)}")

    print(f"\n{C.BOLD}Sign Convention:{C.RESET}")
    print("-" * 70)
    summary = summarize_signs(collect_amounts(rows, mapping, decimal_separator))
    currency_format = config['currency_format']
    print(f"  Positive: {summary.positive_count:>5}  "
          f"({format_currency_decimal(summary.positive_total, currency_format)})")
    print(f"  Negative: {summary.negative_count:>5}  "
          f"({format_currency_decimal(summary.negative_total, currency_format)})")
    if summary.invert:
        print("  Mostly negative amounts (expenses are negative) - amounts will be inverted")
    else:
        print("  Expenses are positive (or no majority) - amounts kept as-is")

    if args.rows > 0 and transactions:
        print(f"\n{C.BOLD}Sample Rows (normalized):{C.RESET}")
        print("-" * 70)
        for txn in transactions[:args.rows]:
            amount = format_currency_decimal(txn.amount, currency_format)
            print(f"  {txn.date:<12} {txn.merchant[:28]:<28} {txn.effective_category[:18]:<18} {amount:>12}")
    print()
