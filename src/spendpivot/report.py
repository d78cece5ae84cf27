"""
Report rendering - text, markdown and JSON views of a spending pivot.
"""

import json
from decimal import ROUND_FLOOR, Decimal
from typing import Iterable, List, Optional, Sequence

from .aggregator import MONTHS, Pivot, calculate_stats
from .parser import Transaction

SORT_COLUMNS = (
    'date',
    'merchant',
    'category',
    'account',
    'original_statement',
    'notes',
    'tags',
    'owner',
    'amount',
)

# Drill-down columns: (attribute, heading)
TRANSACTION_COLUMNS = (
    ('date', 'Date'),
    ('merchant', 'Merchant'),
    ('category', 'Category'),
    ('account', 'Account'),
    ('original_statement', 'Original Statement'),
    ('notes', 'Notes'),
    ('tags', 'Tags'),
    ('owner', 'Owner'),
    ('amount', 'Amount'),
)

TOTAL_LABEL = 'Total'


# ============================================================================
# CURRENCY FORMATTING
# ============================================================================

def round_half_up(amount: float) -> int:
    """Round to a whole number, halves going toward positive infinity."""
    # Decimal(float) is exact, so 0.49999999999999994 stays below the half
    return int((Decimal(amount) + Decimal('0.5')).to_integral_value(rounding=ROUND_FLOOR))


def format_currency(amount: float, currency_format: str = "${amount}") -> str:
    """Format amount with currency symbol/format (no decimals).

    Negative amounts put the sign in front of the whole thing, so
    -1234.4 becomes "-$1,234". Halves round up toward positive infinity
    (2.5 -> 3, -2.5 -> -2).

    Args:
        amount: The amount to format
        currency_format: Format string with {amount} placeholder, e.g. "${amount}" or "{amount} zl"

    Returns:
        Formatted currency string, e.g. "$1,234" or "1,234 zl"
    """
    rounded = round_half_up(amount)
    formatted_num = f"{abs(rounded):,.0f}"
    text = currency_format.format(amount=formatted_num)
    return f"-{text}" if rounded < 0 else text


def format_currency_decimal(amount: float, currency_format: str = "${amount}") -> str:
    """Format amount with currency symbol/format (with 2 decimal places)."""
    formatted_num = f"{abs(amount):,.2f}"
    text = currency_format.format(amount=formatted_num)
    return f"-{text}" if amount < 0 and formatted_num != '0.00' else text


# ============================================================================
# DRILL-DOWN SORTING
# ============================================================================

def default_sort_direction(column: str) -> str:
    """Amounts sort largest first; text columns sort A-Z."""
    return 'desc' if column == 'amount' else 'asc'


def sort_transactions(transactions: Iterable[Transaction], column: str = 'amount',
                      direction: Optional[str] = None) -> List[Transaction]:
    """Return the transactions sorted by one column.

    Amounts compare numerically, everything else compares as case-insensitive
    text. The sort is stable in both directions.

    Raises:
        ValueError: If column or direction is not recognized
    """
    if column not in SORT_COLUMNS:
        raise ValueError(f"Unknown sort column '{column}'. Valid options: {', '.join(SORT_COLUMNS)}")
    direction = direction or default_sort_direction(column)
    if direction not in ('asc', 'desc'):
        raise ValueError(f"Unknown sort direction '{direction}'. Use 'asc' or 'desc'")

    if column == 'amount':
        key = lambda t: t.amount
    else:
        key = lambda t: str(getattr(t, column)).casefold()
    return sorted(transactions, key=key, reverse=(direction == 'desc'))


# ============================================================================
# PIVOT RENDERING
# ============================================================================

def _pivot_rows(pivot: Pivot, currency_format: str) -> List[List[str]]:
    """Rows of [label, Jan..Dec, Total, Mean, Median], totals row last."""
    rows = []
    for category, months in pivot.items():
        rows.append(_format_row(category, months, currency_format))
    if pivot:
        rows.append(_format_row(TOTAL_LABEL, pivot.month_totals(), currency_format))
    return rows


def _format_row(label, months, currency_format):
    stats = calculate_stats(months)
    cells = [label]
    for month in range(1, 13):
        value = months.get(month, 0.0)
        cells.append(format_currency(value, currency_format) if value != 0 else '')
    cells.extend([
        format_currency(stats.total, currency_format),
        format_currency(stats.mean, currency_format),
        format_currency(stats.median, currency_format),
    ])
    return cells


def _pivot_headers() -> List[str]:
    return ['Category'] + list(MONTHS) + ['Total', 'Mean', 'Median']


def _render_table(headers: Sequence[str], rows: Sequence[Sequence[str]], right_align_from: int = 1) -> str:
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    def fmt(cells):
        parts = []
        for i, cell in enumerate(cells):
            parts.append(cell.rjust(widths[i]) if i >= right_align_from else cell.ljust(widths[i]))
        return '  '.join(parts).rstrip()

    lines = [fmt(headers), '  '.join('-' * w for w in widths)]
    lines.extend(fmt(row) for row in rows)
    return '\n'.join(lines)


def render_pivot_text(pivot: Pivot, currency_format: str = "${amount}") -> str:
    """Render the pivot as an aligned plain-text table."""
    if not pivot:
        return f"No categorized spending for {pivot.year}."
    return _render_table(_pivot_headers(), _pivot_rows(pivot, currency_format))


def render_pivot_markdown(pivot: Pivot, currency_format: str = "${amount}") -> str:
    """Render the pivot as a markdown table."""
    lines = [f"## Spending by category - {pivot.year}", '']
    if not pivot:
        lines.append('_No categorized spending._')
        return '\n'.join(lines)

    headers = _pivot_headers()
    lines.append('| ' + ' | '.join(headers) + ' |')
    lines.append('|' + '|'.join(['---'] + ['---:'] * (len(headers) - 1)) + '|')
    rows = _pivot_rows(pivot, currency_format)
    for row in rows[:-1]:
        lines.append('| ' + ' | '.join(row) + ' |')
    total_row = rows[-1]
    lines.append('| ' + ' | '.join(f"**{cell}**" if cell else '' for cell in total_row) + ' |')
    return '\n'.join(lines)


def pivot_to_dict(pivot: Pivot) -> dict:
    """JSON-ready representation of the pivot with per-row stats."""
    def entry(months):
        stats = calculate_stats(months)
        return {
            'months': {str(m): v for m, v in months.items()},
            'total': stats.total,
            'mean': stats.mean,
            'median': stats.median,
        }

    return {
        'year': pivot.year,
        'categories': {category: entry(months) for category, months in pivot.items()},
        'totals': entry(pivot.month_totals()),
    }


def render_pivot_json(pivot: Pivot) -> str:
    return json.dumps(pivot_to_dict(pivot), indent=2)


# ============================================================================
# TRANSACTION RENDERING
# ============================================================================

def transaction_to_dict(txn: Transaction) -> dict:
    return {attr: getattr(txn, attr) for attr, _ in TRANSACTION_COLUMNS} | {
        'fixed_category': txn.fixed_category,
        'effective_category': txn.effective_category,
    }


def render_transactions_text(transactions: Sequence[Transaction],
                             currency_format: str = "${amount}") -> str:
    """Render a drill-down list as an aligned plain-text table."""
    if not transactions:
        return "No transactions."
    headers = [heading for _, heading in TRANSACTION_COLUMNS]
    rows = []
    for txn in transactions:
        row = [str(getattr(txn, attr)) for attr, _ in TRANSACTION_COLUMNS[:-1]]
        row.append(format_currency_decimal(txn.amount, currency_format))
        rows.append(row)
    return _render_table(headers, rows, right_align_from=len(headers) - 1)


def render_transactions_markdown(transactions: Sequence[Transaction],
                                 currency_format: str = "${amount}") -> str:
    headers = [heading for _, heading in TRANSACTION_COLUMNS]
    lines = ['| ' + ' | '.join(headers) + ' |',
             '|' + '|'.join(['---'] * (len(headers) - 1) + ['---:']) + '|']
    for txn in transactions:
        cells = [str(getattr(txn, attr)).replace('|', '\\|') for attr, _ in TRANSACTION_COLUMNS[:-1]]
        cells.append(format_currency_decimal(txn.amount, currency_format))
        lines.append('| ' + ' | '.join(cells) + ' |')
    return '\n'.join(lines)
