"""
Transaction parsing - turn pasted tab-separated text into Transactions.

Parsing is two passes over the data lines: the first collects the raw amounts
so the batch's sign convention can be decided, the second builds the
normalized records with that verdict applied.
"""

import math
import re
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .column_mapper import ABSENT, ColumnMapping, map_columns
from .date_parser import ResolvedDate, resolve_date
from .sign_convention import should_invert

DELIMITER = '\t'
UNCATEGORIZED = 'Uncategorized'

TEXT_FIELDS = (
    'date',
    'merchant',
    'category',
    'account',
    'original_statement',
    'notes',
    'tags',
    'owner',
    'fixed_category',
)


@dataclass(frozen=True)
class Transaction:
    """One normalized row of a pasted export."""
    date: str = ''
    merchant: str = ''
    category: str = ''
    account: str = ''
    original_statement: str = ''
    notes: str = ''
    amount: float = 0.0
    tags: str = ''
    owner: str = ''
    fixed_category: str = ''

    @property
    def effective_category(self) -> str:
        """Category used for grouping: fixed, then raw, then Uncategorized."""
        return self.fixed_category or self.category or UNCATEGORIZED

    def resolved_date(self) -> Optional[ResolvedDate]:
        # Recomputed on every call; dates are never cached on the record
        return resolve_date(self.date)


# ============================================================================
# FIELD PARSING
# ============================================================================

def parse_amount(amount_str, decimal_separator='.'):
    """Parse an amount string to float, handling various formats.

    Unlike a strict parser this never raises: anything that is not a finite
    number comes back as 0.0.

    Args:
        amount_str: String like "1,234.56" or "1.234,56" or "(100.00)"
        decimal_separator: Character used as decimal separator ('.' or ',')

    Returns:
        Float value of the amount, 0.0 when unparsable
    """
    if not amount_str:
        return 0.0
    amount_str = amount_str.strip()

    # Handle parentheses notation for negative: (100.00) -> -100.00
    negative = False
    if amount_str.startswith('(') and amount_str.endswith(')'):
        negative = True
        amount_str = amount_str[1:-1]

    # Remove currency symbols
    amount_str = re.sub(r'[$€£¥]', '', amount_str).strip()

    if decimal_separator == ',':
        # European format: 1.234,56 or 1 234,56
        amount_str = amount_str.replace('.', '').replace(' ', '')
        amount_str = amount_str.replace(',', '.')
    else:
        # US format: 1,234.56
        amount_str = amount_str.replace(',', '')

    # float() would read "1_000" as 1000
    if '_' in amount_str:
        return 0.0

    try:
        result = float(amount_str)
    except ValueError:
        return 0.0
    if not math.isfinite(result):
        return 0.0
    return -result if negative else result


def _cell(cols: Sequence[str], idx: int) -> str:
    if idx == ABSENT or idx >= len(cols):
        return ''
    return cols[idx].strip()


def _raw_amount(cols, mapping, decimal_separator):
    if not mapping.is_mapped('amount'):
        return 0.0
    return parse_amount(_cell(cols, mapping.amount), decimal_separator)


def split_lines(text: str) -> List[str]:
    """Split pasted text into lines, dropping leading and trailing blank lines.

    Cells are left untouched so a blank first column keeps its position.
    """
    if not text:
        return []
    lines = text.splitlines()
    start = 0
    while start < len(lines) and not lines[start].strip():
        start += 1
    end = len(lines)
    while end > start and not lines[end - 1].strip():
        end -= 1
    return lines[start:end]


def header_cells(text: str) -> List[str]:
    """Return the header cells of a pasted export (empty list if none)."""
    lines = split_lines(text)
    if not lines:
        return []
    return lines[0].split(DELIMITER)


def data_rows(text: str) -> List[List[str]]:
    """Return the non-blank data lines of a pasted export, split into cells."""
    return [
        line.split(DELIMITER)
        for line in split_lines(text)[1:]
        if line.strip()
    ]


# ============================================================================
# TRANSACTION PARSING
# ============================================================================

def collect_amounts(rows, mapping, decimal_separator='.'):
    """Nonzero raw amounts of the given rows, before any sign inversion."""
    amounts = []
    for cols in rows:
        amount = _raw_amount(cols, mapping, decimal_separator)
        if amount != 0:
            amounts.append(amount)
    return amounts


def build_transaction(cols: Sequence[str], mapping: ColumnMapping, invert: bool,
                      decimal_separator: str = '.') -> Transaction:
    """Build one Transaction from a split data line."""
    amount = _raw_amount(cols, mapping, decimal_separator)
    if not amount:
        amount = 0.0
    elif invert:
        amount = -amount

    fields = {name: _cell(cols, mapping.index_of(name)) for name in TEXT_FIELDS}
    return Transaction(amount=amount, **fields)


def parse_tsv(text: str, decimal_separator: str = '.') -> List[Transaction]:
    """Parse tab-separated export text into normalized Transactions.

    The first line is the header; its cells are mapped to fields with
    map_columns(). Columns can come in any order, and missing columns or short
    rows leave the field empty (0.0 for amount). Blank lines are skipped.

    Whether amounts get sign-inverted is decided once for the whole batch
    (see should_invert), so every row in one paste shares the same convention.

    Args:
        text: Full pasted text, header line first
        decimal_separator: Character used as decimal separator ('.' or ',')

    Returns:
        List of Transactions in input row order (empty for fewer than two lines)
    """
    lines = split_lines(text)
    if len(lines) < 2:
        return []

    mapping = map_columns(lines[0].split(DELIMITER))
    rows = data_rows(text)

    invert = should_invert(collect_amounts(rows, mapping, decimal_separator))

    return [build_transaction(cols, mapping, invert, decimal_separator) for cols in rows]
