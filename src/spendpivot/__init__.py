"""spendpivot - category by month spending pivots from pasted transaction exports."""

from ._version import VERSION
from .aggregator import (
    Pivot,
    Stats,
    calculate_stats,
    get_available_years,
    get_transactions_for_cell,
    pivot_data,
)
from .column_mapper import ABSENT, ColumnMapping, map_columns
from .date_parser import ResolvedDate, resolve_date
from .parser import Transaction, parse_tsv
from .sign_convention import should_invert

__version__ = VERSION
