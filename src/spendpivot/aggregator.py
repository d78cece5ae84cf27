"""
Spending aggregation - category by month pivot and summary statistics.

Everything here is recomputed from the full transaction list on each call;
nothing is cached between calls.
"""

import statistics
from typing import Dict, Iterable, Iterator, List, Mapping, NamedTuple, Tuple

from .parser import Transaction

MONTHS = ('Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
          'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec')


class Stats(NamedTuple):
    total: float
    mean: float
    median: float


class Pivot:
    """Accumulated signed totals keyed by category, then month (1-12).

    A (category, month) key exists only once a transaction has been added for
    it, so a month that nets to zero is still distinguishable from a month
    with no activity. Categories iterate in lexicographic order and months in
    calendar order.
    """

    def __init__(self, year: int):
        self.year = year
        self._totals: Dict[str, Dict[int, float]] = {}

    def add(self, category: str, month: int, amount: float) -> None:
        if not 1 <= month <= 12:
            raise ValueError(f"Month out of range: {month}")
        months = self._totals.setdefault(category, {})
        months[month] = months.get(month, 0.0) + amount

    def categories(self) -> List[str]:
        return sorted(self._totals)

    def months(self, category: str) -> Dict[int, float]:
        """Monthly totals of one category, in month order (empty if unknown)."""
        months = self._totals.get(category, {})
        return {m: months[m] for m in sorted(months)}

    def get(self, category: str, month: int, default: float = 0.0) -> float:
        return self._totals.get(category, {}).get(month, default)

    def has_entry(self, category: str, month: int) -> bool:
        return month in self._totals.get(category, {})

    def month_totals(self) -> Dict[int, float]:
        """Column totals: each month summed across all categories."""
        totals: Dict[int, float] = {}
        for months in self._totals.values():
            for month, amount in months.items():
                totals[month] = totals.get(month, 0.0) + amount
        return {m: totals[m] for m in sorted(totals)}

    def items(self) -> Iterator[Tuple[str, Dict[int, float]]]:
        for category in self.categories():
            yield category, self.months(category)

    def __contains__(self, category) -> bool:
        return category in self._totals

    def __iter__(self) -> Iterator[str]:
        return iter(self.categories())

    def __len__(self) -> int:
        return len(self._totals)

    def __bool__(self) -> bool:
        return bool(self._totals)

    def __repr__(self):
        return f"Pivot(year={self.year}, categories={self.categories()})"


def get_available_years(transactions: Iterable[Transaction]) -> List[int]:
    """Distinct years with at least one resolvable date, most recent first."""
    years = set()
    for txn in transactions:
        resolved = txn.resolved_date()
        if resolved:
            years.add(resolved.year)
    return sorted(years, reverse=True)


def pivot_data(transactions: Iterable[Transaction], year: int) -> Pivot:
    """Build the category x month pivot for one year.

    Transactions dated in other years, or whose date cannot be resolved, do
    not contribute.
    """
    pivot = Pivot(year)
    for txn in transactions:
        resolved = txn.resolved_date()
        if not resolved or resolved.year != year:
            continue
        pivot.add(txn.effective_category, resolved.month, txn.amount)
    return pivot


def calculate_stats(monthly_totals: Mapping[int, float]) -> Stats:
    """Total, mean and median over the nonzero monthly totals.

    A month that nets to exactly zero counts as a month without activity.
    """
    values = [v for v in monthly_totals.values() if v != 0]
    if not values:
        return Stats(0.0, 0.0, 0.0)

    total = sum(values)
    return Stats(
        total=total,
        mean=total / len(values),
        median=statistics.median(values),
    )


def get_transactions_for_cell(transactions: Iterable[Transaction], category: str,
                              year: int, month: int) -> List[Transaction]:
    """Transactions behind one pivot cell, in their original order."""
    result = []
    for txn in transactions:
        resolved = txn.resolved_date()
        if not resolved or resolved.year != year or resolved.month != month:
            continue
        if txn.effective_category == category:
            result.append(txn)
    return result
