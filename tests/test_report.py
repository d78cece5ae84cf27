"""Tests for report module - currency formatting, sorting and rendering."""

import json

import pytest

from spendpivot.aggregator import Pivot
from spendpivot.parser import Transaction
from spendpivot.report import (
    default_sort_direction,
    format_currency,
    format_currency_decimal,
    pivot_to_dict,
    render_pivot_json,
    render_pivot_markdown,
    render_pivot_text,
    render_transactions_text,
    round_half_up,
    sort_transactions,
)


class TestFormatCurrency:
    """Tests for format_currency."""

    def test_whole_units_with_thousands(self):
        """Amounts round to whole units with separators."""
        assert format_currency(1234.4) == '$1,234'
        assert format_currency(0) == '$0'

    def test_negative_sign_before_symbol(self):
        """Negative amounts read -$1,234."""
        assert format_currency(-1234.4) == '-$1,234'

    def test_small_negative_rounds_to_zero(self):
        """A negative amount that rounds to zero has no sign."""
        assert format_currency(-0.4) == '$0'

    def test_halves_round_up(self):
        """Halves round toward positive infinity."""
        assert format_currency(0.5) == '$1'
        assert format_currency(2.5) == '$3'
        assert format_currency(-2.5) == '-$2'
        assert format_currency(-0.5) == '$0'
        assert format_currency(0.49999999999999994) == '$0'

    def test_round_half_up(self):
        """round_half_up returns whole numbers."""
        assert round_half_up(1234.5) == 1235
        assert round_half_up(-1234.6) == -1235
        assert round_half_up(-1234.5) == -1234

    def test_custom_format(self):
        """Custom currency formats are applied."""
        assert format_currency(1500, '{amount} zl') == '1,500 zl'

    def test_decimal(self):
        """Two-decimal formatting keeps cents."""
        assert format_currency_decimal(-12.5) == '-$12.50'
        assert format_currency_decimal(1234.567) == '$1,234.57'


class TestSortTransactions:
    """Tests for sort_transactions."""

    TXNS = [
        Transaction(merchant='beta', amount=5),
        Transaction(merchant='Alpha', amount=20),
        Transaction(merchant='gamma', amount=-3),
    ]

    def test_amount_default_desc(self):
        """Amount sorts largest first by default."""
        result = sort_transactions(self.TXNS, 'amount')
        assert [t.amount for t in result] == [20, 5, -3]

    def test_text_case_insensitive_asc(self):
        """Text columns sort A-Z ignoring case."""
        result = sort_transactions(self.TXNS, 'merchant')
        assert [t.merchant for t in result] == ['Alpha', 'beta', 'gamma']

    def test_explicit_direction(self):
        """An explicit direction overrides the default."""
        result = sort_transactions(self.TXNS, 'amount', 'asc')
        assert [t.amount for t in result] == [-3, 5, 20]

    def test_stable(self):
        """Ties keep their input order in both directions."""
        txns = [Transaction(merchant='x', amount=1, notes=str(i)) for i in range(4)]
        assert [t.notes for t in sort_transactions(txns, 'merchant', 'desc')] == ['0', '1', '2', '3']

    def test_unknown_column(self):
        """Unknown columns raise ValueError."""
        with pytest.raises(ValueError, match='Unknown sort column'):
            sort_transactions(self.TXNS, 'balance')

    def test_unknown_direction(self):
        """Unknown directions raise ValueError."""
        with pytest.raises(ValueError, match='Unknown sort direction'):
            sort_transactions(self.TXNS, 'amount', 'up')

    def test_default_directions(self):
        """Amount defaults to desc, text to asc."""
        assert default_sort_direction('amount') == 'desc'
        assert default_sort_direction('date') == 'asc'


def _sample_pivot():
    pivot = Pivot(2025)
    pivot.add('Groceries', 1, 100)
    pivot.add('Groceries', 2, 200)
    pivot.add('Dining', 2, 50)
    return pivot


class TestRenderPivot:
    """Tests for pivot rendering."""

    def test_text_contains_rows_and_totals(self):
        """Text output has a row per category plus a total row."""
        text = render_pivot_text(_sample_pivot())
        lines = text.splitlines()
        assert lines[0].startswith('Category')
        assert 'Median' in lines[0]
        assert lines[2].startswith('Dining')
        assert lines[3].startswith('Groceries')
        assert lines[4].startswith('Total')
        assert '$350' in lines[4]
        assert '$175' in lines[4]

    def test_text_empty(self):
        """An empty pivot says so."""
        assert '2025' in render_pivot_text(Pivot(2025))

    def test_markdown(self):
        """Markdown output is a table with a bold totals row."""
        md = render_pivot_markdown(_sample_pivot())
        assert '| Category | Jan |' in md
        assert '| Groceries | $100 | $200 |' in md
        assert '**Total**' in md

    def test_dict_and_json(self):
        """The JSON view carries months and stats."""
        data = pivot_to_dict(_sample_pivot())
        assert data['year'] == 2025
        assert list(data['categories']) == ['Dining', 'Groceries']
        assert data['categories']['Groceries']['months'] == {'1': 100, '2': 200}
        assert data['categories']['Groceries']['median'] == 150
        assert data['totals']['total'] == 350
        assert json.loads(render_pivot_json(_sample_pivot())) == data


class TestRenderTransactions:
    """Tests for drill-down rendering."""

    def test_text(self):
        """Each transaction gets a row with a decimal amount."""
        txns = [Transaction(date='2025-01-01', merchant='Cafe', amount=4.5)]
        text = render_transactions_text(txns)
        assert 'Original Statement' in text.splitlines()[0]
        assert 'Cafe' in text
        assert '$4.50' in text

    def test_empty(self):
        """No transactions prints a placeholder."""
        assert render_transactions_text([]) == 'No transactions.'
