"""
Synthetic export generator for demos and tests.

Produces tab-separated text in the same shape as a real paste, with the
standard ten-column header.
"""

import random

SAMPLE_HEADER = (
    'Date', 'Merchant', 'Category', 'Account', 'Original Statement',
    'Notes', 'Amount', 'Tags', 'Owner', 'FixedCategory',
)

# (merchant, category, statement text, typical amount)
SAMPLE_MERCHANTS = [
    ('Whole Foods', 'Groceries', 'WHOLEFDS MKT #10234', 85.0),
    ('Trader Joes', 'Groceries', 'TRADER JOE S #552', 60.0),
    ('Starbucks', 'Coffee Shops', 'STARBUCKS STORE 0921', 6.5),
    ('Chipotle', 'Restaurants', 'CHIPOTLE 1187', 14.0),
    ('Shell', 'Gas', 'SHELL OIL 57442', 48.0),
    ('Netflix', 'Subscriptions', 'NETFLIX.COM', 15.49),
    ('Spotify', 'Subscriptions', 'SPOTIFY USA', 11.99),
    ('PG&E', 'Utilities', 'PGANDE WEB ONLINE', 140.0),
    ('Amazon', 'Shopping', 'AMAZON MKTPL*2K4', 42.0),
    ('Target', 'Shopping', 'TARGET 00023', 55.0),
    ('Delta', 'Travel', 'DELTA AIR 0062', 380.0),
    ('CVS', '', 'CVS/PHARMACY #0910', 22.0),
]

SAMPLE_ACCOUNTS = ['Chase Sapphire', 'Amex Gold', 'Checking']
SAMPLE_OWNERS = ['Alex', 'Sam']
SAMPLE_TAGS = ['', '', '', 'reimbursable', 'vacation']
SAMPLE_FIXED = {'Coffee Shops': 'Dining', 'Restaurants': 'Dining'}


def generate_sample_rows(year, rows=60, seed=0, negative_expenses=True):
    """Generate sample rows as lists of cell strings (header not included).

    Expenses are negative by default, matching a typical bank export. About
    one row in ten is a refund with the opposite sign.
    """
    rng = random.Random(seed)
    result = []

    for _ in range(rows):
        merchant, category, statement, typical = rng.choice(SAMPLE_MERCHANTS)
        month = rng.randint(1, 12)
        day = rng.randint(1, 28)
        amount = round(typical * rng.uniform(0.6, 1.4), 2)
        is_refund = rng.random() < 0.1
        if negative_expenses != is_refund:
            amount = -amount

        fixed = SAMPLE_FIXED.get(category, '') if rng.random() < 0.5 else ''
        result.append([
            f"{year:04d}-{month:02d}-{day:02d}",
            merchant,
            category,
            rng.choice(SAMPLE_ACCOUNTS),
            statement,
            'refund' if is_refund else '',
            f"{amount:.2f}",
            rng.choice(SAMPLE_TAGS),
            rng.choice(SAMPLE_OWNERS),
            fixed,
        ])

    result.sort(key=lambda row: row[0])
    return result


def generate_sample_tsv(year, rows=60, seed=0, negative_expenses=True):
    """Generate a complete sample export (header plus rows) as TSV text."""
    lines = ['\t'.join(SAMPLE_HEADER)]
    for row in generate_sample_rows(year, rows=rows, seed=seed, negative_expenses=negative_expenses):
        lines.append('\t'.join(row))
    return '\n'.join(lines) + '\n'
