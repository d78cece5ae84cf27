"""
Header-driven column detection for pasted exports.

Maps a header row onto the ten transaction fields using a synonym table.
Matching is exact (case-insensitive, trimmed) and each header column can be
claimed by at most one field, so the result is deterministic for any column
order.
"""

from dataclasses import dataclass
from typing import FrozenSet, List, Optional, Sequence, Tuple

ABSENT = -1

OVERRIDE_FIELD = 'fixed_category'

# Matching order. The override field goes last so that any "fixed ..." header
# has already been claimed through a base field's prefixed synonyms.
FIELD_ORDER = (
    'date',
    'merchant',
    'category',
    'account',
    'original_statement',
    'notes',
    'amount',
    'tags',
    'owner',
    OVERRIDE_FIELD,
)

# Priority-ordered accepted spellings per field (lowercase).
SYNONYMS = {
    'date': ['date', 'posted date', 'transaction date', 'trans date',
             'posting date', 'post date', 'booking date'],
    'merchant': ['merchant', 'merchant name', 'payee', 'description',
                 'name', 'vendor'],
    'category': ['category', 'category name', 'spending category'],
    'account': ['account', 'account name', 'account number', 'card', 'source'],
    'original_statement': ['original statement', 'originalstatement',
                           'original description', 'statement description',
                           'statement', 'appears on your statement as'],
    'notes': ['notes', 'note', 'memo', 'comments', 'comment'],
    'amount': ['amount', 'transaction amount', 'value', 'amt'],
    'tags': ['tags', 'tag', 'labels', 'label'],
    'owner': ['owner', 'card member', 'cardholder', 'member', 'person'],
    OVERRIDE_FIELD: ['fixedcategory', 'fixed category', 'fixed_category',
                     'override category', 'category override'],
}

FIXED_PREFIXES = ('fixed ', 'fixed')


@dataclass(frozen=True)
class ColumnMapping:
    """Zero-based column index per transaction field, ABSENT when missing."""
    date: int = ABSENT
    merchant: int = ABSENT
    category: int = ABSENT
    account: int = ABSENT
    original_statement: int = ABSENT
    notes: int = ABSENT
    amount: int = ABSENT
    tags: int = ABSENT
    owner: int = ABSENT
    fixed_category: int = ABSENT
    # (field, index) pairs in the order the headers were claimed
    claim_order: Tuple[Tuple[str, int], ...] = ()

    def index_of(self, field_name: str) -> int:
        return getattr(self, field_name)

    def is_mapped(self, field_name: str) -> bool:
        return self.index_of(field_name) != ABSENT

    def as_dict(self) -> dict:
        return {name: self.index_of(name) for name in FIELD_ORDER}


def _normalize_header(header: str) -> str:
    # Spreadsheet exports may lead with a byte-order mark
    return header.replace('\ufeff', '').strip().lower()


def find_header(
    headers: Sequence[str],
    candidates: Sequence[str],
    claimed: FrozenSet[int],
) -> Tuple[int, FrozenSet[int]]:
    """Find the first unclaimed header matching a candidate spelling.

    Candidates are tried in priority order; for each candidate the headers are
    scanned left to right.

    Returns:
        (index, claimed) where index is ABSENT when nothing matched and
        claimed is the claimed set including the new index
    """
    normalized = [_normalize_header(h) for h in headers]
    for candidate in candidates:
        for idx, header in enumerate(normalized):
            if idx in claimed:
                continue
            if header == candidate:
                return idx, claimed | {idx}
    return ABSENT, claimed


def _fixed_variants(synonyms: Sequence[str]) -> List[str]:
    return [prefix + syn for syn in synonyms for prefix in FIXED_PREFIXES]


def map_columns(headers: Sequence[str]) -> ColumnMapping:
    """Map a header row to a ColumnMapping.

    For each field in FIELD_ORDER (except the override field) the "fixed"
    variants of its synonyms are tried first, and a hit is recorded as the
    override field. Then the field's own synonyms are tried. Unmatched fields
    stay ABSENT and unmatched headers are ignored.

    Args:
        headers: Header cells from the first line of the export

    Returns:
        ColumnMapping for this header row
    """
    claimed: FrozenSet[int] = frozenset()
    found = {}
    claims = []

    for field_name in FIELD_ORDER:
        if field_name != OVERRIDE_FIELD and OVERRIDE_FIELD not in found:
            idx, claimed = find_header(headers, _fixed_variants(SYNONYMS[field_name]), claimed)
            if idx != ABSENT:
                found[OVERRIDE_FIELD] = idx
                claims.append((OVERRIDE_FIELD, idx))

        if field_name in found:
            continue
        idx, claimed = find_header(headers, SYNONYMS[field_name], claimed)
        if idx != ABSENT:
            found[field_name] = idx
            claims.append((field_name, idx))

    return ColumnMapping(claim_order=tuple(claims), **found)


def unmapped_headers(headers: Sequence[str], mapping: ColumnMapping) -> List[str]:
    """Return the headers no field claimed, in column order."""
    used = {idx for _, idx in mapping.claim_order}
    return [h for idx, h in enumerate(headers) if idx not in used]


def describe_mapping(headers: Sequence[str], mapping: ColumnMapping) -> List[Tuple[str, Optional[str]]]:
    """Pair each field with the header text it was mapped to (None if absent)."""
    result = []
    for field_name in FIELD_ORDER:
        idx = mapping.index_of(field_name)
        result.append((field_name, headers[idx].strip() if idx != ABSENT else None))
    return result
