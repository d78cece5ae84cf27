"""
Sign convention detection for a batch of raw amounts.

Some exports record expenses as positive numbers (typical credit card export),
others as negative numbers (typical bank export). The convention is decided
once for the whole pasted batch by majority vote.
"""

from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True)
class SignSummary:
    """Sign distribution of a batch of amounts."""
    positive_count: int
    negative_count: int
    positive_total: float
    negative_total: float  # as a positive number
    invert: bool

    @property
    def sign_convention(self) -> str:
        return 'expenses_negative' if self.invert else 'expenses_positive'


def summarize_signs(amounts: Iterable[float]) -> SignSummary:
    """Count and total the positive and negative amounts (zeros are ignored)."""
    positive_count = 0
    negative_count = 0
    positive_total = 0.0
    negative_total = 0.0

    for amount in amounts:
        if amount > 0:
            positive_count += 1
            positive_total += amount
        elif amount < 0:
            negative_count += 1
            negative_total += abs(amount)

    return SignSummary(
        positive_count=positive_count,
        negative_count=negative_count,
        positive_total=positive_total,
        negative_total=negative_total,
        invert=negative_count > positive_count,
    )


def should_invert(amounts: Iterable[float]) -> bool:
    """Return True if the batch's amounts must be sign-inverted.

    Inverts only when negatives strictly outnumber positives; a tie or an
    empty batch keeps the amounts as they are.
    """
    return summarize_signs(amounts).invert
