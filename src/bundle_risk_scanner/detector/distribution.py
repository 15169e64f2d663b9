"""Holder concentration signal based on the Gini coefficient."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Sequence

from bundle_risk_scanner.detector.stats import gini, round_half_up
from bundle_risk_scanner.ingestor.models import TransferRecord


def received_totals(transfers: Sequence[TransferRecord]) -> dict[str, float]:
    """Total amount received per wallet."""
    totals: dict[str, float] = defaultdict(float)
    for transfer in transfers:
        totals[transfer.to_address] += transfer.amount
    return dict(totals)


def distribution_score(transfers: Sequence[TransferRecord]) -> int:
    """Score 0-100 where higher means fewer wallets received most of the volume.

    Fewer than two receiving wallets, or no volume at all, scores 0.
    """
    totals = list(received_totals(transfers).values())
    if len(totals) < 2 or sum(totals) == 0:
        return 0
    return round_half_up(gini(totals) * 100)
