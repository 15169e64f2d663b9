"""Wallet similarity signal.

Scripted distribution tends to hand every receiving wallet the same number
of transfers. Low variation in per-wallet counts means high suspicion.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence

from bundle_risk_scanner.detector.stats import coefficient_of_variation, round_half_up
from bundle_risk_scanner.ingestor.models import TransferRecord

CV_PENALTY = 50


def receive_counts(transfers: Sequence[TransferRecord]) -> dict[str, int]:
    """Number of transfers received per wallet."""
    return dict(Counter(t.to_address for t in transfers))


def wallet_similarity_score(transfers: Sequence[TransferRecord]) -> int:
    cv = coefficient_of_variation(receive_counts(transfers).values())
    return round_half_up(max(0.0, 100.0 - cv * CV_PENALTY))
