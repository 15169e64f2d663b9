"""Transfer size signal.

Bots usually buy with preset amounts, so near-identical transfer sizes push
the score up.
"""

from __future__ import annotations

from collections.abc import Sequence

from bundle_risk_scanner.detector.stats import coefficient_of_variation, round_half_up
from bundle_risk_scanner.ingestor.models import TransferRecord

CV_PENALTY = 100


def size_pattern_score(transfers: Sequence[TransferRecord]) -> int:
    if len(transfers) < 2:
        return 0

    cv = coefficient_of_variation(t.amount for t in transfers)
    return round_half_up(max(0.0, 100.0 - cv * CV_PENALTY))
