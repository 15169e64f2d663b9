"""Timing-based coordination signals.

Bundlers and sniper bots land many transfers within seconds of each other.
This module measures that clustering over the whole transfer list and
counts receiving wallets that were hit repeatedly in a short span.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Sequence

from bundle_risk_scanner.detector.stats import round_half_up
from bundle_risk_scanner.ingestor.models import TransferRecord

DEFAULT_TIMING_WINDOWS_MS: tuple[int, ...] = (30_000, 60_000, 300_000)
DEFAULT_SUSPICIOUS_GAP_MS = 300_000

# A cluster spanning half of all transfers already saturates the score.
CLUSTER_SCORE_MULTIPLIER = 200

MS_PER_HOUR = 3_600_000


def largest_cluster_size(timestamps: Sequence[int], window_ms: int) -> int:
    """Size of the largest run of sorted timestamps with gaps <= window_ms.

    Runs with a single member are not clusters and count as 0.
    """
    if not timestamps:
        return 0

    largest = 0
    current = 1
    for prev, ts in zip(timestamps, timestamps[1:]):
        if ts - prev <= window_ms:
            current += 1
        else:
            if current > 1:
                largest = max(largest, current)
            current = 1
    if current > 1:
        largest = max(largest, current)
    return largest


def timing_cluster_score(
    transfers: Sequence[TransferRecord],
    *,
    windows_ms: Sequence[int] = DEFAULT_TIMING_WINDOWS_MS,
) -> int:
    """Score 0-100 for how much of the activity falls in one tight burst.

    Timestamps are sorted internally, so the result does not depend on
    input order.
    """
    n = len(transfers)
    if n < 2:
        return 0

    timestamps = sorted(t.timestamp_ms for t in transfers)
    max_cluster = max(largest_cluster_size(timestamps, w) for w in windows_ms)
    return round_half_up(min(100.0, (max_cluster / n) * CLUSTER_SCORE_MULTIPLIER))


def count_suspicious_wallets(
    transfers: Sequence[TransferRecord],
    *,
    gap_ms: int = DEFAULT_SUSPICIOUS_GAP_MS,
) -> int:
    """Count receiving wallets with two consecutive receives closer than gap_ms."""
    wallet_times: dict[str, list[int]] = defaultdict(list)
    for transfer in transfers:
        wallet_times[transfer.to_address].append(transfer.timestamp_ms)

    suspicious = 0
    for times in wallet_times.values():
        if len(times) < 2:
            continue
        ordered = sorted(times)
        if any(b - a < gap_ms for a, b in zip(ordered, ordered[1:])):
            suspicious += 1
    return suspicious


def analysis_period(transfers: Sequence[TransferRecord]) -> str:
    """Human-readable span between the first and last transfer ("3h", "2d")."""
    if not transfers:
        return "0h"

    timestamps = [t.timestamp_ms for t in transfers]
    hours = round_half_up((max(timestamps) - min(timestamps)) / MS_PER_HOUR)
    if hours < 24:
        return f"{hours}h"
    return f"{round_half_up(hours / 24)}d"
