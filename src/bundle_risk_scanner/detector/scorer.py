"""Composite bundling scorer combining all sub-scores.

This module provides the BundleScorer class that runs every sub-score over
a token's transfers and folds them into a single weighted risk score with
descriptive details and insights.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType

from bundle_risk_scanner.detector.distribution import distribution_score
from bundle_risk_scanner.detector.insights import generate_insights
from bundle_risk_scanner.detector.models import AnalysisDetails, AnalysisResult, ScoreMetrics
from bundle_risk_scanner.detector.size_pattern import size_pattern_score
from bundle_risk_scanner.detector.stats import clamp_score, round_half_up
from bundle_risk_scanner.detector.timing import (
    DEFAULT_SUSPICIOUS_GAP_MS,
    DEFAULT_TIMING_WINDOWS_MS,
    analysis_period,
    count_suspicious_wallets,
    timing_cluster_score,
)
from bundle_risk_scanner.detector.wallet_similarity import wallet_similarity_score
from bundle_risk_scanner.ingestor.models import TransferRecord

logger = logging.getLogger(__name__)

# Default weights for each sub-score
DEFAULT_WEIGHTS: Mapping[str, float] = MappingProxyType(
    {
        "timing_cluster": 0.4,
        "wallet_similarity": 0.3,
        "size_patterns": 0.2,
        "distribution": 0.1,
    }
)


class ScoringError(Exception):
    """Base exception for scoring errors."""


class EmptyInputError(ScoringError):
    """Raised when there are no transfers to score."""

    def __init__(self, message: str = "No transactions found for this token") -> None:
        super().__init__(message)


@dataclass(frozen=True)
class ScoringConfig:
    weights: Mapping[str, float] = field(default_factory=lambda: dict(DEFAULT_WEIGHTS))
    timing_windows_ms: tuple[int, ...] = DEFAULT_TIMING_WINDOWS_MS
    suspicious_gap_ms: int = DEFAULT_SUSPICIOUS_GAP_MS

    def __post_init__(self) -> None:
        missing = set(DEFAULT_WEIGHTS) - set(self.weights)
        if missing:
            raise ValueError(f"Missing scoring weights: {', '.join(sorted(missing))}")
        if any(w < 0 for w in self.weights.values()):
            raise ValueError("Scoring weights must be non-negative")
        if not self.timing_windows_ms:
            raise ValueError("At least one timing window is required")


class BundleScorer:
    """Stateless scorer turning a token's transfers into an AnalysisResult.

    The scorer:
    - Runs the timing, wallet, size and distribution sub-scores
    - Combines them with configurable weights
    - Counts suspicious wallets and renders the analysis period
    - Generates index-paired concerns and recommendations

    Scoring Formula:
        score = round(0.4 * timing + 0.3 * wallet + 0.2 * size + 0.1 * distribution)

    The weighted sum is computed in Decimal so that a composite sitting on a
    .5 boundary always rounds up.

    Example:
        ```python
        scorer = BundleScorer()
        result = scorer.analyze(transfers)
        if result.is_high_risk:
            print(result.insights.primary_concerns)
        ```
    """

    def __init__(self, config: ScoringConfig | None = None) -> None:
        self._cfg = config or ScoringConfig()

    def analyze(self, transfers: Sequence[TransferRecord]) -> AnalysisResult:
        """Score a non-empty collection of transfers.

        Args:
            transfers: Transfer records for one token. Never mutated.

        Returns:
            AnalysisResult with composite score, metrics, details and insights.

        Raises:
            EmptyInputError: If ``transfers`` is empty.
        """
        if not transfers:
            raise EmptyInputError()

        for transfer in transfers:
            if not isinstance(transfer, TransferRecord):
                raise TypeError(f"Expected TransferRecord, got {type(transfer).__name__}")

        metrics = self.calculate_metrics(transfers)
        score = self.calculate_weighted_score(metrics)

        unique_wallets = {t.from_address for t in transfers} | {t.to_address for t in transfers}
        details = AnalysisDetails(
            total_transactions=len(transfers),
            unique_wallets=len(unique_wallets),
            analysis_period=analysis_period(transfers),
            suspicious_wallets=count_suspicious_wallets(transfers, gap_ms=self._cfg.suspicious_gap_ms),
        )

        logger.debug(
            "Bundle analysis: transfers=%d wallets=%d score=%d timing=%d wallet=%d size=%d distribution=%d",
            details.total_transactions,
            details.unique_wallets,
            score,
            metrics.timing_cluster,
            metrics.wallet_similarity,
            metrics.size_patterns,
            metrics.distribution,
        )

        return AnalysisResult(
            score=score,
            metrics=metrics,
            details=details,
            insights=generate_insights(score, metrics),
        )

    def calculate_metrics(self, transfers: Sequence[TransferRecord]) -> ScoreMetrics:
        return ScoreMetrics(
            timing_cluster=timing_cluster_score(transfers, windows_ms=self._cfg.timing_windows_ms),
            wallet_similarity=wallet_similarity_score(transfers),
            size_patterns=size_pattern_score(transfers),
            distribution=distribution_score(transfers),
        )

    def calculate_weighted_score(self, metrics: ScoreMetrics) -> int:
        """Combine sub-scores into the composite score.

        Args:
            metrics: The four sub-scores.

        Returns:
            Composite score, clamped to 0-100.
        """
        weights = self._cfg.weights
        total = (
            Decimal(str(weights["timing_cluster"])) * metrics.timing_cluster
            + Decimal(str(weights["wallet_similarity"])) * metrics.wallet_similarity
            + Decimal(str(weights["size_patterns"])) * metrics.size_patterns
            + Decimal(str(weights["distribution"])) * metrics.distribution
        )
        return clamp_score(round_half_up(total))

    def get_weights(self) -> dict[str, float]:
        """Get current sub-score weights.

        Returns:
            Copy of the weights dictionary.
        """
        return dict(self._cfg.weights)


_DEFAULT_SCORER = BundleScorer()


def analyze(transfers: Sequence[TransferRecord]) -> AnalysisResult:
    """Score transfers with the default weights and windows."""
    return _DEFAULT_SCORER.analyze(transfers)
