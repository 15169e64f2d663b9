"""Data models for the detector module."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ScoreMetrics:
    """The four 0-100 sub-scores behind a composite bundling score.

    Attributes:
        timing_cluster: Share of transfers landing in one tight time burst.
        wallet_similarity: Uniformity of per-wallet receive counts.
        size_patterns: Uniformity of transfer amounts.
        distribution: Gini concentration of received volume.
    """

    timing_cluster: int
    wallet_similarity: int
    size_patterns: int
    distribution: int

    def __post_init__(self) -> None:
        for name in ("timing_cluster", "wallet_similarity", "size_patterns", "distribution"):
            value = getattr(self, name)
            if not 0 <= value <= 100:
                raise ValueError(f"{name} must be within 0-100 (got {value})")

    def to_dict(self) -> dict[str, int]:
        return {
            "timingCluster": self.timing_cluster,
            "walletSimilarity": self.wallet_similarity,
            "sizePatterns": self.size_patterns,
            "distribution": self.distribution,
        }


@dataclass(frozen=True)
class AnalysisDetails:
    """Descriptive counts for the analyzed transfer set.

    Attributes:
        total_transactions: Number of transfer records analyzed.
        unique_wallets: Distinct addresses across senders and receivers.
        analysis_period: Span of the transfers, e.g. "3h" or "2d".
        suspicious_wallets: Receivers hit twice within a short gap.
    """

    total_transactions: int
    unique_wallets: int
    analysis_period: str
    suspicious_wallets: int

    def to_dict(self) -> dict[str, object]:
        return {
            "totalTransactions": self.total_transactions,
            "uniqueWallets": self.unique_wallets,
            "analysisPeriod": self.analysis_period,
            "suspiciousWallets": self.suspicious_wallets,
        }


@dataclass(frozen=True)
class AnalysisInsights:
    """Human-readable interpretation of a score.

    ``primary_concerns`` and ``recommendations`` are index-paired.
    """

    risk_level: str
    primary_concerns: tuple[str, ...]
    recommendations: tuple[str, ...]
    explanation: str

    def __post_init__(self) -> None:
        if len(self.primary_concerns) != len(self.recommendations):
            raise ValueError("primary_concerns and recommendations must be the same length")

    def to_dict(self) -> dict[str, object]:
        return {
            "riskLevel": self.risk_level,
            "primaryConcerns": list(self.primary_concerns),
            "recommendations": list(self.recommendations),
            "explanation": self.explanation,
        }


@dataclass(frozen=True)
class AnalysisResult:
    """Complete bundling analysis for one token's transfers.

    Attributes:
        score: Weighted composite of the metrics (0-100).
        metrics: The four sub-scores.
        details: Descriptive counts for the transfer set.
        insights: Risk level, concerns and recommendations.
    """

    score: int
    metrics: ScoreMetrics
    details: AnalysisDetails
    insights: AnalysisInsights

    @property
    def risk_level(self) -> str:
        return self.insights.risk_level

    @property
    def is_high_risk(self) -> bool:
        """Return True if the score reaches the "High Risk" band."""
        return self.score >= 80

    def to_dict(self) -> dict[str, object]:
        """Serialize to the camelCase shape consumed by presentation layers."""
        return {
            "score": self.score,
            "metrics": self.metrics.to_dict(),
            "details": self.details.to_dict(),
            "insights": self.insights.to_dict(),
        }
