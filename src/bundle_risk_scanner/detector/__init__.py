"""Bundling detection layer - coordinated buying heuristics."""

from bundle_risk_scanner.detector.models import (
    AnalysisDetails,
    AnalysisInsights,
    AnalysisResult,
    ScoreMetrics,
)
from bundle_risk_scanner.detector.scorer import (
    BundleScorer,
    EmptyInputError,
    ScoringConfig,
    ScoringError,
    analyze,
)

__all__ = [
    "AnalysisDetails",
    "AnalysisInsights",
    "AnalysisResult",
    "BundleScorer",
    "EmptyInputError",
    "ScoreMetrics",
    "ScoringConfig",
    "ScoringError",
    "analyze",
]
