"""Narrative insights for a scored transfer set.

Concerns and recommendations come from a fixed, ordered rule table so the
same metrics always produce the same text in the same order.
"""

from __future__ import annotations

from dataclasses import dataclass

from bundle_risk_scanner.detector.models import AnalysisInsights, ScoreMetrics

# Risk level thresholds
HIGH_RISK_THRESHOLD = 80
MEDIUM_RISK_THRESHOLD = 60
MODERATE_RISK_THRESHOLD = 40

# Explanation thresholds
COORDINATED_EXPLANATION_THRESHOLD = 70
MIXED_EXPLANATION_THRESHOLD = 40

EXPLANATION_COORDINATED = (
    "Multiple indicators suggest coordinated buying activity. This could indicate "
    "bundled transactions, bot activity, or market manipulation."
)
EXPLANATION_MIXED = (
    "Some patterns suggest possible coordination, but could also be normal market "
    "behavior during high activity periods."
)
EXPLANATION_ORGANIC = "Transaction patterns appear mostly organic with natural distribution and timing."

NO_FLAGS_CONCERN = "No major red flags detected"
NO_FLAGS_RECOMMENDATION = "Continue monitoring for any changes in trading patterns"


@dataclass(frozen=True)
class InsightRule:
    metric: str
    threshold: int
    concern: str
    recommendation: str

    def applies(self, metrics: ScoreMetrics) -> bool:
        value: int = getattr(metrics, self.metric)
        return value >= self.threshold


INSIGHT_RULES: tuple[InsightRule, ...] = (
    InsightRule(
        metric="timing_cluster",
        threshold=70,
        concern="High coordination in transaction timing",
        recommendation="Investigate if transactions came from known bundling services",
    ),
    InsightRule(
        metric="wallet_similarity",
        threshold=60,
        concern="Similar wallet behavior patterns detected",
        recommendation="Check if suspicious wallets share funding sources or creation dates",
    ),
    InsightRule(
        metric="size_patterns",
        threshold=60,
        concern="Automated transaction sizing patterns",
        recommendation="Verify if similar amounts indicate bot activity",
    ),
    InsightRule(
        metric="distribution",
        threshold=70,
        concern="High token concentration among few holders",
        recommendation="Monitor large holders for potential coordinated selling",
    ),
)


def get_risk_level(score: int) -> str:
    """Get human-readable risk level from a composite score."""
    if score >= HIGH_RISK_THRESHOLD:
        return "High Risk"
    if score >= MEDIUM_RISK_THRESHOLD:
        return "Medium Risk"
    if score >= MODERATE_RISK_THRESHOLD:
        return "Moderate Risk"
    return "Low Risk"


def get_explanation(score: int) -> str:
    if score >= COORDINATED_EXPLANATION_THRESHOLD:
        return EXPLANATION_COORDINATED
    if score >= MIXED_EXPLANATION_THRESHOLD:
        return EXPLANATION_MIXED
    return EXPLANATION_ORGANIC


def generate_insights(score: int, metrics: ScoreMetrics) -> AnalysisInsights:
    """Build the risk level, paired concerns/recommendations and explanation."""
    fired = [rule for rule in INSIGHT_RULES if rule.applies(metrics)]
    if fired:
        concerns = tuple(rule.concern for rule in fired)
        recommendations = tuple(rule.recommendation for rule in fired)
    else:
        concerns = (NO_FLAGS_CONCERN,)
        recommendations = (NO_FLAGS_RECOMMENDATION,)

    return AnalysisInsights(
        risk_level=get_risk_level(score),
        primary_concerns=concerns,
        recommendations=recommendations,
        explanation=get_explanation(score),
    )
