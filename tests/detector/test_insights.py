"""Tests for insight generation."""

from __future__ import annotations

import pytest

from bundle_risk_scanner.detector.insights import (
    EXPLANATION_COORDINATED,
    EXPLANATION_MIXED,
    EXPLANATION_ORGANIC,
    INSIGHT_RULES,
    NO_FLAGS_CONCERN,
    NO_FLAGS_RECOMMENDATION,
    generate_insights,
    get_explanation,
    get_risk_level,
)
from bundle_risk_scanner.detector.models import ScoreMetrics


def _metrics(timing: int = 0, wallet: int = 0, size: int = 0, distribution: int = 0) -> ScoreMetrics:
    return ScoreMetrics(
        timing_cluster=timing,
        wallet_similarity=wallet,
        size_patterns=size,
        distribution=distribution,
    )


class TestRiskLevel:
    @pytest.mark.parametrize(
        ("score", "expected"),
        [
            (100, "High Risk"),
            (80, "High Risk"),
            (79, "Medium Risk"),
            (60, "Medium Risk"),
            (59, "Moderate Risk"),
            (40, "Moderate Risk"),
            (39, "Low Risk"),
            (0, "Low Risk"),
        ],
    )
    def test_buckets(self, score: int, expected: str) -> None:
        assert get_risk_level(score) == expected


class TestExplanation:
    @pytest.mark.parametrize(
        ("score", "expected"),
        [
            (70, EXPLANATION_COORDINATED),
            (69, EXPLANATION_MIXED),
            (40, EXPLANATION_MIXED),
            (39, EXPLANATION_ORGANIC),
        ],
    )
    def test_templates(self, score: int, expected: str) -> None:
        assert get_explanation(score) == expected


class TestGenerateInsights:
    def test_fallback_when_nothing_fires(self) -> None:
        insights = generate_insights(10, _metrics(timing=69, wallet=59, size=59, distribution=69))
        assert insights.primary_concerns == (NO_FLAGS_CONCERN,)
        assert insights.recommendations == (NO_FLAGS_RECOMMENDATION,)
        assert insights.risk_level == "Low Risk"
        assert insights.explanation == EXPLANATION_ORGANIC

    def test_thresholds_are_inclusive(self) -> None:
        insights = generate_insights(50, _metrics(timing=70, wallet=60, size=60, distribution=70))
        assert len(insights.primary_concerns) == 4

    def test_rules_keep_table_order_and_pairing(self) -> None:
        insights = generate_insights(95, _metrics(timing=100, wallet=100, size=100, distribution=100))
        assert insights.primary_concerns == tuple(r.concern for r in INSIGHT_RULES)
        assert insights.recommendations == tuple(r.recommendation for r in INSIGHT_RULES)

    def test_single_rule(self) -> None:
        insights = generate_insights(20, _metrics(distribution=89))
        assert insights.primary_concerns == ("High token concentration among few holders",)
        assert insights.recommendations == ("Monitor large holders for potential coordinated selling",)

    def test_subset_preserves_order(self) -> None:
        insights = generate_insights(50, _metrics(timing=90, size=65))
        assert insights.primary_concerns == (
            "High coordination in transaction timing",
            "Automated transaction sizing patterns",
        )
        assert insights.recommendations == (
            "Investigate if transactions came from known bundling services",
            "Verify if similar amounts indicate bot activity",
        )
