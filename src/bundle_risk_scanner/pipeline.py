"""Token analysis pipeline.

Wires a transfer source to the bundle scorer:

    TransferSource.fetch_transfers -> BundleScorer.analyze -> AnalysisResult

Configuration, including the provider credential, is passed in explicitly.
"""

from __future__ import annotations

import logging

from bundle_risk_scanner.config import Settings
from bundle_risk_scanner.detector.models import AnalysisResult
from bundle_risk_scanner.detector.scorer import BundleScorer, EmptyInputError
from bundle_risk_scanner.ingestor.models import AnalysisPeriod
from bundle_risk_scanner.ingestor.source import TransferSource, TransferSourceError, validate_period

logger = logging.getLogger(__name__)


class AnalysisError(Exception):
    """Raised when a token cannot be analyzed."""


class ConfigurationError(AnalysisError):
    """Raised when required configuration is missing."""


class TokenAnalysisPipeline:
    """Fetches a token's transfers and scores them for bundling risk.

    Example:
        ```python
        settings = get_settings()
        pipeline = TokenAnalysisPipeline(settings, source)
        result = await pipeline.analyze_token("Mint111...", "launch")
        print(result.score, result.insights.risk_level)
        ```
    """

    def __init__(
        self,
        settings: Settings,
        source: TransferSource,
        *,
        scorer: BundleScorer | None = None,
    ) -> None:
        self._settings = settings
        self._source = source
        self._scorer = scorer or BundleScorer(settings.scoring.to_config())

    @property
    def scorer(self) -> BundleScorer:
        return self._scorer

    async def analyze_token(self, token_address: str, period: AnalysisPeriod) -> AnalysisResult:
        """Analyze one token over ``period``.

        Args:
            token_address: Token mint address.
            period: "launch" or "recent"; only affects how much history is fetched.

        Returns:
            The scored AnalysisResult.

        Raises:
            ConfigurationError: If no provider credential is configured.
            ValueError: If ``period`` is not a known period.
            AnalysisError: If fetching fails or no transfers were found.
        """
        try:
            self._settings.validate_requirements()
        except ValueError as e:
            raise ConfigurationError(str(e)) from e
        validate_period(period)

        logger.info("Analyzing %s for %s period", token_address, period)

        try:
            transfers = await self._source.fetch_transfers(token_address, period)
            if not transfers:
                raise EmptyInputError()
            result = self._scorer.analyze(transfers)
        except (TransferSourceError, EmptyInputError) as e:
            logger.error("Analysis failed for %s: %s", token_address, e)
            raise AnalysisError(f"Analysis failed: {e}") from e

        logger.info(
            "Analysis complete: token=%s transfers=%d score=%d level=%s",
            token_address,
            result.details.total_transactions,
            result.score,
            result.insights.risk_level,
        )
        return result
