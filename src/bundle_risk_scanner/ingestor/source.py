"""Transfer source interface and retrieval policy.

The scoring engine does not care how transfers were fetched. Anything that
can produce a list of TransferRecord for a token and period satisfies
TransferSource. Live provider clients live outside this package; the
sources here serve in-memory records or captured provider payloads.
"""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Callable, Iterable, Mapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from bundle_risk_scanner.ingestor.models import (
    ANALYSIS_PERIODS,
    AnalysisPeriod,
    TransferRecord,
    transfers_from_enhanced_transaction,
)

if TYPE_CHECKING:
    from bundle_risk_scanner.config import FetchSettings

logger = logging.getLogger(__name__)


class TransferSourceError(Exception):
    """Raised when a transfer source cannot produce transfers."""


@runtime_checkable
class TransferSource(Protocol):
    async def fetch_transfers(self, token_address: str, period: AnalysisPeriod) -> list[TransferRecord]:
        """Return the token's transfers for ``period``, possibly empty.

        Raises:
            TransferSourceError: If the provider request fails.
        """
        ...


def validate_period(period: str) -> AnalysisPeriod:
    if period not in ANALYSIS_PERIODS:
        raise ValueError(f"period must be one of {', '.join(ANALYSIS_PERIODS)} (got {period!r})")
    return period  # type: ignore[return-value]


def signature_limit(period: AnalysisPeriod, fetch: FetchSettings) -> int:
    """Number of signatures a source should request for ``period``."""
    if validate_period(period) == "recent":
        return fetch.recent_signature_limit
    return fetch.launch_signature_limit


def _now_ms() -> int:
    return int(time.time() * 1000)


class StaticTransferSource:
    """In-memory transfer source keyed by token address.

    Example:
        ```python
        source = StaticTransferSource({"Mint111": transfers})
        records = await source.fetch_transfers("Mint111", "launch")
        ```
    """

    def __init__(self, transfers: Mapping[str, Iterable[TransferRecord]] | None = None) -> None:
        self._transfers: dict[str, tuple[TransferRecord, ...]] = {
            token: tuple(records) for token, records in (transfers or {}).items()
        }

    def add(self, token_address: str, records: Iterable[TransferRecord]) -> None:
        self._transfers[token_address] = self._transfers.get(token_address, ()) + tuple(records)

    async def fetch_transfers(self, token_address: str, period: AnalysisPeriod) -> list[TransferRecord]:
        validate_period(period)
        records = list(self._transfers.get(token_address, ()))
        logger.debug("Static source: token=%s period=%s transfers=%d", token_address, period, len(records))
        return records


class EnhancedTransactionSource:
    """Transfer source replaying captured enhanced-transaction payloads.

    Payloads are held per mint, newest first, which is the order the
    provider lists signatures in. A fetch keeps the period's signature
    window, expands at most ``max_signatures`` of those payloads and parses
    each one with transfers_from_enhanced_transaction.

    Example:
        ```python
        source = EnhancedTransactionSource(settings.fetch)
        source.load_file("Mint111", Path("captures/mint111.json"))
        records = await source.fetch_transfers("Mint111", "recent")
        ```
    """

    def __init__(
        self,
        fetch: FetchSettings,
        payloads: Mapping[str, Sequence[dict[str, Any] | None]] | None = None,
        *,
        clock_ms: Callable[[], int] = _now_ms,
    ) -> None:
        self._fetch = fetch
        self._clock_ms = clock_ms
        self._payloads: dict[str, list[dict[str, Any] | None]] = {
            mint: list(txs) for mint, txs in (payloads or {}).items()
        }

    def add(self, mint: str, payloads: Iterable[dict[str, Any] | None]) -> None:
        """Append older payloads for ``mint``."""
        self._payloads.setdefault(mint, []).extend(payloads)

    def load_file(self, mint: str, path: Path) -> int:
        """Append the JSON array of payloads stored at ``path``.

        Returns:
            Number of payloads loaded.

        Raises:
            TransferSourceError: If the file is unreadable or not a JSON array.
        """
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise TransferSourceError(f"Cannot read payloads from {path}: {e}") from e
        if not isinstance(data, list):
            raise TransferSourceError(f"Expected a JSON array of transactions in {path}")
        self.add(mint, data)
        logger.info("Loaded %d payloads for %s from %s", len(data), mint, path)
        return len(data)

    async def fetch_transfers(self, token_address: str, period: AnalysisPeriod) -> list[TransferRecord]:
        limit = min(signature_limit(period, self._fetch), self._fetch.max_signatures)
        window = self._payloads.get(token_address, [])[:limit]
        now_ms = self._clock_ms()

        records: list[TransferRecord] = []
        for tx in window:
            records.extend(transfers_from_enhanced_transaction(tx, token_address, now_ms=now_ms))

        logger.debug(
            "Replay source: token=%s period=%s payloads=%d transfers=%d",
            token_address,
            period,
            len(window),
            len(records),
        )
        return records
