"""Pytest configuration and fixtures."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from bundle_risk_scanner.ingestor.models import TransferRecord

TransferFactory = Callable[..., TransferRecord]


def make_transfer(
    *,
    ts: int,
    to: str,
    amount: float = 100.0,
    sender: str = "source_wallet",
    signature: str | None = None,
    slot: int = 0,
) -> TransferRecord:
    return TransferRecord(
        signature=signature or f"sig_{to}_{ts}",
        timestamp_ms=ts,
        from_address=sender,
        to_address=to,
        amount=amount,
        slot=slot,
    )


@pytest.fixture
def transfer() -> TransferFactory:
    """Factory for TransferRecord instances."""
    return make_transfer


@pytest.fixture
def sample_token_address() -> str:
    """Sample token mint address for testing."""
    return "So11111111111111111111111111111111111111112"
