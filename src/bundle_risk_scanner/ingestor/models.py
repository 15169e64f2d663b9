"""Data models for the ingestor module."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Literal

# Placeholder address used when the provider omits a sender or receiver.
UNKNOWN_WALLET = "unknown"

AnalysisPeriod = Literal["launch", "recent"]
ANALYSIS_PERIODS: tuple[AnalysisPeriod, ...] = ("launch", "recent")


@dataclass(frozen=True)
class TransferRecord:
    """One token movement between two wallets.

    Records are immutable; scoring only derives aggregates from them.

    Attributes:
        signature: Transaction signature. One transaction may yield several records.
        timestamp_ms: Milliseconds since epoch (may be approximate).
        from_address: Sender wallet, or "unknown".
        to_address: Receiver wallet, or "unknown".
        amount: Raw token units, not normalized by decimals.
        slot: Ledger slot, informational only.
    """

    signature: str
    timestamp_ms: int
    from_address: str
    to_address: str
    amount: float
    slot: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.timestamp_ms, int) or isinstance(self.timestamp_ms, bool):
            raise ValueError(f"timestamp_ms must be an int (got {type(self.timestamp_ms).__name__})")
        if self.timestamp_ms < 0:
            raise ValueError("timestamp_ms must be >= 0")
        if not isinstance(self.amount, (int, float)) or isinstance(self.amount, bool):
            raise ValueError(f"amount must be a number (got {type(self.amount).__name__})")
        try:
            finite = math.isfinite(self.amount)
        except OverflowError:
            finite = False
        if not finite or self.amount < 0:
            raise ValueError(f"amount must be a finite non-negative number (got {self.amount})")
        if self.slot < 0:
            raise ValueError("slot must be >= 0")
        for name in ("from_address", "to_address"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value:
                raise ValueError(f"{name} must be a non-empty string")

    @property
    def has_known_sender(self) -> bool:
        return self.from_address != UNKNOWN_WALLET

    @property
    def has_known_receiver(self) -> bool:
        return self.to_address != UNKNOWN_WALLET

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TransferRecord:
        """Create a TransferRecord from a dictionary.

        Accepts snake_case keys as well as the short ``timestamp``/``from``/``to``
        keys used by transfer exports.
        """
        timestamp = data["timestamp_ms"] if "timestamp_ms" in data else data["timestamp"]
        from_address = data.get("from_address", data.get("from")) or UNKNOWN_WALLET
        to_address = data.get("to_address", data.get("to")) or UNKNOWN_WALLET
        return cls(
            signature=str(data["signature"]),
            timestamp_ms=int(timestamp),
            from_address=str(from_address),
            to_address=str(to_address),
            amount=float(data["amount"]),
            slot=int(data.get("slot") or 0),
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "signature": self.signature,
            "timestamp_ms": self.timestamp_ms,
            "from_address": self.from_address,
            "to_address": self.to_address,
            "amount": self.amount,
            "slot": self.slot,
        }


def transfers_from_enhanced_transaction(
    tx: dict[str, Any] | None,
    mint: str,
    *,
    now_ms: int,
) -> list[TransferRecord]:
    """Extract transfers of ``mint`` from one enhanced transaction payload.

    Failed transactions and empty payloads yield nothing. Only token transfers
    of the requested mint with a positive amount are kept.

    Args:
        tx: Parsed enhanced transaction (``signature``, ``timestamp`` in
            seconds, ``slot``, ``tokenTransfers``, ``transactionError``).
        mint: Token mint address being analyzed.
        now_ms: Timestamp to use when the payload has none.

    Returns:
        Transfer records in payload order.
    """
    if not tx or not isinstance(tx, dict) or tx.get("transactionError"):
        return []

    raw_ts = tx.get("timestamp")
    timestamp_ms = int(raw_ts) * 1000 if raw_ts else now_ms
    signature = str(tx.get("signature", ""))
    slot = int(tx.get("slot") or 0)

    records: list[TransferRecord] = []
    for transfer in tx.get("tokenTransfers") or []:
        if not isinstance(transfer, dict) or transfer.get("mint") != mint:
            continue
        amount = float(transfer.get("tokenAmount") or 0)
        if amount <= 0:
            continue
        records.append(
            TransferRecord(
                signature=signature,
                timestamp_ms=timestamp_ms,
                from_address=transfer.get("fromUserAccount") or UNKNOWN_WALLET,
                to_address=transfer.get("toUserAccount") or UNKNOWN_WALLET,
                amount=amount,
                slot=slot,
            )
        )
    return records
