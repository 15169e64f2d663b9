"""Transfer ingestion layer - input records and the transfer source interface."""

from bundle_risk_scanner.ingestor.models import (
    UNKNOWN_WALLET,
    AnalysisPeriod,
    TransferRecord,
    transfers_from_enhanced_transaction,
)
from bundle_risk_scanner.ingestor.source import (
    EnhancedTransactionSource,
    StaticTransferSource,
    TransferSource,
    TransferSourceError,
    signature_limit,
)

__all__ = [
    "UNKNOWN_WALLET",
    "AnalysisPeriod",
    "EnhancedTransactionSource",
    "StaticTransferSource",
    "TransferRecord",
    "TransferSource",
    "TransferSourceError",
    "signature_limit",
    "transfers_from_enhanced_transaction",
]
