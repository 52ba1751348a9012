"""Error taxonomy shared by the transaction services."""
from __future__ import annotations


class TransactionInsightsError(RuntimeError):
    """Base class for transaction insight service errors."""


class UpstreamFetchError(TransactionInsightsError):
    """Raised when the remote transaction source is unreachable or answers with a failure."""


class DataFormatError(TransactionInsightsError):
    """Raised when a transaction record does not have the expected shape."""


__all__ = ["DataFormatError", "TransactionInsightsError", "UpstreamFetchError"]
