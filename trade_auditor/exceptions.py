class TradeAuditorError(Exception):
    """Base class for pipeline errors surfaced to the caller."""


class RowNormalizationError(TradeAuditorError):
    """A single raw row could not be converted. Recovered by the normalizer."""

    def __init__(self, message: str, field: str = None):
        super().__init__(message)
        self.field = field


class EmptyDatasetError(TradeAuditorError):
    """Nothing usable is left to analyze."""

    def __init__(self, message: str = "No valid data after processing"):
        super().__init__(message)


class SourceParseError(TradeAuditorError):
    """The delimited source could not be read."""
