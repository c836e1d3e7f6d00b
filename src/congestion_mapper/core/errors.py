"""Exception types raised by congestion-mapper."""


class CongestionMapperError(Exception):
    """Base class for all congestion-mapper errors."""


class DataError(CongestionMapperError):
    """Dataset or metric column is unusable."""


class ConfigurationError(CongestionMapperError):
    """Invalid color scale, credential or configuration value."""


class LookupFailure(CongestionMapperError):
    """A road tile-query request failed (network error, non-2xx, bad payload)."""

    def __init__(self, message: str, status_code=None, status_text=None):
        super().__init__(message)
        self.status_code = status_code
        self.status_text = status_text
