class StargazeError(Exception):
    """Base exception for Stargaze errors."""


class ConfigurationError(StargazeError):
    """Raised for missing credentials or invalid site/window settings."""


class UpstreamRequestError(StargazeError):
    """Raised when an upstream data service fails or is unreachable."""


class MalformedResponseError(UpstreamRequestError):
    """Raised when an upstream response does not have the expected shape."""
