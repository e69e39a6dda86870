"""Custom exception types for plantir."""


class PlantirError(Exception):
    """Base exception for all recoverable plantir errors."""


class ConfigurationError(PlantirError):
    """Raised when runtime configuration values are missing or invalid."""


class AuthenticationError(PlantirError):
    """Raised when GitHub credentials are unavailable."""


class ApiError(PlantirError):
    """Raised when a GitHub API request fails or returns an unexpected response."""


class IdentityLookupError(ApiError):
    """Raised when the current user's login cannot be determined."""


class FetchError(ApiError):
    """Raised when a search query fails at the transport or API level."""


class ResponseParseError(ApiError):
    """Raised when a request succeeded but its response body could not be parsed."""
