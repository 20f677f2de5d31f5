class ConfigError(Exception):
    """Raised when config loading or validation fails."""


class SearchError(Exception):
    """Base class for failures surfaced by a search call."""


class ValidationError(SearchError):
    """Raised when caller input cannot be normalized into a search request."""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class StoreUnavailable(SearchError):
    """Raised when the data store cannot be reached or times out."""


class StoreQueryError(SearchError):
    """Raised when the data store rejects the query."""
