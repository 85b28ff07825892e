"""Custom exception classes for the Stablecoin Research Assistant."""


class StablecoinResearchError(Exception):
    """Base exception for all Stablecoin Research Assistant errors."""
    pass


class ConfigurationError(StablecoinResearchError):
    """Raised when config.yaml is missing, unparsable or incomplete."""
    pass


class DataProviderError(StablecoinResearchError):
    """Raised inside an adapter when its upstream call cannot succeed."""
    pass


class RateLimitError(DataProviderError):
    """Raised when a provider answers HTTP 429."""
    pass


class DataNotFoundError(DataProviderError):
    """Raised when a provider answers without usable data."""
    pass


class ValidationError(StablecoinResearchError):
    """Base for errors the user can fix by rephrasing the query."""
    pass


class QueryValidationError(ValidationError):
    """Raised when a user query is rejected before any provider is called."""
    pass


class MissingRequiredSymbolError(ValidationError):
    """Raised when an intent needs a stablecoin symbol and none was found."""
    pass


class ResearchError(StablecoinResearchError):
    """Raised when the composer cannot produce any answer for a query."""
    pass
