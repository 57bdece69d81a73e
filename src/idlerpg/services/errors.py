"""Service-layer exceptions."""


class FactoryError(Exception):
    """Raised when a generator is asked for content that is not defined."""
