"""Exceptions raised while loading content definitions."""


class DataError(Exception):
    """Base exception for the content data layer."""


class DataLoadError(DataError):
    """Raised when a definition file is missing or is not valid JSON."""


class DataValidationError(DataError):
    """Raised when a definition file has the wrong structure or value types."""


class DataReferenceError(DataError):
    """Raised when a definition points at another definition that does not exist."""
