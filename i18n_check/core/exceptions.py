"""
Custom exceptions for i18n-check.
"""

class I18nCheckError(Exception):
    """Base exception for i18n-check."""
    pass

class ParseError(I18nCheckError):
    """Raised when a structural parse anomaly is found in a buffer."""

    def __init__(self, message: str, position: int = -1):
        super().__init__(message)
        self.position = position

class PatternError(I18nCheckError):
    """Raised when a caller-supplied regular expression cannot be compiled."""

    def __init__(self, pattern: str, message: str):
        super().__init__(f"{pattern}: {message}")
        self.pattern = pattern

class CatalogError(I18nCheckError):
    """Raised when a catalog entry is structurally invalid."""
    pass

class ConfigError(I18nCheckError):
    """Raised when configuration-related errors occur."""
    pass

class EncodingError(I18nCheckError):
    """Raised when a file cannot be read or decoded."""
    pass
