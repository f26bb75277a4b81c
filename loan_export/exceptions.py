"""Custom exception hierarchy for loan-export."""


class LoanExportError(Exception):
    """Base exception for all loan-export errors."""


class UnsupportedExportError(LoanExportError):
    """Raised when an export type or format is not recognised."""


class ConfigurationError(LoanExportError):
    """Raised when configuration is invalid or missing."""


class LoanSourceError(LoanExportError):
    """Raised when a loan source cannot deliver a loan aggregate."""


class LoanNotFoundError(LoanSourceError):
    """Raised when the requested loan does not exist in the source."""
