"""Custom exceptions for the dealdesk application."""


class DealDeskException(Exception):
    """Base exception for dealdesk application."""

    pass


class ValidationError(DealDeskException):
    """Raised when input validation fails."""

    pass


class NotFoundError(DealDeskException):
    """Raised when a deal or contact is not found."""

    pass


class InvalidTransitionError(DealDeskException):
    """Raised when a disallowed status change is attempted."""

    pass


class NotAnInvoiceError(DealDeskException):
    """Raised when an invoice-only operation targets a proposal."""

    pass


class NotAProposalError(DealDeskException):
    """Raised when a proposal-only operation targets an invoice."""

    pass


class ConversionError(DealDeskException):
    """Raised when a proposal cannot be converted to an invoice."""

    pass


class ConflictError(DealDeskException):
    """Raised when a deal changed between read and conditional write."""

    pass


class DatabaseError(DealDeskException):
    """Raised when a database operation fails."""

    pass


class ConfigurationError(DealDeskException):
    """Raised when configuration is invalid."""

    pass


class AuthenticationError(DealDeskException):
    """Raised when authentication fails."""

    pass
