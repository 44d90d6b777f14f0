"""
Domain exceptions for exports app.

Exception Hierarchy:
    ExportServiceError (base)
    └── InvalidExportError
"""


class ExportServiceError(Exception):
    """Base exception for export errors."""
    pass


class InvalidExportError(ExportServiceError):
    """
    Raised when an export format or type is not supported.

    Example:
        raise InvalidExportError("Invalid export type: 'pdf'")
    """
    pass
