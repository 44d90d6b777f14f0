"""
Domain exceptions for analytics app.

This module defines domain-specific exceptions that are raised by the
analytics functions. These exceptions represent invalid requests for a
summary, separate from HTTP concerns.

Exception Hierarchy:
    AnalyticsServiceError (base)
    └── InvalidPeriodError

Usage:
    from apps.analytics.exceptions import InvalidPeriodError

    if period not in PeriodType.values:
        raise InvalidPeriodError(f"Invalid period: {period}")
"""


class AnalyticsServiceError(Exception):
    """
    Base exception for all analytics errors.

    All domain-specific exceptions in the analytics app inherit from this
    class, making it easy to catch all analytics errors in views:

        try:
            data = compare_with_previous(trips=..., period='daily', ...)
        except AnalyticsServiceError as e:
            return Response({'error': str(e)}, status=400)
    """

    pass


class InvalidPeriodError(AnalyticsServiceError):
    """
    Raised when a report period type is not weekly, monthly or yearly.

    Example:
        raise InvalidPeriodError(
            "Invalid period: 'daily'. Valid options: weekly, monthly, yearly"
        )
    """

    pass
