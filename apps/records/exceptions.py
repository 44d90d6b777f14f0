"""
Domain exceptions for records app.

Services never raise for a missing id: lookups return None and mutations
report "nothing happened". Views turn that into RecordNotFoundError.
"""
from rest_framework.exceptions import APIException


class RecordsServiceError(Exception):
    """Base exception for record service errors."""
    pass


class InvalidRecordFieldError(RecordsServiceError):
    """Raised when an update names a field the record type does not have."""
    pass


class RecordNotFoundError(APIException):
    """Record not found."""
    status_code = 404
    default_detail = 'Record not found.'
    default_code = 'record_not_found'


class NoTrucksError(APIException):
    """No truck has been registered yet."""
    status_code = 404
    default_detail = 'No trucks registered.'
    default_code = 'no_trucks'
