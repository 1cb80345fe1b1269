"""
Custom exceptions for the application.
Following domain-driven design principles with specific exception types.
"""


class BaseApplicationException(Exception):
    """Base exception for all application-specific exceptions"""
    default_message = "An application error occurred"
    default_code = "APPLICATION_ERROR"

    def __init__(self, message=None, code=None, details=None):
        self.message = message or self.default_message
        self.code = code or self.default_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(BaseApplicationException):
    """Raised when validation fails"""
    default_message = "Validation failed"
    default_code = "VALIDATION_ERROR"


class PermissionDeniedError(BaseApplicationException):
    """Raised when user doesn't have permission"""
    default_message = "Permission denied. You may not have access to view audit logs."
    default_code = "PERMISSION_DENIED"


class RecordStoreError(BaseApplicationException):
    """Raised when the change-record store cannot be read"""
    default_message = "Failed to load audit logs"
    default_code = "RECORD_STORE_ERROR"


class RecordStoreMissingError(RecordStoreError):
    """Raised when the change-record table does not exist yet"""
    default_message = "Audit logs table not found. Please run the database migration first."
    default_code = "RECORD_STORE_MISSING"


class LookupFetchError(BaseApplicationException):
    """Raised by a lookup source when one batched read fails"""
    default_message = "Lookup fetch failed"
    default_code = "LOOKUP_FETCH_FAILED"

    def __init__(self, kind=None, **kwargs):
        self.kind = kind
        super().__init__(**kwargs)
