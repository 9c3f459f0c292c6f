"""
Field Service Portal Exceptions

Custom exception classes for the call lifecycle, data access and
configuration layers.
"""

from typing import Optional


class FieldServicePortalError(Exception):
    """Base exception for portal errors"""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class ConfigurationError(FieldServicePortalError):
    """Exception for missing or invalid settings"""
    pass


class DataAccessError(FieldServicePortalError):
    """Base exception for backing store errors"""
    pass


class FetchError(DataAccessError):
    """Exception for failed reads of service calls or expenses"""
    pass


class ServiceCallUpdateError(DataAccessError):
    """Exception for a status update the backing store did not apply"""

    def __init__(self, call_id: str, message: str, cause: Optional[BaseException] = None):
        super().__init__(message, cause)
        self.call_id = call_id


class AuthSessionError(DataAccessError):
    """Exception for a missing or unreadable authentication session"""
    pass


class InvalidTransitionError(FieldServicePortalError):
    """Exception for a status change the lifecycle does not allow"""

    def __init__(self, current_status: str, requested_status: str):
        super().__init__(
            f"Cannot move service call from '{current_status}' to '{requested_status}'"
        )
        self.current_status = current_status
        self.requested_status = requested_status


class ServiceCallNotFoundError(FieldServicePortalError):
    """Exception for a call id missing from the current snapshot"""

    def __init__(self, call_id: str):
        super().__init__(f"Service call {call_id} is not in the current snapshot")
        self.call_id = call_id
