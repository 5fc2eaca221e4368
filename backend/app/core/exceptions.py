"""
Domain errors raised by the service layer.

Each error carries a stable ``kind`` string and the HTTP status code the API
layer translates it to.
"""
from fastapi import status


class ServiceError(Exception):
    """Base exception for service operations."""
    kind = "service_error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Service error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ServiceError):
    """Missing or malformed input."""
    kind = "validation_error"
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    default_message = "Invalid input"


class InvalidInputError(ValidationError):
    kind = "invalid_input"


class NotFoundError(ServiceError):
    """Referenced entity does not exist."""
    kind = "not_found"
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class NoPendingRequestError(NotFoundError):
    kind = "no_pending_request"
    default_message = "No pending friend request"


class ConflictError(ServiceError):
    """Operation conflicts with existing state."""
    kind = "conflict"
    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict"


class InvalidRequestError(ConflictError):
    kind = "invalid_request"
    default_message = "Cannot send a friend request to yourself"


class AlreadyFriendsError(ConflictError):
    kind = "already_friends"
    default_message = "Already friends"


class RequestPendingError(ConflictError):
    kind = "request_pending"
    default_message = "Friend request already pending"


class DuplicateActiveBudgetError(ConflictError):
    kind = "duplicate_active_budget"
    default_message = "Budget already exists for this category"


class ForbiddenError(ServiceError):
    """Caller is not permitted to see or change the resource."""
    kind = "forbidden"
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Access denied"


class NotFriendsError(ForbiddenError):
    kind = "not_friends"
    default_message = "Friendship not approved"


class NotSharedError(ForbiddenError):
    kind = "not_shared"
    default_message = "Friend has not shared this data with you"


class PersistenceError(ServiceError):
    """Storage failure not otherwise classified."""
    kind = "persistence_error"
    default_message = "Database operation failed"
