"""Domain errors raised by the service layer.

Routes translate these to HTTP status codes. The same error can map to
different codes on different routes (a non-member is 406 on list routes
and task creation, 403 on task status updates).
"""


class ServiceError(Exception):
    """Base class for expected, client-caused failures."""


class NotFoundError(ServiceError):
    """A referenced user, list, or task does not exist."""


class ConflictError(ServiceError):
    """A unique value (login) is already taken."""


class WrongPasswordError(ServiceError):
    """Password does not match the stored hash."""


class NotMemberError(ServiceError):
    """The requester is not a subscriber of the list."""


class NotAuthorError(ServiceError):
    """The requester did not create the task."""


class AlreadySubscribedError(ServiceError):
    """The target user is already a subscriber of the list."""
