"""Domain layer errors.

Services raise these; the HTTP layer maps each kind to a status code.
"""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Input failed a validation rule."""

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message)


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class GhostTargetError(NotFoundError):
    """Like or unlike aimed at a comment that has been deleted."""

    def __init__(self, post_id: str, comment_id: str):
        super().__init__("Comment", f"{post_id}/{comment_id}")
        self.post_id = post_id
        self.comment_id = comment_id


class ConflictError(DomainError):
    """Raised when a record with the same key already exists."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} already exists: {identifier}")


class UnauthorizedError(DomainError):
    """Bad credentials."""

    pass


class ForbiddenError(DomainError):
    """Raised when a user attempts an operation their role does not allow."""

    def __init__(self, action: str, username: str | None):
        self.action = action
        self.username = username
        super().__init__(f"User {username} is not allowed to {action}")


class UnavailableError(DomainError):
    """The store timed out or kept failing after the retry budget."""

    pass
