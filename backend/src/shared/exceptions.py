class AppError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str = "An error occurred"):
        self.message = message
        super().__init__(self.message)


class NotFoundError(AppError):
    """Raised when a requested resource does not exist."""

    def __init__(self, resource: str = "Resource", id: str = ""):
        super().__init__(f"{resource} not found: {id}" if id else f"{resource} not found")


class InvalidOperationError(AppError):
    """Raised when an action is not allowed in the current state (never retried)."""

    def __init__(self, message: str = "Operation not allowed"):
        super().__init__(message)


class ConflictError(AppError):
    """Raises on optimistic locking conflicts (stale version)."""

    def __init__(self, message: str = "Resource was modified by another user"):
        super().__init__(message)


class ConcurrentModificationError(ConflictError):
    """Raised when a revert keeps losing the optimistic-concurrency race.

    Callers should re-fetch the version list and retry.
    """

    def __init__(self, message: str = "Document history changed while reverting, re-fetch and retry"):
        super().__init__(message)


class RevertApplyError(AppError):
    """Raised when the live document write of a revert fails.

    The pre-revert checkpoint has already been committed and stays in history.
    """

    def __init__(self, checkpoint, target_version_number: int, reason: str = ""):
        self.checkpoint = checkpoint
        self.target_version_number = target_version_number
        message = (
            f"Checkpoint v{checkpoint.version_number} saved, but applying "
            f"version {target_version_number} to the document failed"
        )
        super().__init__(f"{message}: {reason}" if reason else message)


class AuthenticationError(AppError):
    """Raised when credentials are invalid."""

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)


class AuthorizationError(AppError):
    """Raised when a user lacks permission for an action."""

    def __init__(self, message: str = "Permission denied"):
        super().__init__(message)
