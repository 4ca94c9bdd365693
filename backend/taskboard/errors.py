from fastapi import status

class BaseAppException(Exception):
    def __init__(self, code: str, message: str, http_status: int):
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)

class NotFoundError(BaseAppException):
    def __init__(self, code: str, message: str):
        super().__init__(code, message, status.HTTP_404_NOT_FOUND)

class ConflictError(BaseAppException):
    def __init__(self, code: str, message: str):
        super().__init__(code, message, status.HTTP_409_CONFLICT)

class ValidationAppError(BaseAppException):
    def __init__(self, code: str, message: str):
        super().__init__(code, message, status.HTTP_400_BAD_REQUEST)

class InternalServerError(BaseAppException):
    def __init__(self, message: str = "internal error", code: str = "INTERNAL_ERROR"):
        super().__init__(code, message, status.HTTP_500_INTERNAL_SERVER_ERROR)


# --- Task domain errors ---

class InvalidArgumentError(ValidationAppError):
    """Malformed identifier, bad title or unknown status value."""

    def __init__(self, message: str):
        super().__init__("INVALID_ARGUMENT", message)

class TaskNotFoundError(NotFoundError):
    def __init__(self, task_id: str):
        self.task_id = task_id
        super().__init__("TASK_NOT_FOUND", f"Task not found: {task_id}")

class InvalidStatusTransitionError(ConflictError):
    def __init__(self, current: str, requested: str):
        self.current = current
        self.requested = requested
        super().__init__(
            "INVALID_STATUS_TRANSITION",
            f"Cannot change task status from {current} to {requested}. A task must pass through in_progress before it can be done.",
        )

class TaskCannotBeDeletedError(ConflictError):
    def __init__(self, current: str):
        self.current = current
        super().__init__("TASK_CANNOT_BE_DELETED", f"Cannot delete a task with status: {current}")

class PersistenceError(InternalServerError):
    """Storage fault raised by a repository or the event store."""

    def __init__(self, message: str = "storage failure"):
        super().__init__(message, code="PERSISTENCE_ERROR")
