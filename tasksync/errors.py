"""Error taxonomy shared by the query service and the task list view."""

from typing import Any, Optional


class TaskSyncError(Exception):
    """Base class for task listing errors."""

    default_message = "Task listing failed"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class AuthError(TaskSyncError):
    """No authenticated principal is attached to the request."""

    default_message = "Unauthenticated"


class ServiceError(TaskSyncError):
    """The task store (or the transport in front of it) failed."""

    default_message = "Task store unavailable"


class ShapeError(TaskSyncError):
    """A response body parsed fine but is not a task list."""

    default_message = "Unexpected task list payload"

    def __init__(self, message: Optional[str] = None, payload: Any = None):
        super().__init__(message)
        self.payload = payload
