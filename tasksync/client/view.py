"""Task list view: fetches the caller's tasks once per mount and renders them.

The view is a small state machine::

    Idle --mount/refresh--> Loading --2xx--> Success(tasks)
                                    --non-2xx / network error--> Failed(message)

Fetches are triggered only by ``mount()`` and ``refresh()``. State changes,
including the arrival of the fetched tasks, notify subscribers (a re-render)
and never schedule another request.
"""

import enum
from dataclasses import dataclass
from typing import Callable, List, NamedTuple, Optional, Sequence, Tuple

import httpx
import structlog

from ..config import TASKS_PATH
from .payload import TaskItem, normalize_task_payload

log = structlog.get_logger()

FALLBACK_ERROR = "Failed to fetch tasks"
MALFORMED_BODY_ERROR = "Malformed response body"

IDLE_TEXT = "Tasks not loaded"
LOADING_TEXT = "Loading tasks..."
EMPTY_TEXT = "No tasks found"


class Phase(str, enum.Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class TaskListState:
    phase: Phase = Phase.IDLE
    tasks: Tuple[TaskItem, ...] = ()
    error: Optional[str] = None

    @property
    def loading(self) -> bool:
        return self.phase is Phase.LOADING

    @classmethod
    def idle(cls) -> "TaskListState":
        return cls()

    def started(self) -> "TaskListState":
        # Previous tasks are kept but not rendered while loading; the error is cleared.
        return TaskListState(Phase.LOADING, self.tasks, None)

    @classmethod
    def succeeded(cls, tasks: Sequence[TaskItem]) -> "TaskListState":
        return cls(Phase.SUCCESS, tuple(tasks), None)

    @classmethod
    def failed(cls, message: str) -> "TaskListState":
        return cls(Phase.FAILED, (), message)


class RenderedRow(NamedTuple):
    key: Optional[str]
    text: str


def render_task_list(state: TaskListState) -> List[RenderedRow]:
    """Pure render of ``state``. Task rows are keyed by task id; status lines have no key."""
    if state.phase is Phase.IDLE:
        return [RenderedRow(None, IDLE_TEXT)]
    if state.phase is Phase.LOADING:
        return [RenderedRow(None, LOADING_TEXT)]
    if state.phase is Phase.FAILED:
        return [RenderedRow(None, f"Error: {state.error}")]
    if not state.tasks:
        return [RenderedRow(None, EMPTY_TEXT)]
    return [RenderedRow(task.key, f"{task.title} - {task.status}") for task in state.tasks]


def describe_status(status_code: int) -> str:
    if status_code == 401:
        return "Authentication required (HTTP 401)"
    if status_code == 403:
        return "Access denied (HTTP 403)"
    if status_code >= 500:
        return f"Server error (HTTP {status_code})"
    return f"HTTP error! status: {status_code}"


Subscriber = Callable[[TaskListState], None]


class TaskListView:
    """Client-side task list bound to one ``httpx.AsyncClient``.

    The client carries base URL, auth headers and cookies; the view only knows
    the path it requests.
    """

    def __init__(self, client: httpx.AsyncClient, path: str = TASKS_PATH):
        self._client = client
        self._path = path
        self._state = TaskListState.idle()
        self._subscribers: List[Subscriber] = []
        self._mounted = False
        # Bumped on every mount and unmount; responses from an older generation are dropped.
        self._generation = 0
        self.requests_issued = 0

    @property
    def state(self) -> TaskListState:
        return self._state

    @property
    def mounted(self) -> bool:
        return self._mounted

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Call ``callback`` with the new state on every change. Returns an unsubscribe function."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def render(self) -> List[RenderedRow]:
        return render_task_list(self._state)

    def render_text(self) -> str:
        return "\n".join(row.text for row in self.render())

    async def mount(self) -> TaskListState:
        """Mount the view and fetch once. Mounting an already mounted view does nothing."""
        if self._mounted:
            log.debug("task_list_view_already_mounted")
            return self._state
        self._mounted = True
        self._generation += 1
        await self._fetch(self._generation)
        return self._state

    def unmount(self) -> None:
        """Detach the view; an in-flight response will not be applied."""
        self._mounted = False
        self._generation += 1

    async def refresh(self) -> TaskListState:
        """Explicit re-fetch. Ignored while unmounted or while a request is in flight."""
        if not self._mounted:
            log.debug("task_list_refresh_ignored", reason="unmounted")
            return self._state
        if self._state.loading:
            log.debug("task_list_refresh_ignored", reason="in_flight")
            return self._state
        await self._fetch(self._generation)
        return self._state

    def _is_current(self, generation: int) -> bool:
        return self._mounted and generation == self._generation

    def _set_state(self, state: TaskListState) -> None:
        self._state = state
        for callback in list(self._subscribers):
            callback(state)

    async def _fetch(self, generation: int) -> None:
        self._set_state(self._state.started())
        self.requests_issued += 1
        try:
            outcome = await self._request()
            if self._is_current(generation):
                self._set_state(outcome)
            else:
                log.debug("task_list_stale_response_dropped", phase=outcome.phase.value)
        finally:
            # Never leave a live view stuck in Loading, whatever escaped above.
            if self._is_current(generation) and self._state.loading:
                self._set_state(TaskListState.failed(FALLBACK_ERROR))

    async def _request(self) -> TaskListState:
        try:
            response = await self._client.get(self._path)
        except httpx.RequestError as exc:
            message = str(exc) or FALLBACK_ERROR
            log.warning("task_list_request_failed", path=self._path, error=message)
            return TaskListState.failed(message)

        if not response.is_success:
            log.warning("task_list_request_rejected", path=self._path, status_code=response.status_code)
            return TaskListState.failed(describe_status(response.status_code))

        try:
            payload = response.json()
        except ValueError:
            log.warning("task_list_body_not_json", path=self._path)
            return TaskListState.failed(MALFORMED_BODY_ERROR)

        tasks = normalize_task_payload(payload)
        log.info("task_list_loaded", count=len(tasks))
        return TaskListState.succeeded(tasks)
