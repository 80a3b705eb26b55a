"""Turns a decoded ``GET /api/tasks`` body into a list of tasks.

Two shapes are accepted: a bare JSON array, or an envelope with the array
under ``data``. Items without a usable ``id`` are dropped, and only the first
item for a given ``id`` is kept, so every rendered row has a unique key.
"""

from dataclasses import dataclass
from typing import Any, List, Optional, Union

import structlog

from ..errors import ShapeError

log = structlog.get_logger()

TaskId = Union[int, str]


@dataclass(frozen=True)
class TaskItem:
    id: TaskId
    title: str
    status: str
    owner_id: Optional[str] = None
    created_at: Optional[str] = None

    @property
    def key(self) -> str:
        return str(self.id)


def _extract_items(payload: Any) -> List[Any]:
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict) and isinstance(payload.get("data"), list):
        return payload["data"]
    raise ShapeError(payload=payload)


def _coerce_task(item: Any) -> Optional[TaskItem]:
    if not isinstance(item, dict):
        return None
    task_id = item.get("id")
    # bool is an int subclass but never a valid id
    if isinstance(task_id, bool) or not isinstance(task_id, (int, str)) or task_id == "":
        return None
    title = item.get("title")
    status = item.get("status")
    return TaskItem(
        id=task_id,
        title="" if title is None else str(title),
        status="" if status is None else str(status),
        owner_id=item.get("ownerId"),
        created_at=item.get("createdAt"),
    )


def parse_task_payload(payload: Any) -> List[TaskItem]:
    """Strict parse of a decoded body.

    Raises:
        ShapeError: The body is neither an array nor a ``{"data": [...]}`` envelope.
    """
    tasks: List[TaskItem] = []
    seen = set()
    for item in _extract_items(payload):
        task = _coerce_task(item)
        if task is None:
            log.warning("task_item_skipped", reason="missing_id")
            continue
        if task.key in seen:
            log.warning("task_item_skipped", reason="duplicate_id", task_id=task.key)
            continue
        seen.add(task.key)
        tasks.append(task)
    return tasks


def normalize_task_payload(payload: Any) -> List[TaskItem]:
    """Like ``parse_task_payload`` but an unexpected shape yields ``[]``."""
    try:
        return parse_task_payload(payload)
    except ShapeError as exc:
        log.warning("task_payload_shape_unexpected", payload_type=type(exc.payload).__name__)
        return []
