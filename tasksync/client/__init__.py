from .payload import TaskItem, normalize_task_payload, parse_task_payload
from .view import Phase, RenderedRow, TaskListState, TaskListView, render_task_list

__all__ = [
    "Phase",
    "RenderedRow",
    "TaskItem",
    "TaskListState",
    "TaskListView",
    "normalize_task_payload",
    "parse_task_payload",
    "render_task_list",
]
