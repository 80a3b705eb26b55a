from typing import List

from fastapi import APIRouter, Depends, status

from ..principal import Principal
from ..query import list_tasks_for_current_user
from ..schemas.task import ErrorResponse, TaskRead
from ..store import TaskStore, get_task_store
from .auth import get_principal

router = APIRouter()


@router.get(
    "/tasks",
    response_model=List[TaskRead],
    responses={
        status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse},
        status.HTTP_503_SERVICE_UNAVAILABLE: {"model": ErrorResponse},
    },
)
def get_tasks_current_user(
    principal: Principal = Depends(get_principal),
    store: TaskStore = Depends(get_task_store),
):
    """List the caller's tasks, newest first.

    Unauthenticated callers get 401 before the store is queried; store
    failures surface as 503 rather than an empty list.
    """
    return list_tasks_for_current_user(principal, store)
