from typing import List, Protocol

import structlog

from .errors import AuthError
from .models import Task
from .principal import Principal

log = structlog.get_logger()


class TaskFinder(Protocol):
    def find_by_owner_ordered_by_creation(self, owner_id: str) -> List[Task]:
        ...


def list_tasks_for_current_user(principal: Principal, store: TaskFinder) -> List[Task]:
    """Return the tasks owned by ``principal``, newest first.

    The authentication check runs before the store is touched, and the owner
    filter is part of the store query itself.

    Raises:
        AuthError: No authenticated principal.
        ServiceError: The store failed; never reported as an empty list.
    """
    if not principal.is_authenticated():
        log.info("task_list_rejected_unauthenticated")
        raise AuthError()

    owner_id = principal.id()
    tasks = store.find_by_owner_ordered_by_creation(owner_id)
    log.info("tasks_listed", owner_id=owner_id, count=len(tasks))
    return tasks
