from datetime import datetime
from typing import List, Optional

import structlog
from fastapi import Depends
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlmodel import Session, select

from .database import get_db
from .errors import ServiceError
from .models import Task, TaskStatus

log = structlog.get_logger()


class TaskStore:
    """SQLModel-backed task store.

    Every read is scoped in SQL; callers never receive rows they did not ask for.
    """

    def __init__(self, db: Session):
        self.db = db

    def find_by_owner_ordered_by_creation(self, owner_id: str) -> List[Task]:
        """Tasks owned by ``owner_id``, newest first.

        Raises:
            ServiceError: The query could not be executed.
        """
        statement = (
            select(Task)
            .where(Task.owner_id == owner_id)
            .order_by(Task.created_at.desc(), Task.id.desc())
        )
        try:
            return list(self.db.exec(statement).all())
        except DBAPIError as exc:
            log.error("task_store_query_failed", owner_id=owner_id, error=str(exc))
            raise ServiceError() from exc

    def add(
        self,
        *,
        owner_id: str,
        title: str,
        status: TaskStatus = TaskStatus.PENDING,
        created_at: Optional[datetime] = None,
    ) -> Task:
        if not title.strip():
            raise ValueError("Task title must not be empty")

        task = Task(title=title, status=status, owner_id=owner_id)
        if created_at is not None:
            task.created_at = created_at
        try:
            self.db.add(task)
            self.db.commit()
            self.db.refresh(task)
        except DBAPIError as exc:
            self.db.rollback()
            log.error("task_store_insert_failed", owner_id=owner_id, error=str(exc))
            raise ServiceError() from exc
        except SQLAlchemyError:
            # Bad bind values and the like are caller errors, not outages.
            self.db.rollback()
            raise
        return task


def get_task_store(db: Session = Depends(get_db)) -> TaskStore:
    """Dependency to get a task store bound to the request session."""
    return TaskStore(db)
