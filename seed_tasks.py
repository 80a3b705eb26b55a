"""Create a demo user with a few tasks.

    python seed_tasks.py
    tasksync-view --token <access_token printed below>
"""
from datetime import datetime, timedelta, timezone

from sqlmodel import select

from tasksync.database import create_tables, get_session
from tasksync.models import TaskStatus, User
from tasksync.routers.auth import create_access_token, get_password_hash
from tasksync.store import TaskStore

EMAIL = "test@example.com"
PASSWORD = "password"

create_tables()

with get_session() as db:
    user = db.exec(select(User).where(User.email == EMAIL)).first()
    if user:
        print("User already exists")
    else:
        user = User(email=EMAIL, hashed_password=get_password_hash(PASSWORD))
        db.add(user)
        db.commit()
        db.refresh(user)

        store = TaskStore(db)
        now = datetime.now(timezone.utc)
        store.add(owner_id=user.id, title="Write report", status=TaskStatus.DONE, created_at=now - timedelta(days=2))
        store.add(owner_id=user.id, title="Review pull request", status=TaskStatus.IN_PROGRESS, created_at=now - timedelta(hours=3))
        store.add(owner_id=user.id, title="Plan sprint", created_at=now)
        print(f"Test user created: {EMAIL} / {PASSWORD}")

    print(f"access_token: {create_access_token(data={'sub': user.email})}")
