"""Data access for users and tasks.

No business rules live here: ownership and validation are the API's job.
Every method commits its own single-row change.
"""
import logging
from typing import Any, Dict, List, Optional
import uuid

from fastapi import Depends
from sqlmodel import Session, select, desc

from ..db.session import get_session
from ..models.task import Task
from ..models.user import User

logger = logging.getLogger(__name__)


class DatabaseStorage:
    def __init__(self, session: Session):
        self.session = session

    # --- 1. USERS ---

    def get_user(self, user_id: uuid.UUID) -> Optional[User]:
        return self.session.get(User, user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        return self.session.exec(select(User).where(User.username == username)).first()

    def create_user(self, username: str, password_hash: str) -> User:
        user = User(username=username, password=password_hash)
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)
        return user

    # --- 2. TASKS ---

    def get_tasks_by_user_id(self, user_id: uuid.UUID) -> List[Task]:
        # Newest first so the dashboard list is stable
        statement = (
            select(Task)
            .where(Task.user_id == user_id)
            .order_by(desc(Task.created_at))
        )
        return list(self.session.exec(statement).all())

    def get_task(self, task_id: uuid.UUID) -> Optional[Task]:
        return self.session.get(Task, task_id)

    def create_task(self, user_id: uuid.UUID, data: Dict[str, Any]) -> Task:
        task = Task(user_id=user_id, **data)
        self.session.add(task)
        self.session.commit()
        self.session.refresh(task)
        return task

    def update_task(self, task_id: uuid.UUID, updates: Dict[str, Any]) -> Optional[Task]:
        task = self.session.get(Task, task_id)
        if task is None:
            return None
        for key, value in updates.items():
            setattr(task, key, value)
        self.session.add(task)
        self.session.commit()
        self.session.refresh(task)
        return task

    def delete_task(self, task_id: uuid.UUID) -> bool:
        task = self.session.get(Task, task_id)
        if task is None:
            return False
        self.session.delete(task)
        self.session.commit()
        logger.debug("Deleted task %s", task_id)
        return True


def get_storage(session: Session = Depends(get_session)) -> DatabaseStorage:
    return DatabaseStorage(session)
