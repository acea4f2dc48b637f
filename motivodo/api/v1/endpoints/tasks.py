import logging
from fastapi import APIRouter, Depends
from typing import List
import uuid

from motivodo.services.storage import DatabaseStorage, get_storage
from motivodo.models.task import Task
from motivodo.schemas.task import TaskCreate, TaskRead, TaskUpdate
from motivodo.schemas.user import Message
from motivodo.core.errors import Forbidden, NotFound
from motivodo.api.deps import AuthContext, get_auth_context

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_owned_task(storage: DatabaseStorage, task_id: uuid.UUID, auth: AuthContext) -> Task:
    # Existence first, then ownership: 404 when absent, 403 when someone else's
    task = storage.get_task(task_id)
    if not task:
        raise NotFound("Task not found")
    if task.user_id != auth.user_id:
        raise Forbidden("Forbidden")
    return task


@router.get("", response_model=List[TaskRead])
def list_user_tasks(
    auth: AuthContext = Depends(get_auth_context),
    storage: DatabaseStorage = Depends(get_storage),
):
    return storage.get_tasks_by_user_id(auth.user_id)


@router.post("", response_model=TaskRead)
def create_task(
    task_create: TaskCreate,
    auth: AuthContext = Depends(get_auth_context),
    storage: DatabaseStorage = Depends(get_storage),
):
    task = storage.create_task(auth.user_id, task_create.model_dump())
    logger.info("User %s created task %s", auth.user_id, task.id)
    return task


@router.get("/{task_id}", response_model=TaskRead)
def get_task(
    task_id: uuid.UUID,
    auth: AuthContext = Depends(get_auth_context),
    storage: DatabaseStorage = Depends(get_storage),
):
    return _get_owned_task(storage, task_id, auth)


@router.patch("/{task_id}", response_model=TaskRead)
def update_task(
    task_id: uuid.UUID,
    task_update: TaskUpdate,
    auth: AuthContext = Depends(get_auth_context),
    storage: DatabaseStorage = Depends(get_storage),
):
    _get_owned_task(storage, task_id, auth)

    task_data = task_update.model_dump(exclude_unset=True)
    task = storage.update_task(task_id, task_data)
    if task is None:
        # Deleted between the ownership check and the write
        raise NotFound("Task not found")
    logger.info("User %s updated task %s (%s)", auth.user_id, task_id, ", ".join(sorted(task_data)))
    return task


@router.delete("/{task_id}", response_model=Message)
def delete_task(
    task_id: uuid.UUID,
    auth: AuthContext = Depends(get_auth_context),
    storage: DatabaseStorage = Depends(get_storage),
):
    _get_owned_task(storage, task_id, auth)

    if not storage.delete_task(task_id):
        raise NotFound("Task not found")
    logger.info("User %s deleted task %s", auth.user_id, task_id)
    return Message(message="Task deleted successfully")
