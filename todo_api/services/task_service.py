import logging
from typing import List, Optional

from pydantic import ValidationError

from ..exceptions import MalformedRequestError, TaskNotFoundError, TaskValidationError
from ..models.task import Task, TaskCreate, TaskUpdate
from ..storage.task_store import TaskStore

logger = logging.getLogger(__name__)

# 任务 ID 最大位数
MAX_ID_DIGITS = 18


class TaskService:
    def __init__(self, store: TaskStore):
        self.store = store

    def list_tasks(self) -> List[Task]:
        """返回全部任务（按创建顺序）"""
        return self.store.list_all()

    def create_task(self, body: bytes) -> Task:
        """解析请求体并创建任务，标题不能为空"""
        data = self._decode(TaskCreate, body)
        if not data.title:
            raise TaskValidationError("字段 'title' 不能为空")

        task = self.store.add(data.title, data.done)
        logger.info(f"任务已创建: {task.id}, 标题: {task.title}")
        return task

    def update_task(self, id_token: str, body: bytes) -> Task:
        """
        更新任务

        校验顺序：先校验 ID，再确认任务存在，最后解析请求体。
        """
        task_id = parse_task_id(id_token)
        if self.store.get(task_id) is None:
            raise TaskNotFoundError(task_id)

        data = self._decode(TaskUpdate, body)
        task = self.store.update(task_id, data.title, data.done)
        logger.info(f"任务已更新: {task.id}, done={task.done}")
        return task

    def delete_task(self, id_token: str) -> None:
        task_id = parse_task_id(id_token)
        self.store.delete(task_id)
        logger.info(f"任务已删除: {task_id}")

    def persistence_error(self) -> Optional[str]:
        return self.store.last_persist_error

    @staticmethod
    def _decode(model, body: bytes):
        try:
            return model.model_validate_json(body)
        except ValidationError as e:
            raise MalformedRequestError(f"无效的 JSON: {e.errors()[0]['msg']}") from e


def parse_task_id(token: str) -> int:
    """
    解析路径中的任务 ID

    Raises:
        TaskValidationError: ID 缺失、非数字或不为正数
    """
    token = token.rstrip("/")
    if not token:
        raise TaskValidationError("路径中缺少任务 ID")

    if len(token) > MAX_ID_DIGITS or not (token.isascii() and token.isdigit()):
        raise TaskValidationError(f"无效的任务 ID: {token}")

    task_id = int(token)
    if task_id <= 0:
        raise TaskValidationError(f"无效的任务 ID: {token}")
    return task_id
