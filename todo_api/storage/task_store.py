import json
import logging
import threading
from pathlib import Path
from typing import List, Optional

from ..exceptions import PersistenceError, StartupError, TaskNotFoundError
from ..models.task import Task

logger = logging.getLogger(__name__)


class TaskStore:
    """
    任务存储：内存中的有序列表 + 磁盘 JSON 快照

    所有读写与随后的快照写入都在同一把锁内完成，
    保证“修改 → 持久化”作为一个整体执行。
    """

    def __init__(self, data_file: str):
        self.data_file = Path(data_file)
        self._tasks: List[Task] = []
        self._lock = threading.Lock()
        self._last_persist_error: Optional[str] = None

    def load(self, allow_missing: bool = True) -> None:
        """
        从数据文件加载任务

        Args:
            allow_missing: 文件不存在时是否以空列表启动

        Raises:
            StartupError: 文件不存在（且不允许）、无法读取或格式错误
        """
        with self._lock:
            self._tasks = []

            if not self.data_file.exists():
                if allow_missing:
                    logger.warning(f"数据文件不存在，以空任务列表启动: {self.data_file}")
                    return
                raise StartupError(f"数据文件不存在: {self.data_file}")

            try:
                with open(self.data_file, "r", encoding="utf-8") as f:
                    data = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                raise StartupError(f"无法读取数据文件 {self.data_file}: {e}") from e

            # 文件内容为 null 时视为空列表
            if data is None:
                data = []
            if not isinstance(data, list):
                raise StartupError(f"数据文件格式错误，应为数组: {self.data_file}")

            try:
                self._tasks = [Task.model_validate(item) for item in data]
            except ValueError as e:
                raise StartupError(f"数据文件包含无效任务: {e}") from e

            ids = [task.id for task in self._tasks]
            if len(ids) != len(set(ids)):
                self._tasks = []
                raise StartupError(f"数据文件包含重复的任务 ID: {self.data_file}")

            logger.info(f"已加载 {len(self._tasks)} 个任务: {self.data_file}")

    def save(self) -> None:
        """
        将完整任务列表写回数据文件

        Raises:
            PersistenceError: 写入失败
        """
        with self._lock:
            self._save_locked()

    def list_all(self) -> List[Task]:
        with self._lock:
            return [task.model_copy() for task in self._tasks]

    def get(self, task_id: int) -> Optional[Task]:
        with self._lock:
            index = self._index_of(task_id)
            if index == -1:
                return None
            return self._tasks[index].model_copy()

    def add(self, title: str, done: bool = False) -> Task:
        """
        追加新任务并写入快照

        新 ID 为当前最大 ID + 1（空列表时为 1），删除最大 ID 后可能被复用。
        """
        with self._lock:
            next_id = max((t.id for t in self._tasks), default=0) + 1
            task = Task(id=next_id, title=title, done=done)
            self._tasks.append(task)
            self._persist()
            return task.model_copy()

    def update(self, task_id: int, title: str, done: bool) -> Task:
        """标题非空时替换；done 总是覆盖"""
        with self._lock:
            index = self._index_of(task_id)
            if index == -1:
                raise TaskNotFoundError(task_id)

            task = self._tasks[index]
            if title:
                task.title = title
            task.done = done
            self._persist()
            return task.model_copy()

    def delete(self, task_id: int) -> None:
        with self._lock:
            index = self._index_of(task_id)
            if index == -1:
                raise TaskNotFoundError(task_id)

            del self._tasks[index]
            self._persist()

    @property
    def last_persist_error(self) -> Optional[str]:
        """最近一次快照写入失败的信息，写入成功后清空"""
        return self._last_persist_error

    def _index_of(self, task_id: int) -> int:
        for i, task in enumerate(self._tasks):
            if task.id == task_id:
                return i
        return -1

    def _persist(self) -> None:
        # 写入失败不影响请求结果，内存与磁盘可能暂时不一致
        try:
            self._save_locked()
        except PersistenceError as e:
            logger.error(f"保存任务失败: {e}", exc_info=True)

    def _save_locked(self) -> None:
        data = [task.model_dump() for task in self._tasks]
        try:
            self.data_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.data_file, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=1)
                f.write("\n")
        except OSError as e:
            self._last_persist_error = str(e)
            raise PersistenceError(f"写入数据文件失败 {self.data_file}: {e}") from e
        self._last_persist_error = None
