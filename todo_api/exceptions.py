"""To-Do API 自定义异常"""


class TodoApiError(Exception):
    """任务服务基础异常"""
    pass


class TaskValidationError(TodoApiError):
    """字段校验错误（如标题为空、ID 非法）"""
    pass


class MalformedRequestError(TodoApiError):
    """请求体无法解析"""
    pass


class TaskNotFoundError(TodoApiError):
    """任务不存在"""

    def __init__(self, task_id: int):
        super().__init__(f"任务不存在: {task_id}")
        self.task_id = task_id


class PersistenceError(TodoApiError):
    """数据文件写入失败"""
    pass


class StartupError(TodoApiError):
    """启动时加载数据文件失败"""
    pass
