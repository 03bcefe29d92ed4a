"""任务 CRUD API"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, Response

from ..exceptions import MalformedRequestError, TaskNotFoundError, TaskValidationError
from ..models.task import Task
from ..services.task_service import TaskService

router = APIRouter(tags=["任务管理"])


def get_task_service(request: Request) -> TaskService:
    """从应用状态中取出任务服务（由 create_app 注入）"""
    return request.app.state.task_service


@router.get(
    "/tasks",
    response_model=List[Task],
    summary="任务列表",
    description="按创建顺序返回全部任务"
)
@router.get("/tasks/", response_model=List[Task], include_in_schema=False)
async def list_tasks(service: TaskService = Depends(get_task_service)):
    return service.list_tasks()


@router.post(
    "/tasks",
    response_model=Task,
    summary="创建任务",
    description="创建新任务，ID 由服务端分配"
)
@router.post("/tasks/", response_model=Task, include_in_schema=False)
async def create_task(request: Request, service: TaskService = Depends(get_task_service)):
    """
    创建任务

    - **title**: 任务标题（必填，不能为空）
    - **done**: 是否已完成（可选，默认 false）
    """
    body = await request.body()
    try:
        return service.create_task(body)
    except (TaskValidationError, MalformedRequestError) as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.put(
    "/tasks/{task_id:path}",
    response_model=Task,
    summary="更新任务",
    description="title 非空时替换标题；done 总是被覆盖（省略即为 false）"
)
async def update_task(
    task_id: str,
    request: Request,
    service: TaskService = Depends(get_task_service)
):
    """
    更新任务

    - **task_id**: 正整数任务 ID
    """
    body = await request.body()
    try:
        return service.update_task(task_id, body)
    except TaskNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (TaskValidationError, MalformedRequestError) as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete(
    "/tasks/{task_id:path}",
    status_code=204,
    summary="删除任务",
    description="删除任务，其余任务保持原有顺序"
)
async def delete_task(task_id: str, service: TaskService = Depends(get_task_service)):
    try:
        service.delete_task(task_id)
    except TaskNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except TaskValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return Response(status_code=204)
