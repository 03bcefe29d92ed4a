from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class Task(BaseModel):
    """任务模型"""
    id: int = Field(..., gt=0, description="任务ID（服务端分配）")
    title: str = Field(..., description="任务标题")
    done: bool = Field(default=False, description="是否已完成")


class TaskCreate(BaseModel):
    """创建任务请求，客户端提交的 id 会被忽略"""
    model_config = ConfigDict(strict=True)

    title: str = Field(default="", description="任务标题（必填，不能为空）")
    done: bool = Field(default=False, description="是否已完成")


class TaskUpdate(BaseModel):
    """
    更新任务请求

    - **title**: 非空时替换原标题
    - **done**: 总是覆盖原值，省略时重置为 false
    """
    model_config = ConfigDict(strict=True)

    title: str = Field(default="", description="新标题（为空则保留原标题）")
    done: bool = Field(default=False, description="完成状态")


class HealthStatus(BaseModel):
    """健康检查响应"""
    status: str
    persistence_error: Optional[str] = Field(None, description="最近一次写入失败的错误信息")
