import logging
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse
from contextlib import asynccontextmanager
from typing import Optional

from .config import Settings, settings
from .api import tasks
from .exceptions import StartupError
from .models.task import HealthStatus
from .services.task_service import TaskService
from .storage.task_store import TaskStore

# 配置日志
logging.basicConfig(
    level=settings.log_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

GREETING = "欢迎使用 To-Do API!\n"


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """创建应用，任务存储绑定到给定配置的数据文件"""
    app_settings = app_settings or settings
    store = TaskStore(app_settings.data_file)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # 启动时加载任务
        logger.info("🚀 To-Do API 启动")
        logger.info(f"📦 数据文件: {app_settings.data_file}")
        try:
            store.load(allow_missing=app_settings.allow_missing_data_file)
        except StartupError as e:
            logger.critical(f"无法加载任务: {e}")
            raise
        yield
        # 关闭时清理
        logger.info("👋 To-Do API 关闭")

    app = FastAPI(
        title="To-Do API",
        description="基于 JSON 文件持久化的任务 CRUD 服务",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )
    app.state.settings = app_settings
    app.state.task_store = store
    app.state.task_service = TaskService(store)

    # 路由注册
    app.include_router(tasks.router)

    @app.get("/", response_class=PlainTextResponse, summary="欢迎信息", tags=["系统"])
    async def home():
        return GREETING

    @app.get(
        "/health",
        response_model=HealthStatus,
        response_model_exclude_none=True,
        summary="健康检查",
        tags=["系统"]
    )
    async def health():
        """检查服务健康状态，最近一次写入数据文件失败时返回 degraded"""
        error = app.state.task_service.persistence_error()
        if error:
            return HealthStatus(status="degraded", persistence_error=error)
        return HealthStatus(status="healthy")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "todo_api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
    )
