"""服务配置"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """To-Do API 配置，可通过 TODO_API_ 前缀的环境变量或 .env 文件覆盖"""

    model_config = SettingsConfigDict(
        env_prefix="TODO_API_",
        env_file=".env",
        extra="ignore",
    )

    # 服务监听
    host: str = "127.0.0.1"
    port: int = 8080
    reload: bool = False

    # 任务数据文件（JSON 快照）
    data_file: str = "data/tasks.json"
    # 数据文件不存在时是否以空列表启动；为 False 时启动失败
    allow_missing_data_file: bool = True

    log_level: str = "INFO"


settings = Settings()
