#!/usr/bin/env python3
"""
启动 To-Do API 服务
任务保存在进程内存中，只能以单 worker 运行
"""
import sys
import os

# 添加项目根目录到路径
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

if __name__ == "__main__":
    import uvicorn
    from todo_api.config import settings

    print("=" * 50)
    print("🚀 启动 To-Do API")
    print("=" * 50)
    print(f"Host: {settings.host}")
    print(f"Port: {settings.port}")
    print(f"Data file: {settings.data_file}")
    print(f"服务已启动: http://{settings.host}:{settings.port}")
    print("=" * 50)

    uvicorn.run(
        "todo_api.main:app",
        host=settings.host,
        port=settings.port,
        workers=1,
        reload=settings.reload,
        log_level=settings.log_level.lower()
    )
