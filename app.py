import uvicorn
import os

from fluxradar.config.settings import settings


if __name__ == "__main__":
    # 注册表只存在于进程内存中，必须单进程运行
    enable_reload = os.getenv("ENABLE_RELOAD", "false").lower() == "true"

    try:
        uvicorn.run(
            "fluxradar.main:app",
            host=settings.HOST,
            port=settings.PORT,
            reload=enable_reload,
            reload_excludes=["*.pyc", "__pycache__"] if enable_reload else None,
            workers=1,
            log_level=os.getenv("UVICORN_LOG_LEVEL", "info"),
        )
    except KeyboardInterrupt:
        pass
