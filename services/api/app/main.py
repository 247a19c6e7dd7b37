# services/api/app/main.py

from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles
from contextlib import asynccontextmanager

# -----------------------------------------------------------------------------
# 核心模块导入 (Core Module Imports)
# -----------------------------------------------------------------------------
from .core.config import settings
from .core.exceptions import register_exception_handlers
from .core.log_setup import setup_logging
from .api.v1 import gateway
from .api.v1.deps import close_http_client

STATIC_DIR = Path(__file__).resolve().parent / "static"

# -----------------------------------------------------------------------------
# FastAPI 生命周期事件 (Lifespan Events)
# -----------------------------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    启动时配置日志；关闭时释放共享的上游 HTTP 连接池。
    """
    setup_logging()
    print(f"--- 应用启动 ({settings.APP_ENV}) ---")
    yield
    # --- 在 'yield' 之后的代码会在应用关闭时运行 ---
    close_http_client()
    print("--- 应用关闭 ---")

# -----------------------------------------------------------------------------
# FastAPI 应用实例化 (App Instantiation)
# -----------------------------------------------------------------------------
app = FastAPI(
    title=settings.APP_NAME,
    lifespan=lifespan
)
register_exception_handlers(app)

# -----------------------------------------------------------------------------
# 中间件配置 (Middleware Configuration)
# -----------------------------------------------------------------------------
# 允许的源从 settings.CORS_ORIGINS 读取，留空则不挂中间件（页面与 API 同源时不需要）
if settings.cors_origin_list():
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

# -----------------------------------------------------------------------------
# API 路由注册 (API Router Registration)
# -----------------------------------------------------------------------------
app.include_router(gateway.router, prefix="/api/v1")

# -----------------------------------------------------------------------------
# 页面 (Single Page)
# -----------------------------------------------------------------------------
app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")


@app.get("/", include_in_schema=False)
def index():
    """分镜规划页面：粘贴脚本 → 规划镜头 → 试听配音 → 生成静帧。"""
    return FileResponse(STATIC_DIR / "index.html", headers={"Cache-Control": "no-store"})

# -----------------------------------------------------------------------------
# 健康检查 (Health Check)
# -----------------------------------------------------------------------------
@app.get("/health", tags=["Health Check"])
def read_root():
    """
    返回一个简单的欢迎信息，用于确认服务正在运行。
    """
    return {"message": f"Welcome to {settings.APP_NAME}!"}
