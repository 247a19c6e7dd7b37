# services/api/app/core/config.py

from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    """
    统一管理项目的所有配置。
    使用 pydantic-settings，这个类会自动从环境变量或 .env 文件中读取配置。
    """

    # -------------------------------------------------------------------------
    # App 基础配置 (Basic App Settings)
    # -------------------------------------------------------------------------
    APP_NAME: str = "Shot Planner Studio"
    APP_ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    # API服务的监听主机和端口 (主要用于Uvicorn命令行，但放在这里保持一致性)
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # 逗号分隔；留空则不挂 CORS 中间件
    CORS_ORIGINS: str = "http://localhost:3000"

    # -------------------------------------------------------------------------
    # OpenAI (分镜规划 + 静帧)
    # -------------------------------------------------------------------------
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_ORG_ID: Optional[str] = None
    OPENAI_BASE_URL: str = "https://api.openai.com/v1"
    OPENAI_CHAT_MODEL: str = "gpt-4o"
    OPENAI_IMAGE_MODEL: str = "gpt-image-1"

    # -------------------------------------------------------------------------
    # ElevenLabs (配音试听)
    # -------------------------------------------------------------------------
    ELEVENLABS_API_KEY: Optional[str] = None
    ELEVENLABS_BASE_URL: str = "https://api.elevenlabs.io"
    ELEVENLABS_DEFAULT_VOICE_ID: str = "21m00Tcm4TlvDq8ikWAM"  # "Rachel"
    ELEVENLABS_DEFAULT_MODEL_ID: str = "eleven_multilingual_v2"

    # 上游请求超时（秒），生图较慢
    HTTP_TIMEOUT_SEC: float = 120.0

    # Pydantic-settings 的配置类
    # model_config 用于指定从哪个文件读取环境变量（默认为 .env）
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding='utf-8', extra='ignore')

    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

# 创建一个全局唯一的settings实例
# 项目中其他任何地方需要配置时，都应该从这里导入
# from services.api.app.core.config import settings
# 密钥在请求时读取，缺失时按请求报错，而不是启动失败
settings = Settings()
