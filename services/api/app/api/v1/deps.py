# services/api/app/api/v1/deps.py
"""路由共享依赖：进程内共享的 httpx 连接池 + 按请求组装的上游客户端。"""
from typing import Optional

import httpx
from fastapi import Depends

from providers.llm.openai_client import OpenAIClient
from providers.tts.elevenlabs_client import ElevenLabsClient
from services.api.app.core.config import settings

_http: Optional[httpx.Client] = None


def get_http_client() -> httpx.Client:
    global _http
    if _http is None:
        _http = httpx.Client(timeout=settings.HTTP_TIMEOUT_SEC)
    return _http


def close_http_client() -> None:
    global _http
    if _http is not None:
        _http.close()
        _http = None


# 密钥每次请求时从 settings 读取，缺失由路由在校验完入参后报 500
def get_openai_client(http: httpx.Client = Depends(get_http_client)) -> OpenAIClient:
    return OpenAIClient(
        http,
        api_key=settings.OPENAI_API_KEY,
        organization=settings.OPENAI_ORG_ID,
        base_url=settings.OPENAI_BASE_URL,
        timeout=settings.HTTP_TIMEOUT_SEC,
    )


def get_elevenlabs_client(http: httpx.Client = Depends(get_http_client)) -> ElevenLabsClient:
    return ElevenLabsClient(
        http,
        api_key=settings.ELEVENLABS_API_KEY,
        base_url=settings.ELEVENLABS_BASE_URL,
        timeout=settings.HTTP_TIMEOUT_SEC,
    )
