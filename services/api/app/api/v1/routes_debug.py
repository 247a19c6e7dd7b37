from fastapi import APIRouter, Depends

from providers.llm.openai_client import OpenAIClient
from providers.tts.elevenlabs_client import ElevenLabsClient

from .deps import get_elevenlabs_client, get_openai_client

router = APIRouter()


@router.get("/debug-env")
def debug_env(
    openai: OpenAIClient = Depends(get_openai_client),
    elevenlabs: ElevenLabsClient = Depends(get_elevenlabs_client),
):
    """只报告密钥是否已配置（与各路由的判断一致），不回显任何值。"""
    return {
        "hasKey": openai.configured,
        "hasElevenLabsKey": elevenlabs.configured,
    }
