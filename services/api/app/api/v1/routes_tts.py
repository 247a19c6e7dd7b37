from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from pydantic import BaseModel

from providers.tts.elevenlabs_client import ElevenLabsClient
from services.api.app.core.config import settings
from services.api.app.core.exceptions import ApiError
from workers.media.voiceover import open_voiceover_stream

from .deps import get_elevenlabs_client

router = APIRouter()


class TTSReq(BaseModel):
    text: Optional[str] = None
    voiceId: Optional[str] = None
    modelId: Optional[str] = None
    stability: Optional[float] = None  # 0..1
    similarityBoost: Optional[float] = None  # 0..1


@router.post("/tts", responses={200: {"content": {"audio/mpeg": {}}}})
def tts(req: TTSReq, client: ElevenLabsClient = Depends(get_elevenlabs_client)):
    text = (req.text or "").strip()
    if not text:
        raise ApiError(400, "Missing text")
    if not client.configured:
        raise ApiError(500, "Missing ELEVENLABS_API_KEY")

    upstream = open_voiceover_stream(
        client,
        text,
        voice_id=req.voiceId or settings.ELEVENLABS_DEFAULT_VOICE_ID,
        model_id=req.modelId or settings.ELEVENLABS_DEFAULT_MODEL_ID,
        stability=req.stability,
        similarity_boost=req.similarityBoost,
    )
    # MP3 直接转发给浏览器；客户端断开或上游读失败时也要关闭上游连接
    def relay():
        try:
            yield from upstream.iter_bytes()
        finally:
            upstream.close()

    return StreamingResponse(
        relay(),
        media_type="audio/mpeg",
        headers={"Cache-Control": "no-store"},
    )
