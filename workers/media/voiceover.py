# -*- coding: utf-8 -*-
"""
配音试听：ElevenLabs TTS，成功时把上游 MP3 流原样转发
"""
import logging
from typing import Optional

import httpx

from providers.tts.elevenlabs_client import ElevenLabsClient
from services.api.app.core.exceptions import UpstreamError

logger = logging.getLogger(__name__)

DEFAULT_STABILITY = 0.5
DEFAULT_SIMILARITY_BOOST = 0.7


def open_voiceover_stream(
    client: ElevenLabsClient,
    text: str,
    *,
    voice_id: str,
    model_id: str,
    stability: Optional[float] = None,
    similarity_boost: Optional[float] = None,
) -> httpx.Response:
    """返回尚未读取的流式响应；调用方读完后必须 close()。"""
    r = client.text_to_speech_stream(
        text,
        voice_id=voice_id,
        model_id=model_id,
        stability=DEFAULT_STABILITY if stability is None else stability,
        similarity_boost=DEFAULT_SIMILARITY_BOOST if similarity_boost is None else similarity_boost,
    )
    if not r.is_success:
        try:
            r.read()
            detail = r.text
        except httpx.HTTPError:
            detail = ""
        finally:
            r.close()
        logger.warning("tts: voice %s returned HTTP %s", voice_id, r.status_code)
        raise UpstreamError("TTS error", httpStatus=r.status_code, detail=detail)
    return r
