# -*- coding: utf-8 -*-
"""
ElevenLabs 文本转语音（HTTP 直连）
- POST /v1/text-to-speech/{voice_id}，返回 audio/mpeg 字节流
- 以 stream=True 发送，响应体交给调用方逐块转发，调用方负责 close()
"""
from typing import Any, Dict, Optional

import httpx

DEFAULT_BASE_URL = "https://api.elevenlabs.io"


class ElevenLabsClient:
    def __init__(
        self,
        http: httpx.Client,
        api_key: Optional[str] = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: Optional[float] = None,
    ):
        self.http = http
        self.api_key = (api_key or "").strip() or None
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @property
    def configured(self) -> bool:
        return self.api_key is not None

    def text_to_speech_stream(
        self,
        text: str,
        *,
        voice_id: str,
        model_id: str,
        stability: float = 0.5,
        similarity_boost: float = 0.7,
    ) -> httpx.Response:
        payload: Dict[str, Any] = {
            "text": text,
            "model_id": model_id,
            "voice_settings": {
                "stability": stability,
                "similarity_boost": similarity_boost,
            },
        }
        headers = {
            "xi-api-key": self.api_key or "",
            "Accept": "audio/mpeg",
            "Content-Type": "application/json",
        }
        request = self.http.build_request(
            "POST",
            f"{self.base_url}/v1/text-to-speech/{voice_id}",
            json=payload,
            headers=headers,
            timeout=self.timeout if self.timeout is not None else httpx.USE_CLIENT_DEFAULT,
        )
        return self.http.send(request, stream=True)
