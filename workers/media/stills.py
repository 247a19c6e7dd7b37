# -*- coding: utf-8 -*-
"""
静帧生成：单张图，返回 base64
- size 只允许上游稳定支持的三档，其它值一律回落到 1024x1024
"""
import logging
from typing import Any, Optional

from providers.llm.openai_client import OpenAIClient
from services.api.app.core.exceptions import UpstreamError

logger = logging.getLogger(__name__)

DEFAULT_SIZE = "1024x1024"
SUPPORTED_SIZES = frozenset({"256x256", "512x512", "1024x1024"})


def choose_size(size: Any) -> str:
    return size if isinstance(size, str) and size in SUPPORTED_SIZES else DEFAULT_SIZE


def _first_b64(body: Any) -> Optional[str]:
    if not isinstance(body, dict):
        return None
    data = body.get("data")
    if not isinstance(data, list) or not data or not isinstance(data[0], dict):
        return None
    return data[0].get("b64_json") or None


def generate_still(client: OpenAIClient, prompt: str, *, model: str, size: Any = None) -> str:
    chosen = choose_size(size)
    r = client.generate_image(prompt, model=model, size=chosen)
    try:
        body = r.json()
    except ValueError:
        body = None

    if not r.is_success:
        logger.warning("still: image API returned HTTP %s", r.status_code)
        raise UpstreamError("Image gen failed", httpStatus=r.status_code, detail=body)

    b64 = _first_b64(body)
    if not b64:
        raise UpstreamError("No image returned", detail=body)
    logger.info("still: %s image, %d b64 chars", chosen, len(b64))
    return b64
