from typing import Any, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from providers.llm.openai_client import OpenAIClient
from services.api.app.core.config import settings
from services.api.app.core.exceptions import ApiError
from workers.media.stills import generate_still

from .deps import get_openai_client

router = APIRouter()


class StillReq(BaseModel):
    prompt: Optional[str] = None
    # 不在白名单内的尺寸不报错，回落到 1024x1024
    size: Any = None


class StillResp(BaseModel):
    b64: str


@router.post("/still", response_model=StillResp)
def still(req: StillReq, client: OpenAIClient = Depends(get_openai_client)):
    if not (req.prompt and req.prompt.strip()):
        raise ApiError(400, "Missing prompt")
    if not client.configured:
        raise ApiError(500, "Missing OPENAI_API_KEY")
    b64 = generate_still(client, req.prompt, model=settings.OPENAI_IMAGE_MODEL, size=req.size)
    return {"b64": b64}
