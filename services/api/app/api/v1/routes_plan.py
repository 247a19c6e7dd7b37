from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from providers.llm.openai_client import OpenAIClient
from schemas.shot import Plan
from services.api.app.core.config import settings
from services.api.app.core.exceptions import ApiError
from workers.llm.shot_planner import plan_shots

from .deps import get_openai_client

router = APIRouter()


class PlanReq(BaseModel):
    script: Optional[str] = None
    genre: Optional[str] = None
    targetDurationSec: Optional[float] = None


@router.post("/plan-shots", responses={200: {"model": Plan}})
def plan(req: PlanReq, client: OpenAIClient = Depends(get_openai_client)):
    if not (req.script and req.script.strip()):
        raise ApiError(400, "Missing script")
    if not client.configured:
        raise ApiError(500, "Missing OPENAI_API_KEY")
    # 原样返回上游给出的计划，不做字段校验
    return plan_shots(
        client,
        req.script,
        model=settings.OPENAI_CHAT_MODEL,
        genre=req.genre,
        target_duration_sec=req.targetDurationSec,
    )
