from pydantic import BaseModel, ConfigDict
from typing import List, Optional


class Shot(BaseModel):
    # 上游模型被要求给 5–15 的整数，本地不强校验
    model_config = ConfigDict(extra="allow")
    durationSec: float
    visualPrompt: str
    voiceover: str
    captions: str
    sfx: Optional[str] = None


class Plan(BaseModel):
    model_config = ConfigDict(extra="allow")
    totalDurationSec: Optional[float] = None
    shots: List[Shot] = []
