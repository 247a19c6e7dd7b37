# -*- coding: utf-8 -*-
"""
Shot Planner 角色层（脚本 → 分镜计划）
1) 用 prompts/shot_planner 下的模板拼 system / user 两段提示词
2) 调 chat/completions（单次，不重试、不降级）
3) 解析：外层 JSON → choices[0].message.content → 去 Markdown 代码围栏 → 内层 JSON
4) 只校验 shots 是数组；其余字段原样返回给前端
任何一步失败都抛 UpstreamError，并把上游原始内容挂在错误体上
"""

from __future__ import annotations
import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

from providers.llm.openai_client import OpenAIClient
from services.api.app.core.exceptions import UpstreamError

logger = logging.getLogger(__name__)

# ---------- 目录 ----------
REPO_ROOT = Path(__file__).resolve().parents[2]
PROMPTS_DIR = REPO_ROOT / 'prompts' / 'shot_planner'

# ---------- 常量 ----------
DEFAULT_GENRE = "Drama"
DEFAULT_TARGET_SEC = 45
MIN_TARGET_SEC = 20
MAX_TARGET_SEC = 90
MAX_SCRIPT_CHARS = 4000
PLAN_TEMPERATURE = 0.4

# ---------- 模板 ----------
_DA_PATTERN = re.compile(r"<<\s*([a-zA-Z0-9_]+)\s*>>")

def _render(tmpl: str, mapping: Dict[str, Any]) -> str:
    def _repl(m: re.Match):
        k = m.group(1)
        return str(mapping.get(k, m.group(0)))
    return _DA_PATTERN.sub(_repl, tmpl)

def load_prompt_text(relpath: str) -> str:
    p = (PROMPTS_DIR / relpath.strip("/")).resolve()
    if not p.exists():
        raise FileNotFoundError(relpath)
    return p.read_text(encoding="utf-8")

def clamp_target_duration(target: Optional[float]) -> float:
    """缺省 45 秒，夹到 [20, 90]。"""
    value = DEFAULT_TARGET_SEC if target is None else target
    return min(max(value, MIN_TARGET_SEC), MAX_TARGET_SEC)

def build_messages(script: str, genre: Optional[str], target_sec: float) -> List[Dict[str, str]]:
    system = _render(load_prompt_text("system.txt"), {"genre": genre or DEFAULT_GENRE}).strip()
    user = _render(load_prompt_text("user.txt"), {
        "script": script[:MAX_SCRIPT_CHARS],
        "target_duration_sec": f"{target_sec:g}",
    }).strip()
    return [
        {"role": "system", "content": system},
        {"role": "user", "content": user},
    ]

# ---------- JSON 解析 ----------
# 只剥开头的 ```json 和结尾的 ```，剩下的必须整体是合法 JSON
_LEADING_FENCE = re.compile(r"^```(?:json)?\s*", re.I)
_TRAILING_FENCE = re.compile(r"```\Z")

def _strip_code_fences(s: str) -> str:
    s = _LEADING_FENCE.sub("", s or "")
    return _TRAILING_FENCE.sub("", s).strip()

def extract_message_content(outer: Any) -> str:
    """choices[0].message.content；任何一层缺失都返回空串。"""
    if not isinstance(outer, dict):
        return ""
    choices = outer.get("choices")
    if not isinstance(choices, list) or not choices:
        return ""
    message = choices[0].get("message") if isinstance(choices[0], dict) else None
    content = message.get("content") if isinstance(message, dict) else None
    return content if isinstance(content, str) else ""

def parse_plan_content(content: str) -> Dict[str, Any]:
    try:
        plan = json.loads(_strip_code_fences(content))
    except ValueError:
        raise UpstreamError("Bad JSON in content", content=content)
    # null / 数组 / 缺 shots 都走这里，原样带回解析结果
    if not isinstance(plan, dict) or not isinstance(plan.get("shots"), list):
        raise UpstreamError("Plan missing shots", plan=plan)
    return plan

# ---------- 主流程 ----------
def plan_shots(
    client: OpenAIClient,
    script: str,
    *,
    model: str,
    genre: Optional[str] = None,
    target_duration_sec: Optional[float] = None,
) -> Dict[str, Any]:
    total = clamp_target_duration(target_duration_sec)
    messages = build_messages(script, genre, total)

    r = client.chat_completion(messages, model=model, temperature=PLAN_TEMPERATURE)
    raw = r.text
    if not r.is_success:
        logger.warning("plan-shots: LLM returned HTTP %s (%d bytes)", r.status_code, len(raw))
        raise UpstreamError("LLM error", httpStatus=r.status_code, detail=raw)

    try:
        outer = json.loads(raw)
    except ValueError:
        raise UpstreamError("Bad outer JSON", detail=raw)

    plan = parse_plan_content(extract_message_content(outer))
    logger.info("plan-shots: %d shot(s), target=%gs, model=%s", len(plan["shots"]), total, model)
    return plan
