# -*- coding: utf-8 -*-
"""
OpenAI REST 最小封装（chat/completions + images/generations）
- 直接走 HTTP，不用官方 SDK：需要把上游的状态码和原始响应体原样透传给前端
- 不做重试/退避；返回 httpx.Response，由调用方判断 is_success 并整形
- httpx.Client 由外部注入（进程内共享连接池，测试时换成 MockTransport）
"""
from typing import Any, Dict, List, Optional

import httpx

DEFAULT_BASE_URL = "https://api.openai.com/v1"


class OpenAIClient:
    def __init__(
        self,
        http: httpx.Client,
        api_key: Optional[str] = None,
        organization: Optional[str] = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: Optional[float] = None,
    ):
        self.http = http
        self.api_key = (api_key or "").strip() or None
        self.organization = (organization or "").strip() or None
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @property
    def configured(self) -> bool:
        return self.api_key is not None

    def _headers(self, with_org: bool = False) -> Dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        if with_org and self.organization:
            headers["OpenAI-Organization"] = self.organization
        return headers

    def _post(self, path: str, payload: Dict[str, Any], with_org: bool = False) -> httpx.Response:
        kwargs: Dict[str, Any] = {"json": payload, "headers": self._headers(with_org)}
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout
        return self.http.post(f"{self.base_url}{path}", **kwargs)

    # ---------- Chat ----------
    def chat_completion(
        self,
        messages: List[Dict[str, str]],
        *,
        model: str,
        temperature: float = 0.4,
    ) -> httpx.Response:
        """
        messages 例子：
        [
          {"role": "system", "content": "You are a trailer editor..."},
          {"role": "user", "content": "Script: ..."},
        ]
        """
        payload = {"model": model, "temperature": temperature, "messages": messages}
        return self._post("/chat/completions", payload, with_org=True)

    # ---------- Images ----------
    def generate_image(self, prompt: str, *, model: str, size: str) -> httpx.Response:
        payload = {"model": model, "prompt": prompt, "size": size}
        return self._post("/images/generations", payload)
