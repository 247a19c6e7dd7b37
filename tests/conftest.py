# tests/conftest.py
import json
import os

# settings 在导入时实例化，必须先于 app 导入设置环境变量
os.environ["CORS_ORIGINS"] = "http://localhost:3000,https://studio.example.com"
os.environ["OPENAI_API_KEY"] = "test-openai-key"
os.environ["ELEVENLABS_API_KEY"] = "test-elevenlabs-key"
os.environ.pop("OPENAI_ORG_ID", None)

import httpx
import pytest
from fastapi.testclient import TestClient

from services.api.app.api.v1.deps import get_http_client
from services.api.app.main import app


@pytest.fixture
def client():
    # 未处理异常要走 catch-all 处理器返回 500，而不是在测试里直接抛出
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def upstream():
    """
    把共享 httpx.Client 换成 MockTransport。
    用法：calls = upstream(handler)；handler(request) -> httpx.Response
    """
    calls = []

    def install(handler):
        def _record(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return handler(request)

        mock = httpx.Client(transport=httpx.MockTransport(_record))
        app.dependency_overrides[get_http_client] = lambda: mock
        return calls

    return install


def chat_response(content: str, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, json={"choices": [{"message": {"role": "assistant", "content": content}}]})


def request_json(request: httpx.Request):
    return json.loads(request.content)
