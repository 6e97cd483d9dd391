import base64
import io
import json
from typing import Any

import httpx
import pytest
from PIL import Image

from design_api.agents.design_agent import get_provider_client
from design_api.main import app
from tests import TEST_PROVIDER_KEY

MOCK_REPLY = {
    "tokens": {"colors": [{"name": "Red", "hex": "#FF0000"}]},
    "prompt": "Use a red background...",
}


def make_image_bytes(fmt: str = "PNG", size: tuple[int, int] = (10, 10), color: str = "red") -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, color).save(buf, format=fmt)
    return buf.getvalue()


def make_data_url(fmt: str = "PNG", mime: str | None = None, **kwargs) -> str:
    """Build a data URL holding a real image encoded by Pillow."""
    mime = mime or f"image/{fmt.lower()}"
    payload = base64.b64encode(make_image_bytes(fmt, **kwargs)).decode("ascii")
    return f"data:{mime};base64,{payload}"


def completion(content: Any) -> dict:
    """Wrap content the way a chat-completion response does."""
    return {
        "id": "cmpl-test",
        "model": "sonar-pro",
        "choices": [{"index": 0, "message": {"role": "assistant", "content": content}}],
    }


class ProviderStub:
    """Stands in for the inference provider; records every request it receives."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.body: Any = completion(json.dumps(MOCK_REPLY))
        self.error: Exception | None = None

    def reply(self, content: Any = None, *, status_code: int = 200, body: Any = None) -> None:
        self.status_code = status_code
        self.body = body if body is not None else completion(content)

    def fail(self, error: Exception) -> None:
        self.error = error

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def last_payload(self) -> dict:
        return json.loads(self.requests[-1].content)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if isinstance(self.body, (dict, list)):
            return httpx.Response(self.status_code, json=self.body)
        return httpx.Response(self.status_code, text=self.body)


@pytest.fixture(autouse=True)
def provider():
    """Route every outbound provider call to a ProviderStub."""
    stub = ProviderStub()

    async def _client():
        async with httpx.AsyncClient(transport=httpx.MockTransport(stub.handler)) as client:
            yield client

    app.dependency_overrides[get_provider_client] = _client
    yield stub
    app.dependency_overrides.pop(get_provider_client, None)


@pytest.fixture(autouse=True)
def _set_provider_key(monkeypatch):
    """Patch the settings object provider key for all tests."""
    from design_api.config import settings

    monkeypatch.setattr(settings, "perplexity_api_key", TEST_PROVIDER_KEY)


@pytest.fixture
def png_data_url() -> str:
    return make_data_url("PNG")
