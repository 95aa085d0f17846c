"""Shared fixtures: tiny PNGs and a fake Gemini client."""

from __future__ import annotations

import asyncio
import base64
import io
from typing import Any, Callable, Dict, List

import pytest
from google.genai import types
from PIL import Image

from headshot_generation.variations import VARIATIONS


def make_png(color: tuple[int, int, int] = (255, 0, 0), size: int = 10) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (size, size), color).save(buf, format="PNG")
    return buf.getvalue()


def image_response(data: bytes, mime_type: str = "image/png") -> types.GenerateContentResponse:
    return types.GenerateContentResponse(
        candidates=[
            types.Candidate(
                content=types.Content(
                    role="model",
                    parts=[types.Part.from_bytes(data=data, mime_type=mime_type)],
                )
            )
        ]
    )


def text_response(text: str = "I can't help with that.") -> types.GenerateContentResponse:
    return types.GenerateContentResponse(
        candidates=[
            types.Candidate(content=types.Content(role="model", parts=[types.Part.from_text(text=text)]))
        ]
    )


def variation_index(contents: List[types.Content]) -> int:
    text = contents[0].parts[1].text
    for idx, block in enumerate(VARIATIONS):
        if text.endswith(block):
            return idx
    raise AssertionError("prompt does not end with a variation block")


class FakeModels:
    def __init__(self, responder: Callable[[int], Any], delays: Dict[int, float] | None = None) -> None:
        self.responder = responder
        self.delays = delays or {}
        self.calls: List[Dict[str, Any]] = []
        self.completed: List[int] = []

    async def generate_content(self, *, model, contents, config):
        index = variation_index(contents)
        self.calls.append({"model": model, "contents": contents, "config": config, "index": index})
        await asyncio.sleep(self.delays.get(index, 0))
        result = self.responder(index)
        if isinstance(result, BaseException):
            raise result
        self.completed.append(index)
        return result


class FakeAio:
    def __init__(self, models: FakeModels) -> None:
        self.models = models


class FakeClient:
    def __init__(self, responder: Callable[[int], Any], delays: Dict[int, float] | None = None) -> None:
        self.models = FakeModels(responder, delays)
        self.aio = FakeAio(self.models)

    @property
    def calls(self) -> List[Dict[str, Any]]:
        return self.models.calls


@pytest.fixture
def red_png() -> bytes:
    return make_png()


@pytest.fixture
def red_png_data_url(red_png: bytes) -> str:
    return "data:image/png;base64," + base64.b64encode(red_png).decode("ascii")


@pytest.fixture
def red_png_file(tmp_path, red_png):
    path = tmp_path / "me.png"
    path.write_bytes(red_png)
    return path


@pytest.fixture
def no_env_keys(monkeypatch, tmp_path):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
    monkeypatch.setenv("HEADSHOTS_KEY_FILE", str(tmp_path / "missing.env"))


@pytest.fixture
def png_factory():
    return make_png


@pytest.fixture
def responses():
    """Builders for fake generate_content responses."""

    class _Responses:
        image = staticmethod(image_response)
        text = staticmethod(text_response)

        @staticmethod
        def empty() -> types.GenerateContentResponse:
            return types.GenerateContentResponse(candidates=[])

    return _Responses


@pytest.fixture
def fake_client():
    return FakeClient
