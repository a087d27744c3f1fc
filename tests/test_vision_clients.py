"""Tests for vision client adapters."""

import asyncio
import base64
import json
from types import SimpleNamespace

from astro_solve.adapters.gemini_vision_client import GeminiVisionClient
from astro_solve.adapters.openai_vision_client import OpenAIVisionClient
from tests.conftest import ORION_RESULT, PNG_BYTES

IMAGE_DATA = base64.b64encode(PNG_BYTES).decode("utf-8")


class _FakeResponses:
    def __init__(self) -> None:
        self.last_payload: dict[str, object] | None = None

    async def create(self, **kwargs):  # type: ignore[no-untyped-def]
        self.last_payload = kwargs
        return type("Resp", (), {"output_text": json.dumps(ORION_RESULT)})()


class _FakeOpenAI:
    def __init__(self) -> None:
        self.responses = _FakeResponses()


class _FakeGeminiModels:
    def __init__(self, text: str | None) -> None:
        self.text = text
        self.last_payload: dict[str, object] | None = None

    async def generate_content(self, **kwargs):  # type: ignore[no-untyped-def]
        self.last_payload = kwargs
        return SimpleNamespace(text=self.text)


def test_openai_vision_client_returns_output_text() -> None:
    fake = _FakeOpenAI()
    client = OpenAIVisionClient(client=fake)

    reply = asyncio.run(
        client.generate(
            model="gpt-5.2",
            prompt="Plate solve",
            image_data=IMAGE_DATA,
            media_type="image/png",
        )
    )

    assert json.loads(reply or "") == ORION_RESULT
    payload = fake.responses.last_payload
    assert payload is not None
    assert payload["model"] == "gpt-5.2"
    assert payload["text"] == {"format": {"type": "json_object"}}
    content = payload["input"][0]["content"]
    assert content[0]["image_url"] == f"data:image/png;base64,{IMAGE_DATA}"
    assert content[1] == {"type": "input_text", "text": "Plate solve"}


def test_gemini_vision_client_sends_inline_image_and_json_hint() -> None:
    models = _FakeGeminiModels(text=json.dumps(ORION_RESULT))
    fake = SimpleNamespace(aio=SimpleNamespace(models=models))
    client = GeminiVisionClient(client=fake)

    reply = asyncio.run(
        client.generate(
            model="gemini-3-flash-preview",
            prompt="Plate solve",
            image_data=IMAGE_DATA,
            media_type="image/png",
        )
    )

    assert json.loads(reply or "") == ORION_RESULT
    payload = models.last_payload
    assert payload is not None
    assert payload["model"] == "gemini-3-flash-preview"
    assert payload["config"].response_mime_type == "application/json"
    image_part, text_part = payload["contents"][0].parts
    assert image_part.inline_data.data == PNG_BYTES
    assert image_part.inline_data.mime_type == "image/png"
    assert text_part.text == "Plate solve"


def test_gemini_vision_client_passes_through_empty_text() -> None:
    models = _FakeGeminiModels(text=None)
    fake = SimpleNamespace(aio=SimpleNamespace(models=models))
    client = GeminiVisionClient(client=fake)

    reply = asyncio.run(
        client.generate(
            model="gemini-3-flash-preview",
            prompt="Plate solve",
            image_data=IMAGE_DATA,
            media_type="image/png",
        )
    )

    assert reply is None
