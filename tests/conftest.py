"""Shared test fixtures."""

import asyncio
import json
from dataclasses import dataclass, field

import pytest

from astro_solve.config import Settings
from astro_solve.containers import AppContainer
from astro_solve.domain.images import ImageFile
from astro_solve.services.analysis import PlateSolveService, VisionClient
from astro_solve.services.encoding import InMemoryPreviewStore
from astro_solve.services.session import AstroSession

ORION_RESULT: dict[str, object] = {
    "ra": "05h 34m 31s",
    "dec": "+22° 00' 52\"",
    "fov": "2.5° x 1.8°",
    "constellation": "Orion",
    "objects": ["M42"],
    "summary": "test",
}

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00\x01\x02starfield"


@dataclass
class FakeVisionClient(VisionClient):
    """Fake vision client returning a fixed reply and recording calls."""

    reply: str | None = field(default_factory=lambda: json.dumps(ORION_RESULT))
    calls: list[dict[str, str]] = field(default_factory=list)

    async def generate(
        self,
        *,
        model: str,
        prompt: str,
        image_data: str,
        media_type: str,
    ) -> str | None:
        self.calls.append(
            {
                "model": model,
                "prompt": prompt,
                "image_data": image_data,
                "media_type": media_type,
            }
        )
        return self.reply


@dataclass
class FailingVisionClient(VisionClient):
    """Fake vision client that raises a transport error."""

    error: Exception = field(
        default_factory=lambda: ConnectionError("connection reset by peer")
    )

    async def generate(
        self,
        *,
        model: str,
        prompt: str,
        image_data: str,
        media_type: str,
    ) -> str | None:
        raise self.error


@dataclass
class GatedVisionClient(FakeVisionClient):
    """Fake vision client that waits until released before replying."""

    gate: asyncio.Event = field(default_factory=asyncio.Event)

    async def generate(
        self,
        *,
        model: str,
        prompt: str,
        image_data: str,
        media_type: str,
    ) -> str | None:
        reply = await super().generate(
            model=model, prompt=prompt, image_data=image_data, media_type=media_type
        )
        await self.gate.wait()
        return reply


def png_file(name: str = "orion.png", content: bytes = PNG_BYTES) -> ImageFile:
    return ImageFile(name=name, media_type="image/png", content=content)


def make_session(client: VisionClient) -> AstroSession:
    service = PlateSolveService(client=client, model="gemini-3-flash-preview")
    return AstroSession(
        plate_solve_service=service, preview_store=InMemoryPreviewStore()
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(api_key="test-key", _env_file=None)


@pytest.fixture
def vision_client() -> FakeVisionClient:
    return FakeVisionClient()


@pytest.fixture
def container(settings: Settings, vision_client: FakeVisionClient) -> AppContainer:
    plate_solve_service = PlateSolveService(
        client=vision_client, model=settings.vision_model
    )
    preview_store = InMemoryPreviewStore()
    session = AstroSession(
        plate_solve_service=plate_solve_service, preview_store=preview_store
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        vision_client=vision_client,
        plate_solve_service=plate_solve_service,
        preview_store=preview_store,
        session=session,
        close_resources=close_resources,
    )
