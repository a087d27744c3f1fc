"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from astro_solve.adapters.gemini_vision_client import GeminiVisionClient
from astro_solve.adapters.openai_vision_client import OpenAIVisionClient
from astro_solve.config import Settings
from astro_solve.services.analysis import PlateSolveService, VisionClient
from astro_solve.services.encoding import InMemoryPreviewStore, PreviewStore
from astro_solve.services.session import AstroSession


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    vision_client: VisionClient
    plate_solve_service: PlateSolveService
    preview_store: PreviewStore
    session: AstroSession
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    if resolved_settings.vision_provider == "openai":
        openai_client = OpenAIVisionClient.create(
            resolved_settings.api_key,
            timeout_seconds=resolved_settings.request_timeout_seconds,
        )
        vision_client: VisionClient = openai_client

        async def close_resources() -> None:
            await openai_client.close()

    else:
        vision_client = GeminiVisionClient.create(
            resolved_settings.api_key,
            timeout_seconds=resolved_settings.request_timeout_seconds,
        )

        async def close_resources() -> None:
            return None

    plate_solve_service = PlateSolveService(
        client=vision_client, model=resolved_settings.vision_model
    )
    preview_store = InMemoryPreviewStore()
    session = AstroSession(
        plate_solve_service=plate_solve_service, preview_store=preview_store
    )
    return AppContainer(
        settings=resolved_settings,
        vision_client=vision_client,
        plate_solve_service=plate_solve_service,
        preview_store=preview_store,
        session=session,
        close_resources=close_resources,
    )
