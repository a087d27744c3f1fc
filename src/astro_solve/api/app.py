"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, Response, status

from astro_solve.api.models import SessionView
from astro_solve.app_logging import configure_logging
from astro_solve.containers import AppContainer
from astro_solve.domain.images import ImageFile


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Vision provider: %s model=%s",
            container.settings.vision_provider,
            container.settings.vision_model,
        )
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/session")
    async def get_session(request: Request) -> SessionView:
        """Return the current session state."""
        state_container: AppContainer = request.app.state.container
        return SessionView.from_snapshot(state_container.session.snapshot())

    @app.put("/session/image")
    async def select_image(request: Request, filename: str = "upload") -> SessionView:
        """Select an image from the raw request body."""
        state_container: AppContainer = request.app.state.container
        content = await request.body()
        media_type = request.headers.get("content-type", "")
        image = ImageFile(
            name=filename,
            media_type=media_type.split(";", 1)[0].strip(),
            content=content,
        )
        snapshot = state_container.session.select_image(image if content else None)
        return SessionView.from_snapshot(snapshot)

    @app.delete("/session/image")
    async def remove_image(request: Request) -> SessionView:
        """Remove the selected image."""
        state_container: AppContainer = request.app.state.container
        return SessionView.from_snapshot(state_container.session.remove_image())

    @app.post("/session/solve")
    async def solve(request: Request) -> SessionView:
        """Plate-solve the selected image."""
        state_container: AppContainer = request.app.state.container
        snapshot = await state_container.session.solve()
        return SessionView.from_snapshot(snapshot)

    @app.get("/session/preview/{preview_id}")
    async def preview(preview_id: str, request: Request) -> Response:
        """Serve the preview bytes of the selected image."""
        state_container: AppContainer = request.app.state.container
        stored = state_container.preview_store.get(preview_id)
        if stored is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        content, media_type = stored
        return Response(content=content, media_type=media_type)

    return app
