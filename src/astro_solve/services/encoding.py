"""Image encoding and preview handles."""

import base64
from dataclasses import dataclass
from typing import Protocol
from uuid import uuid4

from astro_solve.domain.images import ImageFile
from astro_solve.domain.plate_solve import ImagePayload
from astro_solve.errors import ImageReadError, InvalidImageError

_IMAGE_PREFIX = "image/"


def encode_image(image: ImageFile) -> ImagePayload:
    """Validate the media type and base64-encode the image content."""
    if not image.media_type.startswith(_IMAGE_PREFIX):
        raise InvalidImageError(detail=f"media type {image.media_type!r}")
    try:
        content = image.read_bytes()
    except OSError as exc:
        raise ImageReadError(detail=str(exc)) from exc
    data_url = _to_data_url(content, image.media_type)
    return ImagePayload(
        encoded_data=_strip_data_url(data_url), media_type=image.media_type
    )


def _to_data_url(image_bytes: bytes, media_type: str) -> str:
    """Convert bytes to a base64 data URL."""
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{media_type};base64,{encoded}"


def _strip_data_url(value: str) -> str:
    """Drop a leading ``data:<mime>;base64,`` envelope, if any."""
    if value.startswith("data:") and "," in value:
        return value.split(",", 1)[1]
    return value


class PreviewStore(Protocol):
    """Holds display previews for selected images."""

    def acquire(self, image: ImageFile) -> str:
        """Register a preview and return its handle."""

    def release(self, preview_id: str) -> None:
        """Release a preview handle."""

    def get(self, preview_id: str) -> tuple[bytes, str] | None:
        """Return preview bytes and media type, if the handle is live."""


@dataclass
class InMemoryPreviewStore(PreviewStore):
    """Preview store keeping image bytes in memory until released."""

    _previews: dict[str, tuple[bytes, str]]

    def __init__(self) -> None:
        self._previews = {}

    def acquire(self, image: ImageFile) -> str:
        """Store the image bytes under a new ``blob:`` handle."""
        try:
            content = image.read_bytes()
        except OSError as exc:
            raise ImageReadError(detail=str(exc)) from exc
        preview_id = f"blob:{uuid4()}"
        self._previews[preview_id] = (content, image.media_type)
        return preview_id

    def release(self, preview_id: str) -> None:
        """Forget the bytes behind a handle."""
        self._previews.pop(preview_id, None)

    def get(self, preview_id: str) -> tuple[bytes, str] | None:
        """Return the stored preview, if still held."""
        return self._previews.get(preview_id)

    def __len__(self) -> int:
        return len(self._previews)
