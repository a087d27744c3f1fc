"""Selected image files."""

import mimetypes
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ImageFile:
    """A user-selected file with its declared media type.

    Content is either held in memory (uploads) or read lazily from ``path``.
    """

    name: str
    media_type: str
    content: bytes | None = None
    path: Path | None = None

    @classmethod
    def from_path(cls, path: Path | str, media_type: str | None = None) -> "ImageFile":
        """Reference a file on disk, guessing its media type from the name."""
        resolved = Path(path)
        if media_type is None:
            media_type, _ = mimetypes.guess_type(resolved.name)
        return cls(name=resolved.name, media_type=media_type or "", path=resolved)

    def read_bytes(self) -> bytes:
        """Return the file content."""
        if self.content is not None:
            return self.content
        if self.path is None:
            raise OSError(f"No content available for {self.name!r}")
        return self.path.read_bytes()
