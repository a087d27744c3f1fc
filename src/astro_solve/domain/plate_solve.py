"""Models for plate-solve requests and results."""

from dataclasses import dataclass
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field


@dataclass(frozen=True)
class ImagePayload:
    """Base64 image data ready to embed in a vision request."""

    encoded_data: str
    media_type: str


def _freeze_list(value: object) -> object:
    """Turn a JSON array into a tuple; anything else is left to strict checks."""
    if isinstance(value, list):
        return tuple(value)
    return value


class PlateSolveResult(BaseModel):
    """Validated plate-solve answer from the vision model."""

    model_config = ConfigDict(strict=True, frozen=True, extra="ignore")

    right_ascension: str = Field(alias="ra", min_length=1)
    declination: str = Field(alias="dec", min_length=1)
    field_of_view: str = Field(alias="fov", min_length=1)
    constellation: str = Field(min_length=1)
    objects: Annotated[tuple[str, ...], BeforeValidator(_freeze_list)]
    summary: str = Field(min_length=1)
