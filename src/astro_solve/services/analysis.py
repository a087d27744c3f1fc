"""Plate-solve analysis using vision LLMs."""

import json
import logging
from dataclasses import dataclass
from typing import Protocol

from astro_solve.domain.plate_solve import ImagePayload, PlateSolveResult
from astro_solve.errors import (
    EmptyResponseError,
    MalformedResponseError,
    SchemaMismatchError,
    ServiceError,
)
from astro_solve.services.validation import validate_plate_solve

_logger = logging.getLogger(__name__)

PLATE_SOLVE_PROMPT = """
You are an expert astronomer and astrophotographer. Your task is to perform a \
plate solve on the provided astronomical image. Analyze the star patterns, \
constellations, and any deep-sky objects visible.

Based on your analysis, provide the following information in a JSON format. \
Do not include any introductory text, comments, or markdown formatting like \
```json. Your entire response must be only the raw JSON object.

The JSON object must have the following structure:
{
  "ra": "string",
  "dec": "string",
  "fov": "string",
  "constellation": "string",
  "objects": ["string"],
  "summary": "string"
}

Example values:
- ra: "05h 34m 31s"
- dec: "+22° 00' 52\\""
- fov: "2.5° x 1.8°"
- constellation: "Orion"
- objects: ["Orion Nebula (M42)", "Horsehead Nebula (Barnard 33)"]
- summary: "A detailed description of the objects in the image."
""".strip()


class VisionClient(Protocol):
    """Interface for LLM vision requests returning raw reply text."""

    async def generate(
        self,
        *,
        model: str,
        prompt: str,
        image_data: str,
        media_type: str,
    ) -> str | None:
        """Send an inline base64 image with a prompt and return the reply text."""


@dataclass
class PlateSolveService:
    """Service that sends plate-solve prompts and validates replies."""

    client: VisionClient
    model: str
    prompt: str = PLATE_SOLVE_PROMPT

    async def analyze(self, payload: ImagePayload) -> PlateSolveResult:
        """Plate-solve an encoded image via the configured client."""
        try:
            reply = await self.client.generate(
                model=self.model,
                prompt=self.prompt,
                image_data=payload.encoded_data,
                media_type=payload.media_type,
            )
        except Exception as exc:
            _logger.exception("Vision request failed: model=%s", self.model)
            raise ServiceError(detail=type(exc).__name__) from exc

        if not reply or not reply.strip():
            _logger.warning("Vision reply empty: model=%s", self.model)
            raise EmptyResponseError
        try:
            parsed = json.loads(reply)
        except json.JSONDecodeError as exc:
            _logger.warning("Vision reply is not JSON: %s", exc.msg)
            raise MalformedResponseError(detail=exc.msg) from exc
        try:
            result = validate_plate_solve(parsed)
        except SchemaMismatchError as exc:
            _logger.warning("Vision reply failed validation: %s", exc.detail)
            raise
        _logger.info(
            "Plate solved: constellation=%s objects=%s",
            result.constellation,
            len(result.objects),
        )
        return result
