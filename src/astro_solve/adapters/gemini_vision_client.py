"""Google Gemini client for plate-solve requests."""

import base64
from dataclasses import dataclass

from google import genai
from google.genai import types

from astro_solve.services.analysis import VisionClient


@dataclass
class GeminiVisionClient(VisionClient):
    """Vision client backed by the Gemini generate-content API."""

    client: genai.Client

    @classmethod
    def create(
        cls, api_key: str, timeout_seconds: float | None = None
    ) -> "GeminiVisionClient":
        """Create a Gemini vision client."""
        http_options = None
        if timeout_seconds:
            http_options = types.HttpOptions(timeout=int(timeout_seconds * 1000))
        return cls(client=genai.Client(api_key=api_key, http_options=http_options))

    async def generate(
        self,
        *,
        model: str,
        prompt: str,
        image_data: str,
        media_type: str,
    ) -> str | None:
        """Send the inline image and prompt, asking for a JSON reply."""
        response = await self.client.aio.models.generate_content(
            model=model,
            contents=[
                types.Content(
                    role="user",
                    parts=[
                        types.Part.from_bytes(
                            data=base64.b64decode(image_data), mime_type=media_type
                        ),
                        types.Part.from_text(text=prompt),
                    ],
                )
            ],
            config=types.GenerateContentConfig(
                response_mime_type="application/json"
            ),
        )
        return response.text
