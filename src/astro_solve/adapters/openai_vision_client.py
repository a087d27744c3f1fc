"""OpenAI Responses API client for plate-solve requests."""

from dataclasses import dataclass

from openai import AsyncOpenAI

from astro_solve.services.analysis import VisionClient


@dataclass
class OpenAIVisionClient(VisionClient):
    """Vision client backed by OpenAI Responses API."""

    client: AsyncOpenAI

    @classmethod
    def create(
        cls, api_key: str, timeout_seconds: float | None = None
    ) -> "OpenAIVisionClient":
        """Create an OpenAI vision client."""
        if timeout_seconds:
            return cls(client=AsyncOpenAI(api_key=api_key, timeout=timeout_seconds))
        return cls(client=AsyncOpenAI(api_key=api_key))

    async def generate(
        self,
        *,
        model: str,
        prompt: str,
        image_data: str,
        media_type: str,
    ) -> str | None:
        """Call OpenAI Responses API in JSON mode."""
        response = await self.client.responses.create(
            model=model,
            input=[
                {
                    "role": "user",
                    "content": [
                        {
                            "type": "input_image",
                            "image_url": f"data:{media_type};base64,{image_data}",
                        },
                        {"type": "input_text", "text": prompt},
                    ],
                }
            ],
            text={"format": {"type": "json_object"}},
            store=False,
        )
        return response.output_text

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()
