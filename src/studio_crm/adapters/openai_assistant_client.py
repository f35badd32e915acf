"""OpenAI Responses API client for text generation."""

import logging
from dataclasses import dataclass

import httpx
import openai
from openai import AsyncOpenAI

from studio_crm.errors import UpstreamError
from studio_crm.services.messaging import AssistantClient

logger = logging.getLogger(__name__)


@dataclass
class OpenAIAssistantClient(AssistantClient):
    """Assistant client backed by the OpenAI Responses API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str, timeout: float = 60.0) -> "OpenAIAssistantClient":
        """Create an OpenAI assistant client."""
        return cls(client=AsyncOpenAI(api_key=api_key, timeout=timeout))

    async def complete(self, *, model: str, instructions: str, prompt: str) -> str:
        """Call the Responses API and return its text output."""
        try:
            response = await self.client.responses.create(
                model=model,
                instructions=instructions,
                input=prompt,
            )
        except (openai.OpenAIError, httpx.HTTPError) as exc:
            logger.warning("OpenAI request failed: %s", type(exc).__name__)
            raise UpstreamError("The assistant service is unavailable") from exc
        output_text = response.output_text
        if not output_text:
            raise UpstreamError("The assistant returned an empty response")
        return output_text

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self.client.close()
