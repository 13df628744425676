"""OpenAI Responses API client for structured estimations."""

import json
from dataclasses import dataclass

from openai import AsyncOpenAI

from ingredient_catalog.services.category import CategoryDetectionClient
from ingredient_catalog.services.produce import ProduceEstimationClient


@dataclass
class OpenAIStructuredClient(ProduceEstimationClient, CategoryDetectionClient):
    """Produce weight and category estimation backed by OpenAI structured outputs."""

    client: AsyncOpenAI

    @classmethod
    def create(
        cls, api_key: str, timeout_seconds: float = 20.0
    ) -> "OpenAIStructuredClient":
        """Create an OpenAI structured output client."""
        return cls(client=AsyncOpenAI(api_key=api_key, timeout=timeout_seconds))

    async def estimate(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        schema: dict[str, object],
        prompt: str,
        schema_name: str = "produce_estimation",
    ) -> dict[str, object]:
        """Call the Responses API and decode its JSON output."""
        request_payload: dict[str, object] = {
            "model": model,
            "input": [
                {
                    "role": "user",
                    "content": [{"type": "input_text", "text": prompt}],
                }
            ],
            "text": {
                "format": {
                    "type": "json_schema",
                    "name": schema_name,
                    "strict": True,
                    "schema": schema,
                }
            },
            "store": store,
        }
        if reasoning_effort:
            request_payload["reasoning"] = {"effort": reasoning_effort}

        response = await self.client.responses.create(**request_payload)
        output_text = response.output_text
        if not output_text:
            raise RuntimeError("OpenAI returned an empty response")
        return json.loads(output_text)

    async def close(self) -> None:
        await self.client.close()
