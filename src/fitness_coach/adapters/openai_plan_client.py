"""OpenAI Responses API client for plan generation."""

import json
from dataclasses import dataclass

from openai import AsyncOpenAI

from fitness_coach.services.plan_generation import PlanClient


@dataclass
class OpenAIPlanClient(PlanClient):
    """Plan client backed by the OpenAI Responses API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAIPlanClient":
        """Create an OpenAI plan client."""
        return cls(client=AsyncOpenAI(api_key=api_key))

    async def generate(  # noqa: PLR0913
        self,
        *,
        model: str,
        system_prompt: str,
        prompt: str,
        schema: dict[str, object],
        temperature: float,
        max_output_tokens: int,
    ) -> dict[str, object]:
        """Call OpenAI Responses API with structured outputs."""
        response = await self.client.responses.create(
            model=model,
            input=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": prompt},
            ],
            text={
                "format": {
                    "type": "json_schema",
                    "name": "fitness_plan",
                    # strict mode requires every property to be required
                    "strict": False,
                    "schema": schema,
                }
            },
            temperature=temperature,
            max_output_tokens=max_output_tokens,
        )
        output_text = response.output_text
        if not output_text:
            raise RuntimeError("OpenAI returned an empty response")
        return json.loads(output_text)

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self.client.close()
