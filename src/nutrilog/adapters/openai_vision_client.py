"""OpenAI Responses API client for food analysis."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from openai import APIError, AsyncOpenAI, RateLimitError

from nutrilog.config import ApiKeyRing
from nutrilog.domain.errors import AnalysisError, AnalysisRateLimitedError
from nutrilog.services.vision import VisionClient

logger = logging.getLogger(__name__)


def _default_client(api_key: str) -> AsyncOpenAI:
    return AsyncOpenAI(api_key=api_key)


@dataclass
class OpenAIVisionClient(VisionClient):
    """Vision client backed by OpenAI Responses API.

    Holds one ``AsyncOpenAI`` per key. A rate-limited key rotates the ring and
    the request is retried with the next key until every key has been tried.
    """

    keys: ApiKeyRing
    client_factory: Callable[[str], AsyncOpenAI] = field(default=_default_client)
    _clients: dict[str, AsyncOpenAI] = field(default_factory=dict, init=False)

    @classmethod
    def create(cls, keys: ApiKeyRing) -> "OpenAIVisionClient":
        """Create an OpenAI vision client for a key ring."""
        return cls(keys=keys)

    async def analyze(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        prompt: str,
        schema: dict[str, object],
        image_data_url: str | None = None,
    ) -> str:
        """Call OpenAI Responses API with structured outputs."""
        content: list[dict[str, object]] = [{"type": "input_text", "text": prompt}]
        if image_data_url is not None:
            content.append({"type": "input_image", "image_url": image_data_url})
        request_payload: dict[str, object] = {
            "model": model,
            "input": [{"role": "user", "content": content}],
            "text": {
                "format": {
                    "type": "json_schema",
                    "name": "food_analysis",
                    "strict": True,
                    "schema": schema,
                }
            },
            "store": store,
        }
        if reasoning_effort:
            request_payload["reasoning"] = {"effort": reasoning_effort}

        for _ in range(len(self.keys)):
            client = self._client_for(self.keys.current())
            try:
                response = await client.responses.create(**request_payload)
            except RateLimitError:
                logger.warning(
                    "OpenAI key rate limited, rotating",
                    extra={"cursor": self.keys.cursor},
                )
                self.keys.rotate()
                continue
            except APIError as exc:
                raise AnalysisError(f"Food analysis failed: {exc.message}") from exc
            if not response.output_text:
                raise AnalysisError("OpenAI returned an empty response")
            return response.output_text
        raise AnalysisRateLimitedError(
            "All analysis API keys are rate limited. Please try again later."
        )

    async def close(self) -> None:
        for client in self._clients.values():
            await client.close()
        self._clients.clear()

    def _client_for(self, api_key: str) -> AsyncOpenAI:
        if api_key not in self._clients:
            self._clients[api_key] = self.client_factory(api_key)
        return self._clients[api_key]
