"""OpenRouter LLM provider (OpenAI-compatible chat completions)."""

import openai

from ..exceptions import LLMError
from .base import LLMProvider

OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"


class OpenRouterProvider(LLMProvider):
    def __init__(self, api_key: str, model: str, timeout: float = 20.0):
        # One request per classification; no client-side retries
        self._client = openai.AsyncOpenAI(
            api_key=api_key,
            base_url=OPENROUTER_BASE_URL,
            timeout=timeout,
            max_retries=0,
        )
        self._model = model

    @property
    def model(self) -> str:
        return self._model

    async def generate(self, system_prompt: str, user_prompt: str) -> str:
        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]
        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=messages,
                temperature=0,
            )
        except openai.APIError as e:
            raise LLMError(f"OpenRouter API error: {e}") from e

        if not response.choices:
            raise LLMError("OpenRouter returned no choices")
        return response.choices[0].message.content or ""
