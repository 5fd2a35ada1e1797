"""Perplexity chat completions client."""

import os
from typing import Optional, List, Dict, Any

import httpx
from dotenv import load_dotenv

from config import (
    PROVIDERS, PERPLEXITY_API_URL, PERPLEXITY_TIMEOUT,
    CHAT_TEMPERATURE, CHAT_TOP_P, CHAT_MAX_TOKENS
)
from services.errors import ProviderError
from services.mock_providers import is_mock_mode, mock_perplexity_completion

load_dotenv()


class PerplexityClient:
    """Wrapper for the Perplexity OpenAI-style chat API."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        provider = PROVIDERS["perplexity"]
        self.api_key = api_key or os.getenv(provider.api_key_env)
        self.model = model or provider.model
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        """Whether requests can be made (real key or mock mode)."""
        return bool(self.api_key) or is_mock_mode()

    def build_payload(self, messages: List[Dict[str, Any]]) -> Dict[str, Any]:
        """Build the request body for a Q&A completion."""
        return {
            "model": self.model,
            "messages": messages,
            "temperature": CHAT_TEMPERATURE,
            "top_p": CHAT_TOP_P,
            "max_tokens": CHAT_MAX_TOKENS,
            "return_images": False,
            "return_related_questions": True,
            "frequency_penalty": 1,
            "presence_penalty": 0,
        }

    async def complete(self, messages: List[Dict[str, Any]]) -> Dict[str, Any]:
        """Run a chat completion.

        Returns {"answer": str, "related_questions": [str]}.
        Raises ProviderError on a missing key, a non-2xx status or an
        empty answer.
        """
        if is_mock_mode():
            return mock_perplexity_completion(messages)

        if not self.api_key:
            raise ProviderError("Perplexity API key not configured", provider="perplexity")

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        try:
            async with httpx.AsyncClient(timeout=PERPLEXITY_TIMEOUT, transport=self._transport) as client:
                response = await client.post(PERPLEXITY_API_URL, headers=headers, json=self.build_payload(messages))
        except httpx.HTTPError as e:
            raise ProviderError(f"Perplexity request failed: {str(e)}", provider="perplexity") from e

        if response.status_code != 200:
            raise ProviderError(
                f"Perplexity API error: {response.status_code}",
                provider="perplexity",
                status_code=response.status_code
            )

        try:
            data = response.json()
        except ValueError as e:
            raise ProviderError("Perplexity API returned invalid JSON", provider="perplexity") from e

        if not isinstance(data, dict):
            raise ProviderError("Perplexity API returned invalid JSON", provider="perplexity")
        choices = data.get("choices") or [{}]
        if not isinstance(choices, list) or not isinstance(choices[0], dict):
            raise ProviderError("Perplexity API returned invalid JSON", provider="perplexity")

        message = choices[0].get("message") or {}
        answer = (message.get("content") if isinstance(message, dict) else None) or ""
        if not answer:
            raise ProviderError("Perplexity API returned no answer", provider="perplexity")

        return {
            "answer": answer,
            "related_questions": data.get("related_questions") or [],
        }

    def get_provider_info(self) -> Dict[str, Any]:
        """Return provider metadata for status endpoints."""
        provider = PROVIDERS["perplexity"]
        return {
            "id": provider.id,
            "name": provider.name,
            "model": self.model,
            "configured": self.is_configured,
            "description": provider.description
        }
