"""Google Gemini API client wrapper."""

import os
from typing import Optional, List, Dict, Any

from google import genai
from google.genai import errors as genai_errors
from google.genai import types
from dotenv import load_dotenv

from config import (
    PROVIDERS, DEFAULT_GENERATION, GenerationConfig,
    SAFETY_CATEGORIES, SAFETY_THRESHOLD, NO_CONTENT_GENERATED
)
from services.errors import ProviderError
from services.mock_providers import is_mock_mode, mock_gemini_completion

load_dotenv()


class GeminiClient:
    """Wrapper for the Gemini generateContent API."""

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        provider = PROVIDERS["gemini"]
        api_key = api_key or os.getenv(provider.api_key_env)
        self.model = model or provider.model
        # Use the async surface of the SDK so FastAPI handlers never block
        self.client = genai.Client(api_key=api_key) if api_key else None

    @property
    def is_configured(self) -> bool:
        """Whether requests can be made (real key or mock mode)."""
        return self.client is not None or is_mock_mode()

    @staticmethod
    def build_config(
        generation: GenerationConfig,
        with_safety: bool = True
    ) -> types.GenerateContentConfig:
        """Build the request configuration for a generation call."""
        params: Dict[str, Any] = {
            "temperature": generation.temperature,
            "top_k": generation.top_k,
            "top_p": generation.top_p,
            "max_output_tokens": generation.max_output_tokens,
        }

        if with_safety:
            params["safety_settings"] = [
                types.SafetySetting(category=category, threshold=SAFETY_THRESHOLD)
                for category in SAFETY_CATEGORIES
            ]

        return types.GenerateContentConfig(**params)

    async def generate(
        self,
        prompt: str,
        generation: Optional[GenerationConfig] = None,
        with_safety: bool = True,
        transformation_type: Optional[str] = None,
        empty_text: str = NO_CONTENT_GENERATED,
    ) -> str:
        """Send a single-text prompt and return the generated text.

        Raises ProviderError when the key is missing or the API call fails.
        An empty candidate is not an error; it yields ``empty_text``.
        """
        if is_mock_mode():
            return mock_gemini_completion(prompt, transformation_type)

        if self.client is None:
            raise ProviderError("Gemini API key not configured", provider="gemini")

        config = self.build_config(generation or DEFAULT_GENERATION, with_safety)

        try:
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=prompt,
                config=config,
            )
        except genai_errors.APIError as e:
            raise ProviderError(f"Gemini API error: {e.message or e.status}", provider="gemini", status_code=e.code or 0) from e
        except Exception as e:
            raise ProviderError(f"Gemini API error: {str(e)}", provider="gemini") from e

        return self.extract_text(response) or empty_text

    @staticmethod
    def extract_text(response: Any) -> str:
        """Pull the first candidate's first text part out of a response."""
        candidates = getattr(response, "candidates", None) or []
        if not candidates:
            return ""
        content = getattr(candidates[0], "content", None)
        parts = getattr(content, "parts", None) or []
        if not parts:
            return ""
        return getattr(parts[0], "text", None) or ""

    def get_provider_info(self) -> Dict[str, Any]:
        """Return provider metadata for status endpoints."""
        provider = PROVIDERS["gemini"]
        return {
            "id": provider.id,
            "name": provider.name,
            "model": self.model,
            "configured": self.is_configured,
            "description": provider.description
        }


def flatten_messages(messages: List[Dict[str, Any]]) -> str:
    """Render chat messages as a ``role: content`` transcript."""
    return "\n\n".join(f"{msg.get('role')}: {msg.get('content')}" for msg in messages)
