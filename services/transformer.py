"""Transformation dispatch: pick a prompt template and call Gemini."""

from typing import Dict, Any, Optional

from config import get_generation_config
from services.errors import ContentValidationError
from services.gemini_client import GeminiClient
from services.prompts import build_prompt, combine_prompt, build_file_prompt


class ContentTransformer:
    """Turns content into a summary, mind map, notes, etc. via the LLM."""

    def __init__(self, gemini: GeminiClient):
        self.gemini = gemini

    async def transform(
        self,
        content: Optional[str],
        transformation_type: Optional[str],
        title: Optional[str] = None
    ) -> Dict[str, Any]:
        """Transform content and return the response payload.

        Returns {success, transformedContent, originalTitle, transformationType}.
        Raises ContentValidationError for missing input and ProviderError when
        the LLM call fails.
        """
        if not content or not transformation_type:
            raise ContentValidationError("Content and transformation type are required")

        print(f"[TRANSFORM] Transforming content: type={transformation_type} length={len(content)}")

        system_prompt, prompt = build_prompt(transformation_type, content)
        transformed = await self.gemini.generate(
            combine_prompt(system_prompt, prompt),
            generation=get_generation_config(transformation_type),
            transformation_type=transformation_type,
        )

        print("[TRANSFORM] Content transformed successfully")

        return {
            "success": True,
            "transformedContent": transformed,
            "originalTitle": title,
            "transformationType": transformation_type,
        }

    async def transform_file_content(
        self,
        extracted_content: str,
        transformation_type: str,
        custom_prompt: Optional[str] = None
    ) -> str:
        """Transform text extracted from an uploaded file."""
        prompt = build_file_prompt(transformation_type, extracted_content, custom_prompt)
        print(f"[TRANSFORM] Sending file content to Gemini: type={transformation_type}")
        # File transformations skip the safety overrides
        return await self.gemini.generate(
            prompt,
            with_safety=False,
            transformation_type=transformation_type,
        )
