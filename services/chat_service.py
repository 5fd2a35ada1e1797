"""Question answering over transformed content with provider fallback."""

from typing import Dict, Any, List, Optional, Sequence

from config import CHAT_PROVIDER_ORDER, CHAT_FALLBACK_TEMPERATURE, CHAT_MAX_TOKENS, GenerationConfig
from services.errors import ContentValidationError, ProviderError
from services.gemini_client import GeminiClient, flatten_messages
from services.perplexity_client import PerplexityClient
from services.prompts import (
    build_chat_system_message, CHAT_FALLBACK_INSTRUCTION, CONTEXT_RELATED_QUESTIONS
)

GEMINI_CHAT_GENERATION = GenerationConfig(
    temperature=CHAT_FALLBACK_TEMPERATURE,
    max_output_tokens=CHAT_MAX_TOKENS,
)


def build_messages(
    question: str,
    context: Optional[str] = None,
    chat_history: Optional[List[Dict[str, Any]]] = None
) -> List[Dict[str, Any]]:
    """Build the message list: system, prior history, then the question."""
    messages: List[Dict[str, Any]] = [
        {"role": "system", "content": build_chat_system_message(context)}
    ]
    if chat_history:
        messages.extend(chat_history)
    messages.append({"role": "user", "content": question})
    return messages


class ChatService:
    """Answers questions, trying each configured provider in order."""

    def __init__(
        self,
        gemini: GeminiClient,
        perplexity: PerplexityClient,
        provider_order: Sequence[str] = CHAT_PROVIDER_ORDER
    ):
        self.gemini = gemini
        self.perplexity = perplexity
        self.provider_order = tuple(provider_order)

    def _is_configured(self, provider: str) -> bool:
        if provider == "perplexity":
            return self.perplexity.is_configured
        if provider == "gemini":
            return self.gemini.is_configured
        return False

    async def _ask_perplexity(self, messages: List[Dict[str, Any]], context: Optional[str]) -> Dict[str, Any]:
        return await self.perplexity.complete(messages)

    async def _ask_gemini(self, messages: List[Dict[str, Any]], context: Optional[str]) -> Dict[str, Any]:
        prompt = f"{flatten_messages(messages)}\n\n{CHAT_FALLBACK_INSTRUCTION}"
        answer = await self.gemini.generate(
            prompt,
            generation=GEMINI_CHAT_GENERATION,
            with_safety=False,
            empty_text="No answer generated",
        )
        return {
            "answer": answer,
            "related_questions": list(CONTEXT_RELATED_QUESTIONS) if context else [],
        }

    async def ask(
        self,
        question: Optional[str],
        context: Optional[str] = None,
        chat_history: Optional[List[Dict[str, Any]]] = None
    ) -> Dict[str, Any]:
        """Answer a question.

        Returns {success, answer, relatedQuestions, question, provider}.
        Raises ContentValidationError for a missing question and
        ProviderError when no provider could answer.
        """
        if not question:
            raise ContentValidationError("Question is required")

        print(f"[CHAT] Processing Q&A request: context_length={len(context) if context else 0}")

        messages = build_messages(question, context, chat_history)
        handlers = {"perplexity": self._ask_perplexity, "gemini": self._ask_gemini}

        attempted = []
        for provider in self.provider_order:
            handler = handlers.get(provider)
            if handler is None or not self._is_configured(provider):
                continue

            attempted.append(provider)
            try:
                result = await handler(messages, context)
            except ProviderError as e:
                print(f"[CHAT] {provider} failed, trying next provider: {e}")
                continue

            if result.get("answer"):
                print(f"[CHAT] Q&A response generated by {provider}")
                return {
                    "success": True,
                    "answer": result["answer"],
                    "relatedQuestions": result.get("related_questions", []),
                    "question": question,
                    "provider": provider,
                }

        # Only a failed fallback reports both services as down
        if attempted and attempted[-1] == self.provider_order[-1]:
            raise ProviderError("Both AI services are currently unavailable")
        raise ProviderError("No AI service available to answer your question")
