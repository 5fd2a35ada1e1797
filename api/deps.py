"""Dependency injection providers for the API layer.

This module provides a single source of truth for shared services like
the LLM clients, the Supabase gateway and the anonymous stores. All modules
should use these providers instead of creating their own instances.
"""

from typing import Optional

from services.gemini_client import GeminiClient
from services.perplexity_client import PerplexityClient
from services.transformer import ContentTransformer
from services.chat_service import ChatService
from services.supabase_gateway import SupabaseGateway
from services.history_store import FileHistoryStore, SupabaseHistoryStore
from services.usage_tracker import UsageTracker

# Singleton instances
_gemini: GeminiClient | None = None
_perplexity: PerplexityClient | None = None
_transformer: ContentTransformer | None = None
_chat_service: ChatService | None = None
_gateway: SupabaseGateway | None = None
_file_history: FileHistoryStore | None = None
_usage_tracker: UsageTracker | None = None
_initialized: bool = False


async def initialize_all():
    """Initialize all stores and services. Called once at app startup."""
    global _gemini, _perplexity, _transformer, _chat_service
    global _gateway, _file_history, _usage_tracker, _initialized

    if _initialized:
        return

    # LLM providers; a missing key leaves the provider unconfigured
    _gemini = GeminiClient()
    _perplexity = PerplexityClient()
    _transformer = ContentTransformer(_gemini)
    _chat_service = ChatService(_gemini, _perplexity)

    _gateway = SupabaseGateway()
    if not _gateway.is_configured:
        print("[DEPS] Supabase not configured; authenticated features disabled")

    _file_history = FileHistoryStore()
    await _file_history.initialize()

    _usage_tracker = UsageTracker()
    await _usage_tracker.initialize()

    _initialized = True
    print("[DEPS] All services initialized")


async def override_all(
    gemini: Optional[GeminiClient] = None,
    perplexity: Optional[PerplexityClient] = None,
    gateway: Optional[SupabaseGateway] = None,
    file_history: Optional[FileHistoryStore] = None,
    usage_tracker: Optional[UsageTracker] = None
):
    """Install explicit instances (used by tests) and mark as initialized."""
    global _gemini, _perplexity, _transformer, _chat_service
    global _gateway, _file_history, _usage_tracker, _initialized

    _gemini = gemini or GeminiClient()
    _perplexity = perplexity or PerplexityClient()
    _transformer = ContentTransformer(_gemini)
    _chat_service = ChatService(_gemini, _perplexity)
    _gateway = gateway or SupabaseGateway()
    _file_history = file_history or FileHistoryStore()
    await _file_history.initialize()
    _usage_tracker = usage_tracker or UsageTracker()
    await _usage_tracker.initialize()
    _initialized = True


def reset():
    """Forget all singletons so the next startup initializes again."""
    global _gemini, _perplexity, _transformer, _chat_service
    global _gateway, _file_history, _usage_tracker, _initialized

    _gemini = _perplexity = _transformer = _chat_service = None
    _gateway = _file_history = _usage_tracker = None
    _initialized = False


def _require(instance, name: str):
    if not _initialized or instance is None:
        raise RuntimeError(f"Dependencies not initialized ({name}). Call initialize_all() first.")
    return instance


def get_gemini_client() -> GeminiClient:
    """Get the singleton GeminiClient instance."""
    return _require(_gemini, "gemini")


def get_perplexity_client() -> PerplexityClient:
    """Get the singleton PerplexityClient instance."""
    return _require(_perplexity, "perplexity")


def get_transformer() -> ContentTransformer:
    return _require(_transformer, "transformer")


def get_chat_service() -> ChatService:
    return _require(_chat_service, "chat")


def get_gateway() -> SupabaseGateway:
    """Get the singleton SupabaseGateway instance."""
    return _require(_gateway, "supabase")


def get_file_history() -> FileHistoryStore:
    return _require(_file_history, "history")


def get_supabase_history() -> SupabaseHistoryStore:
    return SupabaseHistoryStore(get_gateway())


def get_usage_tracker() -> UsageTracker:
    return _require(_usage_tracker, "usage")
