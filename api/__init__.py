"""API routes module for MindLoom."""

from .transform import router as transform_router
from .chat import router as chat_router
from .files import router as files_router
from .history import router as history_router
from .analyze import router as analyze_router
from .export import router as export_router
from .usage import router as usage_router

__all__ = [
    "transform_router", "chat_router", "files_router", "history_router",
    "analyze_router", "export_router", "usage_router",
]
