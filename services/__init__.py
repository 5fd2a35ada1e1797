"""Services module for MindLoom."""

from .transformer import ContentTransformer
from .chat_service import ChatService
from .file_processor import FileProcessor

__all__ = ["ContentTransformer", "ChatService", "FileProcessor"]
