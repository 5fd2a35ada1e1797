"""Configuration constants and provider definitions for MindLoom."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class ProviderConfig:
    """Configuration for an LLM provider endpoint."""
    id: str
    name: str
    model: str
    api_key_env: str
    description: str


@dataclass
class GenerationConfig:
    """Sampling parameters for one transformation type."""
    temperature: float
    max_output_tokens: int
    top_k: int = 40
    top_p: float = 0.95


# LLM providers
PROVIDERS = {
    "gemini": ProviderConfig(
        id="gemini",
        name="Google Gemini",
        model="gemini-1.5-flash-latest",
        api_key_env="GEMINI_API_KEY",
        description="Primary transformer for every content type"
    ),
    "perplexity": ProviderConfig(
        id="perplexity",
        name="Perplexity",
        model="sonar",
        api_key_env="PERPLEXITY_API_KEY",
        description="Online Q&A with related questions"
    ),
}

# Q&A tries providers in this order and falls back to the next one on failure
CHAT_PROVIDER_ORDER = ("perplexity", "gemini")

PERPLEXITY_API_URL = "https://api.perplexity.ai/chat/completions"
PERPLEXITY_TIMEOUT = 60.0

# Transformation defaults
DEFAULT_TRANSFORMATION_TYPE = "summary"

DEFAULT_GENERATION = GenerationConfig(temperature=0.7, max_output_tokens=2048)

GENERATION_OVERRIDES = {
    "legal": GenerationConfig(temperature=0.3, max_output_tokens=2048),
    "mindmap": GenerationConfig(temperature=0.7, max_output_tokens=3000),
}

# Q&A sampling
CHAT_TEMPERATURE = 0.2
CHAT_TOP_P = 0.9
CHAT_MAX_TOKENS = 1000
CHAT_FALLBACK_TEMPERATURE = 0.3

SAFETY_CATEGORIES = ("HARM_CATEGORY_HARASSMENT", "HARM_CATEGORY_HATE_SPEECH")
SAFETY_THRESHOLD = "BLOCK_MEDIUM_AND_ABOVE"

NO_CONTENT_GENERATED = "No content generated"


def get_generation_config(transformation_type: Optional[str]) -> GenerationConfig:
    """Return the sampling parameters for a transformation type."""
    return GENERATION_OVERRIDES.get(transformation_type or "", DEFAULT_GENERATION)


# Content input limits
MIN_TEXT_LENGTH = 50
DIRECT_TEXT_TITLE = "Direct Text Input"
MAX_URL_CONTENT_CHARS = 15000
URL_FETCH_TIMEOUT = 30.0
USER_AGENT = "Mozilla/5.0 (compatible; MindLoomBot/1.0)"

# File upload limits
MAX_FILE_SIZE = 15 * 1024 * 1024  # 15MB
MAX_FILES_PER_UPLOAD = 5
MAX_FILENAME_LENGTH = 255
MAX_EXTRACTED_CHARS = 5000
PREVIEW_CHARS = 500
ORIGINAL_CONTENT_CHARS = 1000

# Allowed file types
ALLOWED_MIME_TYPES = {
    "text/plain",
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "audio/mpeg",
    "audio/wav",
    "audio/mp4",
    "video/mp4",
    "video/avi",
    "video/quicktime",
    "application/json",
    "text/csv",
    "image/jpeg",
    "image/png",
    "image/gif",
    "image/webp",
}

SUSPICIOUS_EXTENSIONS = {
    ".exe", ".bat", ".cmd", ".scr", ".pif", ".com", ".msi", ".dll",
    ".app", ".deb", ".rpm", ".dmg", ".pkg", ".ps1", ".sh", ".vbs",
    ".js", ".jar", ".apk", ".ipa",
}

# Magic numbers checked for images and PDFs
IMAGE_SIGNATURES = {
    "image/jpeg": [b"\xff\xd8\xff"],
    "image/png": [b"\x89PNG\r\n\x1a\n"],
    "image/gif": [b"GIF87a", b"GIF89a"],
    "image/webp": [b"RIFF"],
}
PDF_SIGNATURE = b"%PDF-"

# Anonymous usage
DAILY_USAGE_LIMIT = 5

# History
MAX_ANONYMOUS_HISTORY = 50

# Supabase
SUPABASE_UPLOADS_BUCKET = "uploads"
TRANSFORMATIONS_TABLE = "transformations"
FILE_UPLOADS_TABLE = "file_uploads"

# Storage paths
HISTORY_PATH = "data/history"  # Anonymous per-session history files
USAGE_PATH = "data/usage"  # Anonymous daily usage counters
EXPORT_TEMPLATES_PATH = "templates/exports"  # Relative to the project root
