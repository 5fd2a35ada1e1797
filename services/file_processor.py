"""File processing utilities for uploads."""

import io
import mimetypes
from pathlib import Path
from typing import Dict, Any, Optional, Tuple

import pymupdf
from docx import Document

from config import (
    MAX_FILE_SIZE, MAX_FILENAME_LENGTH, MAX_EXTRACTED_CHARS, PREVIEW_CHARS,
    ALLOWED_MIME_TYPES, SUSPICIOUS_EXTENSIONS, IMAGE_SIGNATURES, PDF_SIGNATURE
)
from services.errors import ContentValidationError

TEXT_MIME_TYPES = {"text/plain", "application/json", "text/csv"}


class FileProcessor:
    """Validate uploaded files and turn them into plain text."""

    @staticmethod
    def get_mime_type(filename: str, content_type: Optional[str] = None) -> str:
        """Determine the MIME type of a file."""
        if content_type and content_type != "application/octet-stream":
            return content_type

        mime_type, _ = mimetypes.guess_type(filename)
        return mime_type or "application/octet-stream"

    @staticmethod
    def get_file_type(mime_type: str) -> str:
        """Map a MIME type to one of: pdf, document, audio, video, image, json, text."""
        if "pdf" in mime_type:
            return "pdf"
        if "word" in mime_type or "document" in mime_type:
            return "document"
        if "audio" in mime_type:
            return "audio"
        if "video" in mime_type:
            return "video"
        if "image" in mime_type:
            return "image"
        if "json" in mime_type:
            return "json"
        return "text"

    @staticmethod
    def has_valid_signature(content: bytes, mime_type: str) -> bool:
        """Check magic numbers for images and PDFs; other types always pass."""
        if mime_type == "application/pdf":
            return content.startswith(PDF_SIGNATURE)

        if mime_type.startswith("image/"):
            signatures = IMAGE_SIGNATURES.get(mime_type)
            if not signatures:
                return True
            return any(content.startswith(signature) for signature in signatures)

        return True

    @staticmethod
    def validate_file(
        filename: str,
        content: bytes,
        content_type: Optional[str] = None
    ) -> Tuple[bool, str, str]:
        """
        Validate an uploaded file.

        Returns: (is_valid, error_message, file_type)
        file_type is one of: 'text', 'pdf', 'document', 'audio', 'video', 'image', 'json'
        """
        mime_type = FileProcessor.get_mime_type(filename, content_type)
        file_size = len(content)
        ext = Path(filename).suffix.lower()

        if file_size > MAX_FILE_SIZE:
            return False, f"File size must be less than {MAX_FILE_SIZE // (1024*1024)}MB", ""

        if file_size == 0:
            return False, "File is empty", ""

        if mime_type not in ALLOWED_MIME_TYPES:
            return False, f"File type {mime_type} is not supported", ""

        if len(filename) > MAX_FILENAME_LENGTH:
            return False, f"File name is too long (max {MAX_FILENAME_LENGTH} characters)", ""

        if ext in SUSPICIOUS_EXTENSIONS:
            return False, "File type not allowed for security reasons", ""

        if not FileProcessor.has_valid_signature(content, mime_type):
            if mime_type == "application/pdf":
                return False, "Invalid PDF file format", ""
            return False, "Invalid image file format", ""

        return True, "", FileProcessor.get_file_type(mime_type)

    @staticmethod
    def extract_text(filename: str, content: bytes, mime_type: str) -> str:
        """Convert file bytes into plain text for the transformation prompt.

        PDF and DOCX parse failures fall back to a descriptive placeholder;
        media files always get a placeholder describing the file.
        """
        size_mb = FileProcessor._format_mb(len(content))

        if mime_type in TEXT_MIME_TYPES or mime_type.startswith("text/"):
            return FileProcessor._decode_text(content)

        if mime_type == "application/pdf":
            try:
                text = FileProcessor._extract_pdf_text(content)
            except Exception as e:
                print(f"[FILES] PDF processing error for {filename}: {e}")
                text = ""
            return text or (
                f"PDF file: {filename}\nSize: {size_mb}\n\n"
                "Unable to extract text content from this PDF. This may be an "
                "image-based PDF that requires OCR processing."
            )

        if "word" in mime_type or "document" in mime_type:
            try:
                text = FileProcessor._extract_docx_text(content)
            except Exception as e:
                print(f"[FILES] DOCX processing error for {filename}: {e}")
                text = ""
            return text or (
                f"Word document: {filename}\nSize: {size_mb}\n\n"
                "Unable to extract text content from this document."
            )

        if "image" in mime_type:
            return (
                f"Image: {filename}\nType: {mime_type}\nSize: {size_mb}\n\n"
                "This image can be processed for:\n"
                "• OCR text extraction\n• Visual content analysis\n• Object detection"
            )

        if "audio" in mime_type:
            return (
                f"Audio: {filename}\nType: {mime_type}\nSize: {size_mb}\n\n"
                "This audio file can be processed for:\n"
                "• Speech-to-text transcription\n• Audio content analysis\n• Language detection"
            )

        if "video" in mime_type:
            return (
                f"Video: {filename}\nType: {mime_type}\nSize: {size_mb}\n\n"
                "This video file can be processed for:\n"
                "• Audio transcription\n• Visual content analysis\n• Scene detection"
            )

        return (
            f"File: {filename}\nType: {mime_type}\nSize: {size_mb}\n\n"
            "Content extraction not supported for this file type. Supported formats:\n"
            "• Documents: PDF, DOCX, TXT\n• Media: MP3, MP4, JPG, PNG\n• Data: JSON, CSV"
        )

    @staticmethod
    def process_file(
        filename: str,
        content: bytes,
        content_type: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Validate a file and extract its text.

        Returns the uploaded-file record (without id or storage path).
        Raises ContentValidationError when validation fails.
        """
        is_valid, error, file_type = FileProcessor.validate_file(filename, content, content_type)

        if not is_valid:
            raise ContentValidationError(error)

        mime_type = FileProcessor.get_mime_type(filename, content_type)
        text = FileProcessor.extract_text(filename, content, mime_type)

        return {
            "filename": filename,
            "size": len(content),
            "mimeType": mime_type,
            "fileType": file_type,
            "content": text,
            "contentPreview": text[:PREVIEW_CHARS] if file_type in ("text", "json") else None,
        }

    @staticmethod
    def _decode_text(content: bytes) -> str:
        try:
            return content.decode("utf-8")
        except UnicodeDecodeError:
            return content.decode("latin-1")

    @staticmethod
    def _extract_pdf_text(content: bytes) -> str:
        pages = []
        with pymupdf.open(stream=content, filetype="pdf") as doc:
            for page in doc:
                page_text = page.get_text("text")
                if page_text.strip():
                    pages.append(page_text.strip())
        return "\n".join(pages)[:MAX_EXTRACTED_CHARS]

    @staticmethod
    def _extract_docx_text(content: bytes) -> str:
        document = Document(io.BytesIO(content))
        paragraphs = [p.text.strip() for p in document.paragraphs if p.text.strip()]
        return "\n".join(paragraphs)[:MAX_EXTRACTED_CHARS]

    @staticmethod
    def _format_mb(size: int) -> str:
        return f"{size / 1024 / 1024:.2f} MB"
