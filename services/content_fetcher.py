"""Content acquisition from URLs and pasted text."""

import re
from typing import Optional, Tuple
from urllib.parse import urlparse

import httpx
from bs4 import BeautifulSoup

from config import MIN_TEXT_LENGTH, MAX_URL_CONTENT_CHARS, URL_FETCH_TIMEOUT, USER_AGENT
from services.errors import ContentValidationError, ContentFetchError

NOISE_TAGS = ["script", "style", "nav", "footer", "header", "aside", "noscript"]


def is_valid_url(url: Optional[str]) -> bool:
    """Accept absolute http(s) URLs only."""
    if not url:
        return False
    try:
        parsed = urlparse(url.strip())
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def validate_text_input(text: Optional[str]) -> str:
    """Validate pasted text and return it stripped.

    Raises ContentValidationError for blank input or fewer than
    MIN_TEXT_LENGTH characters.
    """
    if not text or not text.strip():
        raise ContentValidationError("Please enter some text to transform")
    stripped = text.strip()
    if len(stripped) < MIN_TEXT_LENGTH:
        raise ContentValidationError(f"Please enter at least {MIN_TEXT_LENGTH} characters")
    return stripped


def extract_page_text(html: str, fallback_title: str = "") -> Tuple[str, str]:
    """Extract (title, main text) from an HTML document."""
    soup = BeautifulSoup(html, "html.parser")

    title = ""
    if soup.title and soup.title.string:
        title = soup.title.string.strip()
    if not title:
        og_title = soup.find("meta", attrs={"property": "og:title"})
        if og_title and og_title.get("content"):
            title = og_title["content"].strip()

    for element in soup.find_all(NOISE_TAGS):
        element.decompose()

    main_content = soup.find("article") or soup.find("main") or soup.find("body") or soup
    text = main_content.get_text(separator=" ", strip=True)
    text = re.sub(r"\s+", " ", text).strip()

    return title or fallback_title, text[:MAX_URL_CONTENT_CHARS]


async def fetch_url_content(
    url: str,
    transport: Optional[httpx.AsyncBaseTransport] = None
) -> Tuple[str, str]:
    """Fetch a web page and return its (title, text content).

    Raises ContentValidationError for an invalid URL and ContentFetchError
    when the page cannot be fetched or contains no text.
    """
    if not url or not url.strip():
        raise ContentValidationError("Please enter a valid URL")
    url = url.strip()
    if not is_valid_url(url):
        raise ContentValidationError("Please enter a valid URL starting with http:// or https://")

    print(f"[FETCH] Extracting content from {url}")

    try:
        async with httpx.AsyncClient(
            timeout=URL_FETCH_TIMEOUT,
            follow_redirects=True,
            headers={"User-Agent": USER_AGENT},
            transport=transport,
        ) as client:
            response = await client.get(url)
            response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise ContentFetchError(f"Failed to extract content from URL: HTTP {e.response.status_code}") from e
    except httpx.HTTPError as e:
        raise ContentFetchError(f"Failed to extract content from URL: {str(e)}") from e

    title, content = extract_page_text(response.text, fallback_title=url)
    if not content:
        raise ContentFetchError("Failed to extract content from URL")

    print(f"[FETCH] Extracted {len(content)} characters")
    return title, content
