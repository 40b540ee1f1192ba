"""
Validation utilities for SDK operations.
"""

import re
import time
from urllib.parse import urlparse
from typing import Optional

from .exceptions import InvalidInputError, FileSizeError


class URLValidator:
    """URL validation for webpage rendering."""

    @classmethod
    def validate_url(cls, url: str) -> str:
        """Validate URL format for webpage rendering."""
        if not url or not url.strip():
            raise InvalidInputError("URL cannot be empty")

        url = url.strip()
        parsed = urlparse(url)

        if not parsed.scheme or not parsed.netloc:
            raise InvalidInputError("Invalid URL format", {"url": url})

        if parsed.scheme.lower() not in ["http", "https"]:
            raise InvalidInputError("Only HTTP/HTTPS URLs allowed", {"url": url})

        return url

    @classmethod
    def is_valid_url(cls, url: str) -> bool:
        try:
            cls.validate_url(url)
            return True
        except InvalidInputError:
            return False


class TextValidator:
    """Text input validation."""

    DEFAULT_MAX_LENGTH = 1_000_000

    @classmethod
    def validate_text(cls, text: str, max_length: Optional[int] = None) -> str:
        """Reject blank or oversized text."""
        if not isinstance(text, str) or not text.strip():
            raise InvalidInputError("Text cannot be empty")

        limit = max_length or cls.DEFAULT_MAX_LENGTH
        if len(text) > limit:
            raise FileSizeError(
                f"Text length {len(text)} exceeds limit of {limit} characters",
                {"length": len(text), "limit": limit},
            )

        return text


class FilenameBuilder:
    """Builds safe download filenames."""

    UNSAFE_CHARS = re.compile(r'[\\/:*?"<>|\x00-\x1f\x7f]+')
    MAX_LENGTH = 180

    TEXT_DEFAULT = "document"
    WEBPAGE_DEFAULT = "webpage"

    @classmethod
    def sanitize(cls, name: Optional[str], default: str) -> str:
        if not name:
            return default

        base = name.strip()
        if base.lower().endswith(".pdf"):
            base = base[:-4]

        safe = cls.UNSAFE_CHARS.sub("_", base).strip()[: cls.MAX_LENGTH]
        return safe or default

    @classmethod
    def pdf_filename(cls, name: Optional[str], default: str) -> str:
        return f"{cls.sanitize(name, default)}.pdf"

    @classmethod
    def timestamped(
        cls, prefix: str = WEBPAGE_DEFAULT, now_ms: Optional[int] = None
    ) -> str:
        """Name used when a service produced the file, e.g. webpage-1700000000000.pdf"""
        if now_ms is None:
            now_ms = int(time.time() * 1000)
        return f"{prefix}-{now_ms}.pdf"
