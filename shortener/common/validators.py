"""Validation utilities for URL shortener."""

from urllib.parse import urlparse
from typing import Tuple


MAX_URL_LENGTH = 2048


def is_valid_url(url: str) -> Tuple[bool, str]:
    """Validate a URL to be shortened.

    Args:
        url: The URL to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str):
        return False, "originalUrl is required"

    if len(url) > MAX_URL_LENGTH:
        return False, f"URL is too long (max {MAX_URL_LENGTH} characters)"

    try:
        result = urlparse(url)
        # Accessing port validates it
        result.port
    except ValueError as e:
        return False, f"Invalid URL format: {e}"

    # Check if scheme is http or https
    if result.scheme not in ("http", "https"):
        return False, "URL must start with http:// or https://"

    # Check if host exists
    if not result.hostname:
        return False, "URL must have a valid domain"

    return True, ""
