"""URL building utilities for URL shortener."""


def build_short_url(short_code: str, domain: str) -> str:
    """Build complete short URL.

    Args:
        short_code: The short code
        domain: Configured base (e.g., https://sho.rt/ or https://example.com/s)

    Returns:
        Complete short URL with exactly one slash before the code
    """
    return f"{domain.rstrip('/')}/{short_code}"
