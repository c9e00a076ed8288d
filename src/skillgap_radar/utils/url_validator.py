"""URL checks for model-suggested learning resources.

Resources come back from the model as free text. Only absolute http(s) URLs
with a hostname are rendered as links; anything else is shown verbatim.
"""

from __future__ import annotations

from urllib.parse import urlparse


def validate_url(url: str) -> str:
    """Validate that a string is an absolute http(s) URL.

    Returns the stripped URL on success.
    Raises ValueError if the scheme is unsupported or the hostname is missing.
    """
    url = url.strip()
    parsed = urlparse(url)

    if parsed.scheme not in ("http", "https"):
        raise ValueError(f"Unsupported URL scheme: {parsed.scheme!r}")

    if not parsed.hostname:
        raise ValueError(f"No hostname in URL: {url!r}")

    if any(ch.isspace() for ch in url):
        raise ValueError(f"Whitespace in URL: {url!r}")

    return url


def is_web_url(url: str) -> bool:
    try:
        validate_url(url)
    except ValueError:
        return False
    return True
