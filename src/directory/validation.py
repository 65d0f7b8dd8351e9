"""URL checks shared by listing images, slideshows and the seed import."""

from __future__ import annotations

from collections.abc import Iterable
from urllib.parse import urlparse


def is_valid_url(value: object) -> bool:
    """True for absolute URLs with both a scheme and a host."""

    if not isinstance(value, str) or not value.strip():
        return False
    try:
        parsed = urlparse(value.strip())
    except ValueError:
        return False
    return bool(parsed.scheme) and bool(parsed.netloc)


def filter_valid_urls(values: Iterable[object] | None) -> list[str]:
    if not values:
        return []
    return [value.strip() for value in values if is_valid_url(value)]
