"""
URL helpers shared by the extractor, the analytics views and the
sidecar argument validation.
"""

from __future__ import annotations

from urllib import parse

from ecoindex_analyzer.utils import errors

_EXCLUDED_SCHEMES = ("data:", "blob:")


def extract_domain(url: str) -> str:
    """Extract the hostname from a URL string, or ``""`` if it has none."""
    try:
        parsed = parse.urlparse(url)
        return parsed.hostname or ""
    except ValueError:
        return ""


def extract_filename(url: str) -> str:
    """Return the last path segment of *url* (query and fragment dropped)."""
    try:
        path = parse.urlparse(url).path
    except ValueError:
        return ""
    return parse.unquote(path.rsplit("/", 1)[-1])


def is_measurable_url(url: str) -> bool:
    """Whether a request URL counts toward the page footprint.

    ``data:`` and ``blob:`` URIs never hit the network.
    """
    return not url.lower().startswith(_EXCLUDED_SCHEMES)


def validate_target_url(url: str) -> str:
    """Check that *url* is an absolute http(s) URL with a host.

    Args:
        url: The URL supplied by the caller.

    Returns:
        The URL stripped of surrounding whitespace.

    Raises:
        InvalidUrlError: For any other scheme, or no hostname.
    """
    candidate = (url or "").strip()
    try:
        parsed = parse.urlparse(candidate)
    except ValueError as exc:
        raise errors.InvalidUrlError(f"Invalid URL: {candidate!r}", str(exc)) from exc
    if parsed.scheme not in ("http", "https"):
        raise errors.InvalidUrlError(f"Only http and https URLs can be analysed: {candidate!r}")
    if not parsed.hostname:
        raise errors.InvalidUrlError(f"URL has no hostname: {candidate!r}")
    return candidate
