"""
Request classification heuristics.

Maps raw browser values (DevTools resource type, MIME type, URL,
ALPN protocol) onto the small closed vocabularies used by the
resource breakdown and the analytics views.
"""

from __future__ import annotations

import re
from typing import Literal

ResourceKind = Literal["script", "stylesheet", "image", "font", "xhr", "other"]

_FONT_EXTENSION = re.compile(r"\.(woff2?|ttf|otf|eot)$")


def classify_resource_type(cdp_type: str, mime_type: str, url: str) -> ResourceKind:
    """Classify a request into one of the breakdown categories.

    Checked in order, first match wins: script, stylesheet, image,
    font (type, MIME or file extension), xhr/fetch, other.

    Args:
        cdp_type: DevTools ``Network.ResourceType`` (``Script``, ``XHR``...).
        mime_type: Response MIME type.
        url: Request URL.

    Returns:
        The classified resource kind.
    """
    kind = cdp_type.lower()
    mime = mime_type.lower()
    path = url.lower().split("?", 1)[0].split("#", 1)[0]

    if kind == "script" or "javascript" in mime:
        return "script"
    if kind == "stylesheet" or "css" in mime:
        return "stylesheet"
    if kind == "image" or "image" in mime:
        return "image"
    if kind == "font" or "font" in mime or _FONT_EXTENSION.search(path):
        return "font"
    if kind in ("xhr", "fetch"):
        return "xhr"
    return "other"


# ── Protocols ───────────────────────────────────────────────

ProtocolLabel = Literal["HTTP/3", "HTTP/2", "HTTP/1.1", "Other"]

PROTOCOL_ORDER: tuple[ProtocolLabel, ...] = ("HTTP/3", "HTTP/2", "HTTP/1.1", "Other")


def normalize_protocol(protocol: str) -> ProtocolLabel:
    """Normalize a raw protocol string (``h2``, ``http/1.1``, ``h3-29``...)."""
    value = protocol.strip().lower()
    if value.startswith("h3") or "quic" in value:
        return "HTTP/3"
    if value.startswith("h2") or value in ("http/2", "http/2.0"):
        return "HTTP/2"
    if value.startswith("http/1"):
        return "HTTP/1.1"
    return "Other"
