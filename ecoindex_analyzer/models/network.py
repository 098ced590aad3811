"""Models for what the browser captured during one navigation.

``NetworkEntry`` is mutable: CDP events fill it in as a request
progresses.  Everything downstream of the extractor works on the
frozen :class:`~ecoindex_analyzer.models.requests.RequestRecord`.
"""

from __future__ import annotations

import pydantic

from ecoindex_analyzer.models import metrics


class NetworkEntry(pydantic.BaseModel):
    """One request as observed over the DevTools protocol."""

    request_id: str
    url: str
    cdp_type: str = ""
    priority: str = ""
    protocol: str = ""
    status_code: int = 0
    mime_type: str = ""
    response_headers: dict[str, str] = pydantic.Field(default_factory=dict)
    encoded_data_length: int = 0
    decoded_data_length: int = 0
    start_time: float = 0.0
    end_time: float | None = None
    from_cache: bool = False
    finished: bool = False
    failed: bool = False
    error_text: str | None = None


class PageCapture(pydantic.BaseModel):
    """Everything the navigation protocol collected from the page."""

    requested_url: str
    final_url: str
    status_code: int | None = None
    dom_elements: int = 0
    performance: metrics.PerformanceMetrics = pydantic.Field(
        default_factory=metrics.PerformanceMetrics
    )
    entries: list[NetworkEntry] = pydantic.Field(default_factory=list)
