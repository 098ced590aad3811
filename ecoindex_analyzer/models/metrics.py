"""Pydantic models for the raw measurements taken from a page."""

from __future__ import annotations

import pydantic

from ecoindex_analyzer.utils import serialization

_FROZEN = pydantic.ConfigDict(
    alias_generator=serialization.snake_to_camel, populate_by_name=True, frozen=True
)


class PageMetrics(pydantic.BaseModel):
    """The three inputs of the EcoIndex score."""

    model_config = _FROZEN

    dom_elements: int = pydantic.Field(ge=0)
    requests: int = pydantic.Field(ge=0)
    size_kb: float = pydantic.Field(ge=0)


class ResourceBreakdown(pydantic.BaseModel):
    """Request counts per classified resource type."""

    model_config = _FROZEN

    scripts: int = 0
    stylesheets: int = 0
    images: int = 0
    fonts: int = 0
    xhr: int = 0
    other: int = 0


class PerformanceMetrics(pydantic.BaseModel):
    """Timing and web-vital values read from the page's Performance APIs.

    All durations are milliseconds from navigation start.  A value is
    ``None`` when the browser did not report it (e.g. no LCP candidate).
    """

    model_config = _FROZEN

    ttfb: float | None = None
    first_contentful_paint: float | None = None
    largest_contentful_paint: float | None = None
    cumulative_layout_shift: float | None = None
    dom_content_loaded: float | None = None
    load_event_end: float | None = None
