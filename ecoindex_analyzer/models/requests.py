"""Pydantic models for per-request records and cache audit items."""

from __future__ import annotations

import pydantic

from ecoindex_analyzer.utils import serialization

_FROZEN = pydantic.ConfigDict(
    alias_generator=serialization.snake_to_camel, populate_by_name=True, frozen=True
)


class RequestRecord(pydantic.BaseModel):
    """A single measured network request.

    ``protocol`` is the raw value reported by the browser
    (``h2``, ``http/1.1``...); analytics normalize it.  Times are
    milliseconds relative to the first request of the page.
    """

    model_config = _FROZEN

    url: str
    domain: str
    protocol: str = ""
    status_code: int = 0
    mime_type: str = ""
    resource_type: str = "other"
    transfer_size: int = pydantic.Field(default=0, ge=0)
    resource_size: int = pydantic.Field(default=0, ge=0)
    priority: str = ""
    start_time: float = 0.0
    end_time: float = 0.0
    duration: float = 0.0
    from_cache: bool = False
    cache_lifetime_ms: int = pydantic.Field(default=0, ge=0)

    @property
    def effective_size(self) -> int:
        """Bytes accounted to this request: transfer size, else resource size."""
        return self.transfer_size if self.transfer_size > 0 else self.resource_size


class CacheItem(pydantic.BaseModel):
    """A resource served with an inefficient cache policy."""

    model_config = _FROZEN

    url: str
    cache_lifetime_ms: int
    cache_hit_probability: float
    total_bytes: int
    wasted_bytes: float
