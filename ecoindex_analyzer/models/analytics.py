"""Pydantic models for the four request-analytics views."""

from __future__ import annotations

from typing import Literal

import pydantic

from ecoindex_analyzer.utils import serialization

CacheBucket = Literal["none", "<1h", "<1day", "<1week", ">=1week"]
CacheBadge = Literal["critical", "warning", "notice"]
ProtocolLabel = Literal["HTTP/3", "HTTP/2", "HTTP/1.1", "Other"]

_FROZEN = pydantic.ConfigDict(
    alias_generator=serialization.snake_to_camel, populate_by_name=True, frozen=True
)


# ── Domains ─────────────────────────────────────────────────────

class DomainStat(pydantic.BaseModel):
    """Request count and bytes attributed to one hostname."""

    model_config = _FROZEN

    domain: str
    request_count: int
    total_transfer_size: int
    percentage: float
    color: str


class DomainAnalytics(pydantic.BaseModel):
    model_config = _FROZEN

    domains: tuple[DomainStat, ...] = ()
    total_requests: int = 0
    total_size: int = 0


# ── Protocols ───────────────────────────────────────────────────

class ProtocolStat(pydantic.BaseModel):
    model_config = _FROZEN

    protocol: ProtocolLabel
    count: int
    percentage: float
    color: str


class ProtocolAnalytics(pydantic.BaseModel):
    model_config = _FROZEN

    protocols: tuple[ProtocolStat, ...] = ()
    total_requests: int = 0


# ── Cache lifetimes ─────────────────────────────────────────────

class CacheGroup(pydantic.BaseModel):
    """Requests whose cache lifetime falls into one bucket."""

    model_config = _FROZEN

    bucket: CacheBucket
    label: str
    count: int
    percentage: float
    color: str


class ProblematicResource(pydantic.BaseModel):
    """A resource cached for less than a week."""

    model_config = _FROZEN

    url: str
    domain: str
    filename: str
    resource_type: str
    cache_lifetime_ms: int
    cache_ttl_label: str
    badge: CacheBadge
    badge_text: str
    resource_size: int


class CacheAnalytics(pydantic.BaseModel):
    model_config = _FROZEN

    groups: tuple[CacheGroup, ...] = ()
    problematic_resources: tuple[ProblematicResource, ...] = ()
    total_resources: int = 0
    problematic_count: int = 0


# ── Duplicates ──────────────────────────────────────────────────

class DuplicateGroup(pydantic.BaseModel):
    """The same file (name and size) downloaded more than once."""

    model_config = _FROZEN

    filename: str
    resource_size: int
    resource_type: str
    urls: tuple[str, ...]
    domains: tuple[str, ...]
    wasted_bytes: int


class DuplicateAnalytics(pydantic.BaseModel):
    model_config = _FROZEN

    duplicates: tuple[DuplicateGroup, ...] = ()
    total_wasted_bytes: int = 0
    duplicate_count: int = 0


class RequestAnalytics(pydantic.BaseModel):
    """All four views computed over the same request list."""

    model_config = _FROZEN

    domain_stats: DomainAnalytics = DomainAnalytics()
    protocol_stats: ProtocolAnalytics = ProtocolAnalytics()
    cache_stats: CacheAnalytics = CacheAnalytics()
    duplicate_stats: DuplicateAnalytics = DuplicateAnalytics()
