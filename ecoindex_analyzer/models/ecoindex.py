"""Pydantic models for the EcoIndex score and its environmental impact."""

from __future__ import annotations

from typing import Literal

import pydantic

from ecoindex_analyzer.models import metrics
from ecoindex_analyzer.utils import serialization

Grade = Literal["A", "B", "C", "D", "E", "F", "G"]

_FROZEN = pydantic.ConfigDict(
    alias_generator=serialization.snake_to_camel, populate_by_name=True, frozen=True
)


class ScoreResult(pydantic.BaseModel):
    """A 0-100 score and the letter grade derived from it."""

    model_config = _FROZEN

    score: float = pydantic.Field(ge=0, le=100)
    grade: Grade


class ImpactResult(pydantic.BaseModel):
    """Estimated greenhouse-gas (gCO2e) and water (cl) cost of one page view."""

    model_config = _FROZEN

    ghg: float
    water: float


class EcoIndexMetrics(pydantic.BaseModel):
    """The ``ecoindex`` block of an analysis result."""

    model_config = _FROZEN

    score: float
    grade: Grade
    ghg: float
    water: float
    dom_elements: int
    requests: int
    size_kb: float
    resource_breakdown: metrics.ResourceBreakdown
