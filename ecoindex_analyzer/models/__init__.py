# Models package: re-export the public result types.
# Prefer importing from the specific submodule (e.g. ecoindex_analyzer.models.analytics).

from ecoindex_analyzer.models.analysis import AnalysisResult as AnalysisResult
from ecoindex_analyzer.models.analytics import (
    CacheAnalytics as CacheAnalytics,
    CacheGroup as CacheGroup,
    DomainAnalytics as DomainAnalytics,
    DomainStat as DomainStat,
    DuplicateAnalytics as DuplicateAnalytics,
    DuplicateGroup as DuplicateGroup,
    ProblematicResource as ProblematicResource,
    ProtocolAnalytics as ProtocolAnalytics,
    ProtocolStat as ProtocolStat,
    RequestAnalytics as RequestAnalytics,
)
from ecoindex_analyzer.models.ecoindex import (
    EcoIndexMetrics as EcoIndexMetrics,
    Grade as Grade,
    ImpactResult as ImpactResult,
    ScoreResult as ScoreResult,
)
from ecoindex_analyzer.models.metrics import (
    PageMetrics as PageMetrics,
    PerformanceMetrics as PerformanceMetrics,
    ResourceBreakdown as ResourceBreakdown,
)
from ecoindex_analyzer.models.network import NetworkEntry as NetworkEntry, PageCapture as PageCapture
from ecoindex_analyzer.models.requests import CacheItem as CacheItem, RequestRecord as RequestRecord
