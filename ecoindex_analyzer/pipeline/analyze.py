"""
Measurement pipeline.

Runs one complete EcoIndex measurement in-process: validate the URL,
drive the browser through the navigation protocol, extract metrics,
score them, compute the request analytics and assemble the result.
The browser is closed on every exit path, cancellation included.
"""

from __future__ import annotations

from datetime import UTC, datetime

from ecoindex_analyzer import analytics, config
from ecoindex_analyzer.analysis import extractor
from ecoindex_analyzer.analysis.scoring import calculator
from ecoindex_analyzer.browser import navigation
from ecoindex_analyzer.browser import session as browser_session
from ecoindex_analyzer.models import analysis, network
from ecoindex_analyzer.pipeline import assembler, report
from ecoindex_analyzer.utils import logger
from ecoindex_analyzer.utils import url as url_mod

log = logger.create_logger("Pipeline")


async def capture_page(
    url: str,
    chrome_path: str | None,
    settings: config.AnalyzerSettings,
) -> network.PageCapture:
    """Launch a browser, run the navigation protocol and close the browser."""
    session = browser_session.BrowserSession(settings)
    log.start_timer("browser")
    try:
        await session.launch(chrome_path)
        return await navigation.NavigationController(session, settings).run(url)
    finally:
        await session.close()
        log.end_timer("browser", "Browser closed")


def build_result(
    capture: network.PageCapture,
    now: datetime,
    *,
    include_html: bool = False,
    report_dir: str = ".reports",
) -> analysis.AnalysisResult:
    """Turn a capture into the final result (everything after the browser).

    Args:
        capture: Output of the navigation protocol.
        now: Run timestamp, also the reference time of the cache audit.
        include_html: Also render the HTML report.
        report_dir: Directory the report is written to.
    """
    extracted = extractor.extract_metrics(capture, now)
    score = calculator.compute_score(extracted.page)
    impact = calculator.compute_impact(score.score)
    request_analytics = analytics.compute_request_analytics(extracted.records)

    result = assembler.assemble_result(
        url=capture.final_url,
        timestamp=now.isoformat(),
        page=extracted.page,
        score=score,
        impact=impact,
        resource_breakdown=extracted.resource_breakdown,
        performance=capture.performance,
        records=extracted.records,
        cache_items=extracted.cache_items,
        request_analytics=request_analytics,
    )
    log.success("EcoIndex computed", {
        "score": result.ecoindex.score,
        "grade": result.ecoindex.grade,
        "ghg": result.ecoindex.ghg,
        "water": result.ecoindex.water,
    })

    if include_html:
        result = assembler.with_report_path(result, report.write_html_report(result, report_dir))
    return result


async def analyze_url(
    url: str,
    *,
    chrome_path: str | None = None,
    include_html: bool = False,
    settings: config.AnalyzerSettings | None = None,
) -> analysis.AnalysisResult:
    """Measure *url* and return its EcoIndex analysis.

    Args:
        url: Absolute http(s) URL.
        chrome_path: Browser executable; ``None`` uses the configured one.
        include_html: Also write an HTML report and attach its path.
        settings: Overrides the environment-derived settings.

    Returns:
        The assembled analysis result.

    Raises:
        EcoIndexError: Any typed failure of the run.
    """
    settings = settings or config.get_settings()
    target = url_mod.validate_target_url(url)
    now = datetime.now(UTC)

    logger.clear_timers()
    logger.start_log_file(url_mod.extract_domain(target))
    log.section(f"EcoIndex analysis: {target}")
    try:
        capture = await capture_page(target, chrome_path, settings)
        return build_result(capture, now, include_html=include_html, report_dir=settings.report_dir)
    finally:
        logger.end_log_file()
