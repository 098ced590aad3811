"""
HTML report rendering.

Renders an :class:`AnalysisResult` with the Jinja2 template in
``ecoindex_analyzer/templates`` and writes it to the report
directory.  A report is an optional artifact: any failure is logged
and the run carries on without it.
"""

from __future__ import annotations

import pathlib
import uuid
from datetime import UTC, datetime

import jinja2

from ecoindex_analyzer.analysis.scoring import calculator, quantiles
from ecoindex_analyzer.models import analysis
from ecoindex_analyzer.utils import logger
from ecoindex_analyzer.utils import url as url_mod

log = logger.create_logger("Report")

TEMPLATE_DIR = pathlib.Path(__file__).resolve().parent.parent / "templates"
TEMPLATE_NAME = "report.html.j2"


def format_bytes(value: float) -> str:
    """Format a byte count with a decimal unit (``1.5 KB``, ``2.0 MB``)."""
    size = float(value)
    for unit in ("B", "KB", "MB"):
        if abs(size) < 1000:
            return f"{int(size)} {unit}" if unit == "B" else f"{size:.1f} {unit}"
        size /= 1000
    return f"{size:.1f} GB"


def format_ms(value: float | None) -> str:
    if value is None:
        return "n/a"
    return f"{value / 1000:.2f} s" if value >= 1000 else f"{value:.0f} ms"


def create_environment() -> jinja2.Environment:
    """Return the template environment with the report filters."""
    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=jinja2.select_autoescape(["html", "j2"]),
        undefined=jinja2.StrictUndefined,
    )
    env.filters["format_bytes"] = format_bytes
    env.filters["format_ms"] = format_ms
    return env


def render_html_report(result: analysis.AnalysisResult) -> str:
    """Render *result* to an HTML document."""
    template = create_environment().get_template(TEMPLATE_NAME)
    grade = result.ecoindex.grade
    return template.render(
        result=result,
        grade_color=quantiles.GRADE_COLORS[grade],
        grade_label=calculator.get_grade_label(grade),
    )


def write_html_report(result: analysis.AnalysisResult, report_dir: str) -> str | None:
    """Render and save the report for *result*.

    Args:
        result: The assembled analysis result.
        report_dir: Target directory (created when missing).

    Returns:
        The path of the written file, or ``None`` when rendering or
        writing failed.
    """
    directory = pathlib.Path(report_dir)
    timestamp = datetime.now(UTC).strftime("%Y-%m-%d_%H-%M-%S-%f")
    stem = logger.safe_filename(url_mod.extract_domain(result.url))
    # Concurrent runs on one domain must never share a file.
    path = directory / f"{stem}_{timestamp}_{uuid.uuid4().hex[:8]}.html"

    try:
        html = render_html_report(result)
        directory.mkdir(parents=True, exist_ok=True)
        with path.open("x", encoding="utf-8") as fh:
            fh.write(html)
    except (jinja2.TemplateError, OSError) as err:
        log.error("Failed to write HTML report", {"error": str(err)})
        return None

    log.info("Report saved", {"path": str(path)})
    return str(path.resolve())
