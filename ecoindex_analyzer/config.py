"""
Runtime configuration for measurement runs.

Every setting binds to an ``ECOINDEX_*`` environment variable via
``pydantic_settings.BaseSettings``.  The sidecar entry point loads a
``.env`` file first (``python-dotenv``), so values placed there are
picked up too.

Protocol constants that define the measurement itself (viewport,
settle delays, scroll speed) live in
:mod:`ecoindex_analyzer.browser.navigation` and are not configurable:
changing them changes what is being measured.
"""

from __future__ import annotations

import functools

import pydantic
import pydantic_settings


class AnalyzerSettings(pydantic_settings.BaseSettings):
    """Configuration for the browser driver and the sidecar boundary.

    Attributes:
        chrome_path: Browser executable; empty uses Playwright's Chromium.
        headless: Run the browser without a window.
        render_timeout_ms: Bound on navigation plus load completion.
        first_paint_timeout_ms: Bound on observing the first paint.
        scroll_timeout_ms: Bound on the synthesized scroll gesture.
        script_timeout_ms: Bound on each in-page measurement script.
        sidecar_timeout_s: Wall-clock bound on one sidecar process.
        report_dir: Directory receiving HTML reports.
    """

    model_config = pydantic_settings.SettingsConfigDict(populate_by_name=True)

    chrome_path: str = pydantic.Field(
        default="", validation_alias="ECOINDEX_CHROME_PATH"
    )
    headless: bool = pydantic.Field(
        default=True, validation_alias="ECOINDEX_HEADLESS"
    )
    render_timeout_ms: int = pydantic.Field(
        default=45000, gt=0, validation_alias="ECOINDEX_RENDER_TIMEOUT_MS"
    )
    first_paint_timeout_ms: int = pydantic.Field(
        default=30000, gt=0, validation_alias="ECOINDEX_FIRST_PAINT_TIMEOUT_MS"
    )
    scroll_timeout_ms: int = pydantic.Field(
        default=60000, gt=0, validation_alias="ECOINDEX_SCROLL_TIMEOUT_MS"
    )
    script_timeout_ms: int = pydantic.Field(
        default=10000, gt=0, validation_alias="ECOINDEX_SCRIPT_TIMEOUT_MS"
    )
    sidecar_timeout_s: float = pydantic.Field(
        default=180.0, gt=0, validation_alias="ECOINDEX_SIDECAR_TIMEOUT_S"
    )
    report_dir: str = pydantic.Field(
        default=".reports", validation_alias="ECOINDEX_REPORT_DIR"
    )


@functools.lru_cache(maxsize=1)
def get_settings() -> AnalyzerSettings:
    """Return the process-wide settings (read from the environment once)."""
    return AnalyzerSettings()
