"""
Host side of the sidecar boundary.

Spawns ``python -m ecoindex_analyzer.sidecar.cli`` as a child
process, bounds it with a wall-clock timeout and turns its single
JSON document back into an :class:`AnalysisResult` or a typed error.
The child is killed on timeout and when the caller is cancelled.
"""

from __future__ import annotations

import asyncio
import contextlib
import sys
from collections.abc import Sequence

from ecoindex_analyzer import config
from ecoindex_analyzer.models import analysis
from ecoindex_analyzer.sidecar import protocol
from ecoindex_analyzer.utils import errors, logger

log = logger.create_logger("SidecarRunner")

SIDECAR_MODULE = "ecoindex_analyzer.sidecar.cli"

# Seconds a stopped child gets to close its browser before it is killed.
TERMINATE_GRACE_S = 5.0


def build_command(url: str, chrome_path: str | None = None, include_html: bool = False) -> list[str]:
    """Return the argv that runs the sidecar with the current interpreter."""
    command = [sys.executable, "-m", SIDECAR_MODULE, url]
    if chrome_path:
        command.append(chrome_path)
    if include_html:
        command.append("--html")
    return command


async def _terminate(process: asyncio.subprocess.Process, grace_s: float = TERMINATE_GRACE_S) -> None:
    """Stop *process*: SIGTERM first so the child can close its browser, then SIGKILL."""
    if process.returncode is not None:
        return
    with contextlib.suppress(ProcessLookupError):
        process.terminate()
    try:
        await asyncio.wait_for(process.wait(), grace_s)
        return
    except TimeoutError:
        log.warn("Sidecar ignored SIGTERM, killing it", {"pid": process.pid})
    with contextlib.suppress(ProcessLookupError):
        process.kill()
    await process.wait()


async def run_command(command: Sequence[str], timeout_s: float) -> tuple[str, str, int]:
    """Run *command* and collect ``(stdout, stderr, returncode)``.

    Raises:
        ProcessSpawnError: The process could not be started.
        ProcessTimeoutError: It ran longer than *timeout_s*.
    """
    try:
        process = await asyncio.create_subprocess_exec(
            *command,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as err:
        raise errors.ProcessSpawnError("Failed to start sidecar", str(err)) from err

    log.debug("Sidecar started", {"pid": process.pid})
    try:
        async with asyncio.timeout(timeout_s):
            stdout, stderr = await process.communicate()
    except TimeoutError as exc:
        raise errors.ProcessTimeoutError(f"Sidecar did not finish within {timeout_s:g} s") from exc
    finally:
        await _terminate(process)

    return (
        stdout.decode("utf-8", errors="replace"),
        stderr.decode("utf-8", errors="replace"),
        process.returncode if process.returncode is not None else -1,
    )


async def run_sidecar_analysis(
    url: str,
    chrome_path: str | None = None,
    *,
    include_html: bool = False,
    timeout_s: float | None = None,
    command: Sequence[str] | None = None,
) -> analysis.AnalysisResult:
    """Measure *url* in a sidecar process.

    Args:
        url: Absolute http(s) URL.
        chrome_path: Browser executable passed to the child.
        include_html: Ask the child for an HTML report.
        timeout_s: Wall-clock bound; defaults to the configured value.
        command: Full argv to run instead of :func:`build_command`.

    Returns:
        The result parsed from the child's output.

    Raises:
        EcoIndexError: A typed failure, local or reported by the child.
    """
    timeout = timeout_s if timeout_s is not None else config.get_settings().sidecar_timeout_s
    argv = list(command) if command is not None else build_command(url, chrome_path, include_html)

    log.start_timer("sidecar")
    stdout, stderr, returncode = await run_command(argv, timeout)
    log.end_timer("sidecar", "Sidecar finished")
    if stderr.strip():
        log.debug("Sidecar log output", {"chars": len(stderr)})

    result = protocol.decode_output(stdout, returncode, stderr)
    log.info("Sidecar result received", {"score": result.ecoindex.score, "grade": result.ecoindex.grade})
    return result
