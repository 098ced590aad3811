"""
Sidecar entry point.

    python -m ecoindex_analyzer.sidecar.cli <url> [<chrome-path>] [--html]

Runs one measurement and prints exactly one JSON document to stdout.
SIGINT and SIGTERM cancel the run; the browser is still closed and an
``INTERRUPTED`` error document is printed.
"""

from __future__ import annotations

import argparse
import asyncio
import contextlib
import signal
import sys
from collections.abc import Sequence

import dotenv

from ecoindex_analyzer import config
from ecoindex_analyzer.models import analysis
from ecoindex_analyzer.pipeline import analyze
from ecoindex_analyzer.sidecar import protocol
from ecoindex_analyzer.utils import errors, logger
from ecoindex_analyzer.utils import url as url_mod

log = logger.create_logger("Sidecar")


class _ArgumentParser(argparse.ArgumentParser):
    """Reports usage errors as typed errors instead of exiting."""

    def error(self, message: str) -> None:  # type: ignore[override]
        raise errors.InvalidArgumentsError(message, self.format_usage().strip())


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="ecoindex-sidecar",
        description="Measure the EcoIndex of a web page and print the result as JSON.",
    )
    parser.add_argument("url", help="absolute http(s) URL to analyse")
    parser.add_argument("chrome_path", nargs="?", default="", help="browser executable (default: bundled Chromium)")
    parser.add_argument("--html", action="store_true", help="also write an HTML report")
    return parser


async def _run(args: argparse.Namespace) -> analysis.AnalysisResult:
    """Run the analysis as a task that termination signals cancel."""
    loop = asyncio.get_running_loop()
    task = asyncio.ensure_future(
        analyze.analyze_url(
            args.url,
            chrome_path=args.chrome_path or None,
            include_html=args.html,
            settings=config.get_settings(),
        )
    )
    handled: list[signal.Signals] = []
    for sig in (signal.SIGINT, signal.SIGTERM):
        # Not available on every platform (e.g. Windows event loops).
        with contextlib.suppress(NotImplementedError, RuntimeError):
            loop.add_signal_handler(sig, task.cancel)
            handled.append(sig)
    try:
        return await task
    except asyncio.CancelledError:
        if task.cancelled():
            log.warn("Analysis interrupted")
            raise errors.AnalysisInterrupted("Analysis interrupted by signal") from None
        raise
    finally:
        for sig in handled:
            loop.remove_signal_handler(sig)


def _emit(document: str) -> None:
    sys.stdout.write(document + "\n")
    sys.stdout.flush()


def main(argv: Sequence[str] | None = None) -> int:
    """Run the sidecar and return its exit status."""
    dotenv.load_dotenv()
    try:
        args = build_parser().parse_args(argv)
        url_mod.validate_target_url(args.url)
        result = asyncio.run(_run(args))
    except errors.EcoIndexError as err:
        log.error("Analysis failed", {"code": err.code, "error": errors.get_error_message(err)})
        _emit(protocol.encode_error(err))
        return protocol.exit_code_for(err)
    except KeyboardInterrupt:
        _emit(protocol.encode_error(errors.AnalysisInterrupted("Analysis interrupted by signal")))
        return protocol.EXIT_INTERRUPTED
    except Exception as err:
        # Anything untyped still has to reach the host as one error document.
        log.error("Unexpected failure", {"error": errors.get_error_message(err)})
        _emit(protocol.encode_error(errors.EcoIndexError(errors.get_error_message(err), type(err).__name__)))
        return protocol.EXIT_FAILURE

    _emit(protocol.encode_result(result))
    return protocol.EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
