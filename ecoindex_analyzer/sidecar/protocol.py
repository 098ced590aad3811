"""
Message contract of the sidecar process boundary.

The child writes exactly one JSON document to stdout: either the
result payload, or ``{"error": true, "code", "message", "details"?}``
with a non-zero exit code.  Logs never go to stdout.
"""

from __future__ import annotations

import json
from typing import Any

import pydantic

from ecoindex_analyzer.models import analysis
from ecoindex_analyzer.utils import errors

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130

# Characters of child stderr kept in error details.
_STDERR_TAIL = 2000


def encode_result(result: analysis.AnalysisResult) -> str:
    """Serialize a result as a single-line JSON document."""
    return json.dumps(result.to_payload(), ensure_ascii=False)


def encode_error(error: errors.EcoIndexError) -> str:
    """Serialize a typed error as a single-line JSON document."""
    return json.dumps(error.to_payload(), ensure_ascii=False)


def exit_code_for(error: errors.EcoIndexError) -> int:
    if isinstance(error, errors.AnalysisInterrupted):
        return EXIT_INTERRUPTED
    if isinstance(error, errors.InvalidArgumentsError):
        return EXIT_USAGE
    return EXIT_FAILURE


def _tail(text: str) -> str | None:
    text = text.strip()
    return text[-_STDERR_TAIL:] if text else None


def _error_from_document(data: dict[str, Any]) -> errors.EcoIndexError:
    details = data.get("details")
    return errors.error_from_payload(
        str(data.get("code") or errors.EcoIndexError.code),
        str(data.get("message") or "Sidecar reported an error"),
        str(details) if details is not None else None,
    )


def decode_output(stdout: str, returncode: int, stderr: str = "") -> analysis.AnalysisResult:
    """Parse the child's stdout into a result, or raise the error it reports.

    Args:
        stdout: Everything the child wrote to stdout.
        returncode: The child's exit status.
        stderr: The child's log output, used for error details.

    Raises:
        ProcessCommunicationError: No usable output, or a failing exit
            status without an error document.
        ParseError: The output is not a valid result document.
        EcoIndexError: The typed error reported by the child.
    """
    text = stdout.strip()
    if not text:
        raise errors.ProcessCommunicationError(
            f"Sidecar exited with code {returncode} without output", _tail(stderr)
        )

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        if returncode != EXIT_OK:
            raise errors.ProcessCommunicationError(
                f"Sidecar exited with code {returncode}", _tail(stderr)
            ) from exc
        raise errors.ParseError("Sidecar output is not a single JSON document", str(exc)) from exc

    if isinstance(data, dict) and data.get("error") is True:
        raise _error_from_document(data)
    if returncode != EXIT_OK:
        raise errors.ProcessCommunicationError(
            f"Sidecar exited with code {returncode}", _tail(stderr)
        )

    try:
        return analysis.AnalysisResult.model_validate(data)
    except pydantic.ValidationError as exc:
        raise errors.ParseError("Sidecar output does not match the result schema", str(exc)) from exc
