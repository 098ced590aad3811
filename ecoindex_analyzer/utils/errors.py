"""
Typed error taxonomy for measurement runs.

Every failure a run can end with is an :class:`EcoIndexError`
subclass carrying a stable ``code``.  The code is what crosses the
sidecar process boundary; :func:`error_from_payload` rebuilds the
matching exception on the host side.
"""

from __future__ import annotations

from typing import Any, ClassVar


class EcoIndexError(Exception):
    """Base class for all measurement failures."""

    code: ClassVar[str] = "UNEXPECTED_ERROR"

    def __init__(self, message: str, details: str | None = None, *, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details
        if code is not None:
            self.code = code  # type: ignore[misc]

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON error document sent across the process boundary."""
        payload: dict[str, Any] = {"error": True, "code": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class InvalidUrlError(EcoIndexError):
    """The target is not an absolute http(s) URL."""

    code = "INVALID_URL"


class InvalidArgumentsError(EcoIndexError):
    """The sidecar was invoked with unusable arguments."""

    code = "INVALID_ARGS"


class BrowserLaunchError(EcoIndexError):
    """The browser could not be started."""

    code = "BROWSER_LAUNCH_ERROR"


class NavigationTimeout(EcoIndexError):
    """Navigation, first paint or a capture step exceeded its time bound."""

    code = "NAVIGATION_TIMEOUT"


class NetworkError(EcoIndexError):
    """The page could not be reached (DNS, connection, TLS...)."""

    code = "NETWORK_ERROR"


class MetricsCollectionError(EcoIndexError):
    """An in-page measurement script failed."""

    code = "METRICS_COLLECTION_ERROR"


class ProcessSpawnError(EcoIndexError):
    """The sidecar process could not be started."""

    code = "PROCESS_SPAWN_ERROR"


class ProcessCommunicationError(EcoIndexError):
    """The sidecar exited abnormally or produced no usable output."""

    code = "PROCESS_COMMUNICATION_ERROR"


class ProcessTimeoutError(ProcessCommunicationError):
    """The sidecar did not finish within its wall-clock budget."""

    code = "PROCESS_TIMEOUT"


class ParseError(EcoIndexError):
    """The sidecar output is not a valid result document."""

    code = "PARSE_ERROR"


class AnalysisInterrupted(EcoIndexError):
    """The run was cancelled by a signal."""

    code = "INTERRUPTED"


_ERRORS_BY_CODE: dict[str, type[EcoIndexError]] = {
    cls.code: cls
    for cls in (
        InvalidUrlError,
        InvalidArgumentsError,
        BrowserLaunchError,
        NavigationTimeout,
        NetworkError,
        MetricsCollectionError,
        ProcessSpawnError,
        ProcessCommunicationError,
        ProcessTimeoutError,
        ParseError,
        AnalysisInterrupted,
    )
}


def error_from_payload(code: str, message: str, details: str | None = None) -> EcoIndexError:
    """Rebuild a typed error from its wire representation.

    Unknown codes produce a plain :class:`EcoIndexError` that keeps
    the original code.
    """
    cls = _ERRORS_BY_CODE.get(code)
    if cls is None:
        return EcoIndexError(message, details, code=code)
    return cls(message, details)


def get_error_message(error: BaseException | object) -> str:
    """
    Safely extract an error message from an unknown error type.
    """
    if isinstance(error, EcoIndexError):
        return error.message or type(error).__name__
    if isinstance(error, Exception):
        return str(error) or type(error).__name__
    return "Unknown error"
