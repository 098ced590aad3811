"""
Network capture over the DevTools protocol.

Playwright's ``request``/``response`` events do not expose encoded
transfer sizes or the negotiated protocol, so the recorder listens to
the raw ``Network.*`` CDP events of the page instead.  Handlers are
synchronous and only update in-memory entries.
"""

from __future__ import annotations

from typing import Any

from playwright import async_api

from ecoindex_analyzer.models import network
from ecoindex_analyzer.utils import logger

log = logger.create_logger("Network")


class NetworkRecorder:
    """Accumulates one :class:`NetworkEntry` per request (redirect hops included)."""

    def __init__(self) -> None:
        self._entries: list[network.NetworkEntry] = []
        self._active: dict[str, network.NetworkEntry] = {}

    @property
    def entries(self) -> list[network.NetworkEntry]:
        """All entries in request order (a copy)."""
        return list(self._entries)

    def attach(self, cdp: async_api.CDPSession) -> None:
        """Subscribe to the ``Network`` domain events of *cdp*."""
        cdp.on("Network.requestWillBeSent", self.on_request_will_be_sent)
        cdp.on("Network.responseReceived", self.on_response_received)
        cdp.on("Network.dataReceived", self.on_data_received)
        cdp.on("Network.loadingFinished", self.on_loading_finished)
        cdp.on("Network.loadingFailed", self.on_loading_failed)
        cdp.on("Network.requestServedFromCache", self.on_served_from_cache)
        cdp.on("Network.resourceChangedPriority", self.on_priority_changed)

    # ==========================================================================
    # Event handlers
    # ==========================================================================

    def on_request_will_be_sent(self, params: dict[str, Any]) -> None:
        request_id = params.get("requestId", "")
        request = params.get("request") or {}
        timestamp = float(params.get("timestamp") or 0.0)

        redirect = params.get("redirectResponse")
        previous = self._active.pop(request_id, None)
        if previous is not None and redirect:
            # The hop ends here; the same id continues with the new URL.
            self._apply_response(previous, redirect)
            previous.encoded_data_length = int(redirect.get("encodedDataLength") or 0)
            previous.end_time = timestamp
            previous.finished = True

        entry = network.NetworkEntry(
            request_id=request_id,
            url=request.get("url", ""),
            cdp_type=params.get("type") or "",
            priority=request.get("initialPriority") or "",
            start_time=timestamp,
        )
        self._entries.append(entry)
        self._active[request_id] = entry

    def on_response_received(self, params: dict[str, Any]) -> None:
        entry = self._active.get(params.get("requestId", ""))
        if entry is None:
            return
        if params.get("type"):
            entry.cdp_type = params["type"]
        self._apply_response(entry, params.get("response") or {})

    def on_data_received(self, params: dict[str, Any]) -> None:
        entry = self._active.get(params.get("requestId", ""))
        if entry is not None:
            entry.decoded_data_length += int(params.get("dataLength") or 0)

    def on_loading_finished(self, params: dict[str, Any]) -> None:
        entry = self._active.pop(params.get("requestId", ""), None)
        if entry is None:
            return
        entry.encoded_data_length = int(params.get("encodedDataLength") or 0)
        entry.end_time = float(params.get("timestamp") or entry.start_time)
        entry.finished = True

    def on_loading_failed(self, params: dict[str, Any]) -> None:
        entry = self._active.pop(params.get("requestId", ""), None)
        if entry is None:
            return
        entry.end_time = float(params.get("timestamp") or entry.start_time)
        entry.failed = True
        entry.error_text = params.get("errorText") or None
        log.debug("Request failed", {"url": entry.url, "error": entry.error_text})

    def on_served_from_cache(self, params: dict[str, Any]) -> None:
        entry = self._active.get(params.get("requestId", ""))
        if entry is not None:
            entry.from_cache = True

    def on_priority_changed(self, params: dict[str, Any]) -> None:
        entry = self._active.get(params.get("requestId", ""))
        if entry is not None and params.get("newPriority"):
            entry.priority = params["newPriority"]

    @staticmethod
    def _apply_response(entry: network.NetworkEntry, response: dict[str, Any]) -> None:
        entry.status_code = int(response.get("status") or 0)
        entry.protocol = response.get("protocol") or ""
        entry.mime_type = response.get("mimeType") or ""
        entry.response_headers = {
            str(name).lower(): str(value) for name, value in (response.get("headers") or {}).items()
        }
        entry.from_cache = entry.from_cache or bool(
            response.get("fromDiskCache") or response.get("fromPrefetchCache")
        )
