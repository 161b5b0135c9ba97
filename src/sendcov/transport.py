"""Submission of a report to the coverage service over HTTPS.

The core only produces the request body. Everything about the connection
(TLS, pooling, timeouts) belongs to the :class:`Transport` in use; the default
one is backed by :mod:`requests`. Nothing here retries.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

import requests

from sendcov._meta import __version__, logger
from sendcov.core.config import DEFAULT_ENDPOINT, DEFAULT_TIMEOUT, SubmitConfig
from sendcov.errors import TransportError
from sendcov.output.json import encode_payload

if TYPE_CHECKING:  # pragma: no cover
    from sendcov.core.model import Report


@dataclass(frozen=True, slots=True)
class TransportResult:
    """Outcome of a single POST: status plus the raw transport response."""

    ok: bool
    status_code: int
    body: str
    response: Any = None


class Transport(Protocol):
    def post(self, url: str, body: bytes) -> TransportResult: ...


class RequestsTransport:
    """POST JSON bodies with a :class:`requests.Session`."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, session: requests.Session | None = None) -> None:
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Content-Type": "application/json",
                "User-Agent": f"sendcov/{__version__}",
            }
        )

    def post(self, url: str, body: bytes) -> TransportResult:
        try:
            response = self.session.post(url, data=body, timeout=self.timeout)
        except requests.RequestException as exc:
            msg = f"POST {url} failed: {exc}"
            raise TransportError(msg) from exc
        return TransportResult(
            ok=response.ok,
            status_code=response.status_code,
            body=response.text,
            response=response,
        )


def submit(
    report: Report,
    endpoint: str | None = None,
    *,
    transport: Transport | None = None,
    config: SubmitConfig | None = None,
) -> TransportResult:
    """Encode *report* and POST it.

    The target is *endpoint* when given, else the configured endpoint, else
    :data:`~sendcov.core.config.DEFAULT_ENDPOINT`.
    """
    cfg = config or SubmitConfig()
    url = endpoint or cfg.endpoint or DEFAULT_ENDPOINT
    body = encode_payload(report)
    tx = transport or RequestsTransport(timeout=cfg.timeout)
    logger.info("submitting %d source files (%d bytes) to %s", len(report.source_files), len(body), url)
    result = tx.post(url, body)
    if result.ok:
        logger.info("coverage accepted by %s (HTTP %d)", url, result.status_code)
    else:
        logger.warning("coverage rejected by %s (HTTP %d): %s", url, result.status_code, result.body)
    return result


def send_to_endpoint(report: Report, url: str, *, transport: Transport | None = None) -> TransportResult:
    """Submit *report* to an explicit *url* (staging, tests)."""
    return submit(report, url, transport=transport)


__all__ = [
    "RequestsTransport",
    "Transport",
    "TransportResult",
    "send_to_endpoint",
    "submit",
]
