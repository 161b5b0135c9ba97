from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from jsonschema import ValidationError, validate

from sendcov.core.config import get_schema
from sendcov.errors import EncodingError

if TYPE_CHECKING:  # pragma: no cover
    from sendcov.core.model import Report


def serialize(report: Report) -> dict[str, Any]:
    """Return the wire object for *report*.

    Identity fields come first, then ``source_files`` in insertion order.
    """
    payload: dict[str, Any] = dict(report.identity.to_dict())
    payload["source_files"] = [src.to_dict() for src in report.source_files]
    return payload


def format_json(report: Report, *, indent: int | None = None) -> str:
    """Serialise *report*, validate it against the bundled schema and dump it."""
    payload = serialize(report)
    try:
        validate(payload, get_schema())
    except ValidationError as exc:
        msg = f"report does not match the job schema: {exc.message}"
        raise EncodingError(msg) from exc
    try:
        return json.dumps(payload, indent=indent, allow_nan=False)
    except (TypeError, ValueError) as exc:
        msg = f"report is not JSON serialisable: {exc}"
        raise EncodingError(msg) from exc


def encode_payload(report: Report) -> bytes:
    """Return the UTF-8 request body for *report*."""
    return format_json(report).encode("utf-8")


__all__ = ["encode_payload", "format_json", "serialize"]
