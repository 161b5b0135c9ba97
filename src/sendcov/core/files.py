"""File and path utilities for sendcov."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from pathlib import Path

from sendcov._meta import logger
from sendcov.errors import SourceReadError


@dataclass(frozen=True, slots=True)
class SourceContent:
    """Exact bytes of a source file together with their decoded text."""

    raw: bytes
    text: str

    @property
    def digest(self) -> str:
        return md5_digest(self.raw)

    @property
    def line_count(self) -> int:
        return count_lines(self.text)


def read_source(path: Path) -> SourceContent:
    """Read *path* completely.

    Raises :class:`SourceReadError` when the file cannot be opened, read, or
    decoded as UTF-8. Nothing is returned for a partial read.
    """
    try:
        with path.open("rb") as fh:
            raw = fh.read()
    except OSError as exc:
        msg = f"{path}: cannot read source file: {exc.strerror or exc}"
        raise SourceReadError(msg) from exc
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        msg = f"{path}: source file is not valid UTF-8: {exc.reason}"
        raise SourceReadError(msg) from exc
    logger.debug("read %d bytes from %s", len(raw), path)
    return SourceContent(raw=raw, text=text)


def count_lines(text: str) -> int:
    """Return the number of lines in *text*.

    Every ``\\n`` terminates a line; a trailing segment without a terminator
    is a line too. ``\\r\\n`` endings count once.
    """
    if not text:
        return 0
    n = text.count("\n")
    return n if text.endswith("\n") else n + 1


def md5_digest(data: bytes) -> str:
    """Return the 32-character lowercase hex MD5 of *data*."""
    return hashlib.md5(data, usedforsecurity=False).hexdigest()


def normalize_path(path: Path, base: Path | None = None) -> Path:
    """Return *path* normalised relative to *base* if possible.

    When ``base`` is provided and ``path`` is within it the returned path will
    be relative to ``base``.  Otherwise an absolute path is returned.
    """
    resolved = path.resolve()
    if base is not None:
        try:
            return resolved.relative_to(base.resolve())
        except ValueError:
            pass
    return resolved


__all__ = [
    "SourceContent",
    "count_lines",
    "md5_digest",
    "normalize_path",
    "read_source",
]
