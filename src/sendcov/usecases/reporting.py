from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import TYPE_CHECKING, TypeAlias

from sendcov._meta import logger
from sendcov.core.config import SubmitConfig
from sendcov.core.files import normalize_path
from sendcov.core.model import Report, SourceFile
from sendcov.errors import InvalidCoverageXMLError
from sendcov.inputs.cobertura import iter_file_hits, read_root, source_roots

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Sequence

    from sendcov.core.model import BranchRecord, Identity
    from sendcov.core.types import HitMap

SourceEntry: TypeAlias = tuple[Path | str, Path, "HitMap", "Sequence[BranchRecord] | None"]
"""``(repo_path, path, hits, branches)`` input for :func:`build_sources`."""


def build_sources(
    entries: Sequence[SourceEntry],
    *,
    include_source: bool = False,
    max_workers: int | None = None,
) -> list[SourceFile]:
    """Build a :class:`SourceFile` per entry on a thread pool.

    Results keep the order of *entries*. The first read failure propagates.
    """
    if not entries:
        return []

    def _build(entry: SourceEntry) -> SourceFile:
        repo_path, path, hits, branches = entry
        return SourceFile.build(repo_path, path, hits, branches, include_source=include_source)

    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        return list(pool.map(_build, entries))


def _locate(filename: str, *, roots: Sequence[Path], base_path: Path) -> Path:
    path = Path(filename)
    if path.is_absolute():
        return path
    return next((r / path for r in roots if (r / path).is_file()), base_path / path)


def build_report_from_cobertura(
    xml_path: Path,
    identity: Identity,
    *,
    base_path: Path,
    include_source: bool | None = None,
    with_branches: bool = True,
    config: SubmitConfig | None = None,
    max_workers: int | None = None,
) -> Report:
    """Read a Cobertura report and assemble a :class:`Report` for *identity*.

    Relative filenames are looked up under each ``<source>`` root of the
    report first, then under *base_path*. Every file must live inside
    *base_path* and is reported relative to it; a file outside it raises
    :class:`~sendcov.errors.InvalidCoverageXMLError`. *include_source*
    defaults to the configured value.
    """
    if include_source is None:
        include_source = (config or SubmitConfig()).include_source
    root = read_root(xml_path)
    roots = source_roots(root, base_path=base_path)
    entries: list[SourceEntry] = []
    for fh in iter_file_hits(root):
        path = _locate(fh.filename, roots=roots, base_path=base_path)
        name = normalize_path(path, base=base_path)
        if name.is_absolute():
            msg = f"{xml_path}: {fh.filename} resolves to {path}, outside {base_path}"
            raise InvalidCoverageXMLError(msg)
        entries.append((name, path, fh.hits, fh.branches if with_branches else None))
    logger.debug("cobertura report %s lists %d files", xml_path, len(entries))

    report = Report(identity)
    for source in build_sources(entries, include_source=include_source, max_workers=max_workers):
        report.add_source(source)
    return report


__all__ = ["SourceEntry", "build_report_from_cobertura", "build_sources"]
