"""Report model: identities, per-file coverage entries and the report itself."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeAlias

from sendcov._meta import logger
from sendcov.core.encode import expand_branches, expand_lines
from sendcov.core.files import read_source

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Sequence

    from sendcov.core.types import HitMap


# -----------------------------------------------------------------------------
# Branch data
# -----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class BranchRecord:
    """One observed branch outcome."""

    line_number: int
    block_name: int
    branch_number: int
    hits: int

    def __post_init__(self) -> None:
        """Validate that all fields are usable wire integers."""
        if self.line_number < 1:
            msg = "BranchRecord.line_number must be >= 1"
            raise ValueError(msg)
        if self.block_name < 0 or self.branch_number < 0:
            msg = "BranchRecord.block_name/branch_number must be >= 0"
            raise ValueError(msg)
        if self.hits < 0:
            msg = "BranchRecord.hits must be >= 0"
            raise ValueError(msg)


# -----------------------------------------------------------------------------
# Identity
# -----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class RepoToken:
    """Secret repository token issued by the coverage service."""

    repo_token: str = field(repr=False)

    def __post_init__(self) -> None:
        """Reject empty tokens."""
        if not self.repo_token:
            msg = "RepoToken.repo_token must not be empty"
            raise ValueError(msg)

    def to_dict(self) -> dict[str, str]:
        return {"repo_token": self.repo_token}


@dataclass(frozen=True, slots=True)
class ServiceJob:
    """CI service name and job id identifying a single CI execution."""

    service_name: str
    service_job_id: str

    def __post_init__(self) -> None:
        """Reject empty service fields."""
        if not self.service_name or not self.service_job_id:
            msg = "ServiceJob.service_name/service_job_id must not be empty"
            raise ValueError(msg)

    def to_dict(self) -> dict[str, str]:
        return {"service_name": self.service_name, "service_job_id": self.service_job_id}


Identity: TypeAlias = RepoToken | ServiceJob


# -----------------------------------------------------------------------------
# Per-file coverage
# -----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class SourceFile:
    """Coverage contribution of a single source file.

    Notes
    -----
    - ``coverage`` has exactly one slot per physical line of the file.
      ``None`` means "not relevant to coverage", an integer is a hit count.
    - ``branches is None`` means branch data was not collected; an empty
      tuple means it was collected and is empty. The two serialise
      differently.
    - ``source`` is only populated on request.
    """

    name: str
    source_digest: str
    coverage: tuple[int | None, ...]
    branches: tuple[int, ...] | None = None
    source: str | None = None

    @classmethod
    def build(
        cls,
        repo_path: Path | str,
        path: Path,
        hits: HitMap,
        branches: Sequence[BranchRecord] | None = None,
        *,
        include_source: bool = False,
    ) -> SourceFile:
        """Read *path* and encode its coverage.

        *repo_path* is the name reported to the service (relative to the
        repository root); *path* is where the file lives on disk.

        Raises :class:`~sendcov.errors.SourceReadError` when the file cannot
        be read.
        """
        content = read_source(Path(path))
        line_count = content.line_count
        entry = cls(
            name=Path(repo_path).as_posix(),
            source_digest=content.digest,
            coverage=tuple(expand_lines(hits, line_count)),
            branches=tuple(expand_branches(branches)) if branches is not None else None,
            source=content.text if include_source else None,
        )
        logger.debug(
            "encoded %s: %d lines, %d relevant, branches=%s",
            entry.name,
            line_count,
            entry.relevant_lines,
            "none" if entry.branches is None else len(entry.branches) // 4,
        )
        return entry

    @property
    def line_count(self) -> int:
        return len(self.coverage)

    @property
    def relevant_lines(self) -> int:
        return sum(1 for slot in self.coverage if slot is not None)

    def to_dict(self) -> dict[str, Any]:
        """Return the wire object for this file, omitting absent optional fields."""
        out: dict[str, Any] = {
            "name": self.name,
            "source_digest": self.source_digest,
            "coverage": list(self.coverage),
        }
        if self.branches is not None:
            out["branches"] = list(self.branches)
        if self.source is not None:
            out["source"] = self.source
        return out


# -----------------------------------------------------------------------------
# Report
# -----------------------------------------------------------------------------


@dataclass(slots=True)
class Report:
    """Identity plus the ordered, append-only list of per-file entries.

    A report has a single writer. Callers appending from several threads
    must serialise ``add_source`` themselves.
    """

    identity: Identity
    _sources: list[SourceFile] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        """Ensure the identity is one of the supported variants."""
        if not isinstance(self.identity, (RepoToken, ServiceJob)):
            msg = f"unsupported identity: {type(self.identity).__name__}"
            raise TypeError(msg)

    def add_source(self, source: SourceFile) -> None:
        self._sources.append(source)

    @property
    def source_files(self) -> tuple[SourceFile, ...]:
        return tuple(self._sources)


__all__ = [
    "BranchRecord",
    "Identity",
    "Report",
    "RepoToken",
    "ServiceJob",
    "SourceFile",
]
