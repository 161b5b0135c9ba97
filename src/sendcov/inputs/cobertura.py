"""Cobertura XML reader producing hit maps and branch records.

Only ``<sources><source>``, ``<class filename=...>`` and ``<line number hits>``
elements are used. Branch records are derived from ``condition-coverage="P% (covered/total)"``:
each line yields ``total`` records on block ``0``, numbered ``0..total-1``,
where the first ``covered`` carry the line's hit count and the rest ``0``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from defusedxml import ElementTree

from sendcov._meta import logger
from sendcov.core.model import BranchRecord
from sendcov.errors import InvalidCoverageXMLError

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Iterator
    from xml.etree.ElementTree import Element  # noqa: S405


@dataclass(slots=True)
class FileHits:
    """Hit map and (optional) branch records for one file of a Cobertura report."""

    filename: str
    hits: dict[int, int] = field(default_factory=dict)
    branch_counts: dict[int, tuple[int, int]] = field(default_factory=dict)

    @property
    def branches(self) -> list[BranchRecord] | None:
        if not self.branch_counts:
            return None
        out: list[BranchRecord] = []
        for line in sorted(self.branch_counts):
            covered, total = self.branch_counts[line]
            taken = max(self.hits.get(line, 0), 1)
            out.extend(
                BranchRecord(
                    line_number=line,
                    block_name=0,
                    branch_number=n,
                    hits=taken if n < covered else 0,
                )
                for n in range(total)
            )
        return out or None


def read_root(path: Path) -> Element:
    """Parse coverage XML and return the root element."""
    try:
        root = ElementTree.parse(path).getroot()
    except ElementTree.ParseError as exc:
        msg = f"{path}: failed to parse coverage XML: {exc}"
        raise InvalidCoverageXMLError(msg) from exc
    tag = (root.tag or "").split("}")[-1]
    if tag.lower() != "coverage":
        msg = f"unexpected root tag {root.tag!r} in {path}"
        raise InvalidCoverageXMLError(msg)
    return root


_COND_RE = re.compile(r"\(\s*(?P<covered>\d+)\s*/\s*(?P<total>\d+)\s*\)")


def parse_condition_coverage(text: str) -> tuple[int, int] | None:
    """Parse ``'50% (1/2)'`` into ``(covered, total)``."""
    if not text:
        return None
    m = _COND_RE.search(text)
    if not m:
        return None
    covered = int(m.group("covered"))
    total = int(m.group("total"))
    return min(covered, total), total


def source_roots(root: Element, *, base_path: Path | None = None) -> list[Path]:
    """Return the ``<sources><source>`` directories of a report.

    Relative roots are taken relative to *base_path* when given.
    """
    roots: list[Path] = []
    for src in root.findall(".//sources/source"):
        text = (src.text or "").strip()
        if not text:
            continue
        path = Path(text)
        if not path.is_absolute() and base_path is not None:
            path = base_path / path
        roots.append(path)
    return roots


def iter_file_hits(root: Element) -> Iterator[FileHits]:
    """Yield one :class:`FileHits` per distinct filename, in document order.

    Duplicate entries for the same file and line keep the highest hit count
    and the branch counts with the largest total.
    """
    by_file: dict[str, FileHits] = {}
    for cls in root.findall(".//class"):
        filename = cls.get("filename")
        if not filename:
            continue
        fh = by_file.setdefault(filename, FileHits(filename=filename))
        for line_elem in cls.findall("./lines/line"):
            try:
                lineno = int(line_elem.get("number", ""))
                hits = int(line_elem.get("hits", ""))
            except ValueError:
                logger.debug("skipping malformed <line> in %s", filename)
                continue
            if lineno < 1 or hits < 0:
                continue
            fh.hits[lineno] = max(fh.hits.get(lineno, 0), hits)

            if line_elem.get("branch") != "true":
                continue
            cc = parse_condition_coverage(line_elem.get("condition-coverage", "") or "")
            if cc is None or cc[1] == 0:
                continue
            prev = fh.branch_counts.get(lineno)
            if prev is None or cc[1] > prev[1] or (cc[1] == prev[1] and cc[0] > prev[0]):
                fh.branch_counts[lineno] = cc
    yield from by_file.values()


__all__ = [
    "FileHits",
    "iter_file_hits",
    "parse_condition_coverage",
    "read_root",
    "source_roots",
]
