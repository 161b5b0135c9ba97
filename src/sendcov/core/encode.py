"""Array encodings used by the Coveralls job API.

Both helpers are pure: no I/O, no state, deterministic output.

``expand_lines`` turns a sparse hit map into the dense per-line array the
API expects, where index ``i`` holds the hits for line ``i + 1`` and ``None``
marks a line that is not relevant to coverage. A line missing from the hit
map is never reported as ``0``.

``expand_branches`` flattens branch records into one integer array; the
consumer regroups it four integers at a time.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sendcov._meta import logger

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Iterable

    from sendcov.core.model import BranchRecord
    from sendcov.core.types import BranchArray, CoverageArray, HitMap


def expand_lines(hits: HitMap, line_count: int) -> CoverageArray:
    """Return a ``line_count``-long array of optional hit counts.

    Keys of *hits* outside ``1..line_count`` are ignored.
    """
    if line_count < 0:
        msg = f"line_count must be >= 0, got {line_count}"
        raise ValueError(msg)
    out: CoverageArray = [hits.get(lineno) for lineno in range(1, line_count + 1)]
    dropped = sum(1 for lineno in hits if not 1 <= lineno <= line_count)
    if dropped:
        logger.debug("ignored %d hit entries outside lines 1..%d", dropped, line_count)
    return out


def expand_branches(branches: Iterable[BranchRecord]) -> BranchArray:
    """Flatten *branches* into ``[line, block, branch, hits, ...]`` in input order."""
    out: BranchArray = []
    for br in branches:
        out.extend((br.line_number, br.block_name, br.branch_number, br.hits))
    return out


__all__ = ["expand_branches", "expand_lines"]
