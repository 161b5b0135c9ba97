from sendcov.core.config import (
    DEFAULT_ENDPOINT,
    DEFAULT_TIMEOUT,
    LOG_FORMAT,
    SubmitConfig,
    get_schema,
    load_config,
)
from sendcov.core.encode import expand_branches, expand_lines
from sendcov.core.files import (
    SourceContent,
    count_lines,
    md5_digest,
    normalize_path,
    read_source,
)
from sendcov.core.model import (
    BranchRecord,
    Identity,
    Report,
    RepoToken,
    ServiceJob,
    SourceFile,
)
from sendcov.core.types import BranchArray, CoverageArray, HitMap

__all__ = [
    "DEFAULT_ENDPOINT",
    "DEFAULT_TIMEOUT",
    "LOG_FORMAT",
    "BranchArray",
    "BranchRecord",
    "CoverageArray",
    "HitMap",
    "Identity",
    "RepoToken",
    "Report",
    "ServiceJob",
    "SourceContent",
    "SourceFile",
    "SubmitConfig",
    "count_lines",
    "expand_branches",
    "expand_lines",
    "get_schema",
    "load_config",
    "md5_digest",
    "normalize_path",
    "read_source",
]
