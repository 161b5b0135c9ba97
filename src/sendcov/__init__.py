from sendcov._meta import __version__, logger
from sendcov.core import (
    BranchRecord,
    Report,
    RepoToken,
    ServiceJob,
    SourceFile,
    SubmitConfig,
    expand_branches,
    expand_lines,
    load_config,
)
from sendcov.errors import (
    EncodingError,
    SendcovError,
    SourceReadError,
    TransportError,
)
from sendcov.output import format_json, serialize
from sendcov.transport import RequestsTransport, TransportResult, send_to_endpoint, submit

__all__ = [
    "BranchRecord",
    "EncodingError",
    "RepoToken",
    "Report",
    "RequestsTransport",
    "SendcovError",
    "ServiceJob",
    "SourceFile",
    "SourceReadError",
    "SubmitConfig",
    "TransportError",
    "TransportResult",
    "__version__",
    "expand_branches",
    "expand_lines",
    "format_json",
    "load_config",
    "logger",
    "send_to_endpoint",
    "serialize",
    "submit",
]
