"""Central configuration and constants for ``sendcov``."""

from __future__ import annotations

import json
import tomllib
from dataclasses import dataclass
from functools import cache
from importlib import resources
from typing import TYPE_CHECKING, Any

from sendcov._meta import logger
from sendcov.errors import ConfigError

if TYPE_CHECKING:  # pragma: no cover
    from pathlib import Path

# Coveralls job ingestion endpoint.
DEFAULT_ENDPOINT = "https://coveralls.io/api/v1/jobs"

# Seconds before the default transport gives up on a request.
DEFAULT_TIMEOUT = 30.0

# Default logging format for applications embedding sendcov.
LOG_FORMAT = "%(levelname)s: %(message)s"


@cache
def get_schema() -> dict[str, object]:
    """Load and cache the JSON schema for the job payload."""
    return json.loads(resources.files("sendcov.data").joinpath("schema.json").read_text(encoding="utf-8"))


@dataclass(frozen=True, slots=True)
class SubmitConfig:
    """Settings for building and submitting a report."""

    endpoint: str = DEFAULT_ENDPOINT
    timeout: float = DEFAULT_TIMEOUT
    include_source: bool = False


def _read_pyproject(pyproject: Path) -> Any:
    try:
        with pyproject.open("rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Failed to parse %s: %s", pyproject, e)
        return None
    return data.get("tool", {}).get("sendcov")


def load_config(pyproject: Path) -> SubmitConfig:
    """Read ``[tool.sendcov]`` from *pyproject*, falling back to defaults."""
    section = _read_pyproject(pyproject) if pyproject.exists() else None
    if section is None:
        return SubmitConfig()
    if not isinstance(section, dict):
        msg = f"{pyproject}: tool.sendcov must be a table"
        raise ConfigError(msg)

    endpoint = section.get("endpoint", DEFAULT_ENDPOINT)
    if not isinstance(endpoint, str) or not endpoint:
        msg = f"{pyproject}: tool.sendcov.endpoint must be a non-empty string"
        raise ConfigError(msg)

    timeout = section.get("timeout", DEFAULT_TIMEOUT)
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
        msg = f"{pyproject}: tool.sendcov.timeout must be a positive number"
        raise ConfigError(msg)

    include_source = section.get("include_source", False)
    if not isinstance(include_source, bool):
        msg = f"{pyproject}: tool.sendcov.include_source must be a boolean"
        raise ConfigError(msg)

    logger.debug("loaded sendcov settings from %s", pyproject)
    return SubmitConfig(endpoint=endpoint, timeout=float(timeout), include_source=include_source)


__all__ = [
    "DEFAULT_ENDPOINT",
    "DEFAULT_TIMEOUT",
    "LOG_FORMAT",
    "SubmitConfig",
    "get_schema",
    "load_config",
]
