from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from pathlib import Path

import pytest

from sendcov.core.model import RepoToken, Report, ServiceJob

LinesSpec = Mapping[int, int | tuple[int, str]] | Iterable[int]
"""Line number -> hits, or -> ``(hits, condition-coverage)`` for branch lines."""


@pytest.fixture
def source_file(tmp_path: Path) -> Callable[..., Path]:
    """Write a source file under *tmp_path* and return its path."""

    def write(name: str, content: str | bytes) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_bytes(content.encode("utf-8"))
        return path

    return write


@pytest.fixture
def coverage_xml_content() -> Callable[..., str]:
    def build(mapping: Mapping[Path | str, LinesSpec], *, sources: Sequence[Path | str] = ()) -> str:
        classes: list[str] = []
        for file, lines in mapping.items():
            items = lines.items() if isinstance(lines, Mapping) else ((ln, 0) for ln in lines)
            parts: list[str] = []
            for ln, spec in items:
                if isinstance(spec, tuple):
                    hits, cond = spec
                    parts.append(f'<line number="{ln}" hits="{hits}" branch="true" condition-coverage="{cond}"/>')
                else:
                    parts.append(f'<line number="{ln}" hits="{spec}"/>')
            classes.append(f'<class filename="{file}"><lines>{"".join(parts)}</lines></class>')
        classes_xml = "".join(classes)
        sources_xml = "".join(f"<source>{src}</source>" for src in sources)
        sources_xml = f"<sources>{sources_xml}</sources>" if sources_xml else ""
        return f"<coverage>{sources_xml}<packages><package><classes>{classes_xml}</classes></package></packages></coverage>"

    return build


@pytest.fixture
def coverage_xml_file(
    tmp_path: Path,
    coverage_xml_content: Callable[..., str],
) -> Callable[..., Path]:
    def write(
        mapping: Mapping[Path | str, LinesSpec],
        *,
        sources: Sequence[Path | str] = (),
        filename: str = "coverage.xml",
    ) -> Path:
        xml_file = tmp_path / filename
        xml_file.write_text(coverage_xml_content(mapping, sources=sources), encoding="utf-8")
        return xml_file

    return write


@pytest.fixture
def token_report() -> Report:
    return Report(RepoToken("t0k3n"))


@pytest.fixture
def service_report() -> Report:
    return Report(ServiceJob("travis-ci", "1234"))
