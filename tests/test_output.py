from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest
from jsonschema import ValidationError, validate

from sendcov.core.config import get_schema
from sendcov.core.model import BranchRecord, RepoToken, Report, ServiceJob, SourceFile
from sendcov.errors import EncodingError
from sendcov.output.json import encode_payload, format_json, serialize

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

DIGEST = "0123456789abcdef0123456789abcdef"


def _entry(**overrides: object) -> SourceFile:
    fields: dict[str, object] = {"name": "src/main", "source_digest": DIGEST, "coverage": (1, None)}
    fields.update(overrides)
    return SourceFile(**fields)  # type: ignore[arg-type]


def test_serialize_token_report(token_report: Report) -> None:
    token_report.add_source(_entry())

    data = serialize(token_report)

    assert list(data) == ["repo_token", "source_files"]
    assert data["repo_token"] == "t0k3n"
    assert data["source_files"] == [{"name": "src/main", "source_digest": DIGEST, "coverage": [1, None]}]
    assert list(data["source_files"][0]) == ["name", "source_digest", "coverage"]


def test_serialize_service_report(service_report: Report) -> None:
    data = serialize(service_report)
    assert list(data) == ["service_name", "service_job_id", "source_files"]
    assert data["service_name"] == "travis-ci"
    assert data["service_job_id"] == "1234"
    assert data["source_files"] == []
    assert "repo_token" not in data


def test_optional_fields_are_omitted_not_null(token_report: Report) -> None:
    token_report.add_source(_entry())
    text = format_json(token_report)
    decoded = json.loads(text)["source_files"][0]
    assert "branches" not in decoded
    assert "source" not in decoded


def test_empty_branches_are_emitted(token_report: Report) -> None:
    token_report.add_source(_entry(branches=()))
    decoded = json.loads(format_json(token_report))["source_files"][0]
    assert decoded["branches"] == []


def test_field_order_with_all_optionals(token_report: Report) -> None:
    token_report.add_source(_entry(branches=(1, 0, 0, 2), source="x\ny\n"))
    data = serialize(token_report)
    assert list(data["source_files"][0]) == ["name", "source_digest", "coverage", "branches", "source"]


def test_insertion_order_is_preserved(service_report: Report) -> None:
    for name in ("z.py", "a.py", "m.py"):
        service_report.add_source(_entry(name=name))
    assert [f["name"] for f in serialize(service_report)["source_files"]] == ["z.py", "a.py", "m.py"]


@pytest.mark.parametrize("identity", [RepoToken("abc"), ServiceJob("circleci", "77")])
def test_identity_forms_are_exclusive(identity: RepoToken | ServiceJob) -> None:
    data = serialize(Report(identity))
    token_keys = {"repo_token"} & data.keys()
    service_keys = {"service_name", "service_job_id"} & data.keys()
    assert bool(token_keys) != bool(service_keys)
    if service_keys:
        assert service_keys == {"service_name", "service_job_id"}
    validate(data, get_schema())


def test_schema_rejects_mixed_identity() -> None:
    mixed = {"repo_token": "a", "service_name": "b", "service_job_id": "c", "source_files": []}
    with pytest.raises(ValidationError):
        validate(mixed, get_schema())


def test_format_json_round_trips_built_file(token_report: Report, source_file: Callable[..., Path]) -> None:
    path = source_file("src/app.py", "a = 1\nif a:\n    b = 2\n")
    token_report.add_source(
        SourceFile.build(
            "src/app.py",
            path,
            {1: 1, 2: 1, 3: 0},
            [BranchRecord(2, 0, 0, 0), BranchRecord(2, 0, 1, 1)],
            include_source=True,
        )
    )
    decoded = json.loads(encode_payload(token_report).decode("utf-8"))
    entry = decoded["source_files"][0]
    assert entry["coverage"] == [1, 1, 0]
    assert entry["branches"] == [2, 0, 0, 0, 2, 0, 1, 1]
    assert entry["source"] == "a = 1\nif a:\n    b = 2\n"


def test_encode_payload_is_utf8_bytes(token_report: Report) -> None:
    token_report.add_source(_entry(name="src/üñí.py", source="s = 'ß'\n"))
    body = encode_payload(token_report)
    assert isinstance(body, bytes)
    assert json.loads(body)["source_files"][0]["name"] == "src/üñí.py"


def test_format_json_rejects_bad_digest(token_report: Report) -> None:
    token_report.add_source(_entry(source_digest="not-a-digest"))
    with pytest.raises(EncodingError, match="job schema"):
        format_json(token_report)


def test_format_json_rejects_negative_hits(token_report: Report) -> None:
    token_report.add_source(_entry(coverage=(1, -3)))
    with pytest.raises(EncodingError):
        format_json(token_report)


def test_serialize_has_no_side_effects(token_report: Report) -> None:
    token_report.add_source(_entry())
    first = serialize(token_report)
    first["source_files"][0]["coverage"].append(99)
    assert serialize(token_report)["source_files"][0]["coverage"] == [1, None]
