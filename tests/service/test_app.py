"""Tests for the FastAPI service mode."""

from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from doccarchive.differ import ArchiveDiffer
from doccarchive.models import MergeOutcome, MergeRequest
from doccarchive.service import create_app

from tests._fixtures.archive_builder import ArchiveBuilder


class _RecordingMerge:
    def __init__(self) -> None:
        self.requests: list[MergeRequest] = []

    def __call__(self, request: MergeRequest) -> MergeOutcome:
        self.requests.append(request)
        return MergeOutcome(
            output=request.output,
            symbol_count=2,
            collisions={"doc://pkg/documentation/Shared": ["A.doccarchive", "B.doccarchive"]},
            conflicts={"data/documentation/kit/foo.json": ["A.doccarchive", "B.doccarchive"]},
        )


@pytest.fixture
def merge_runner() -> _RecordingMerge:
    return _RecordingMerge()


@pytest.fixture
def client(merge_runner: _RecordingMerge) -> TestClient:
    app = create_app(ArchiveDiffer, merge_runner)
    return TestClient(app)


def test_health_endpoint(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_diff_endpoint_returns_links(client: TestClient, archive_builder: ArchiveBuilder) -> None:
    initial = archive_builder.archive(
        "v1/Kit.doccarchive",
        symbols=["doc://pkg/documentation/Kit/Foo", "doc://pkg/documentation/Kit/Bar"],
    )
    newer = archive_builder.archive(
        "v2/Kit.doccarchive",
        symbols=["doc://pkg/documentation/Kit/Bar", "doc://pkg/documentation/Kit/Baz"],
    )

    response = client.post("/diff", json={"initial": str(initial), "newer": str(newer)})

    assert response.status_code == 200
    data = response.json()
    assert data["framework_name"] == "Kit"
    assert data["additions"] == ["doc:documentation/Kit/Baz/"]
    assert data["removals"] == ["doc:documentation/Kit/Foo/"]
    assert data["changelog_path"] is None
    assert not (initial.parent / "Kit_ChangeLog.md").exists()


def test_diff_endpoint_writes_changelog(client: TestClient, archive_builder: ArchiveBuilder) -> None:
    initial = archive_builder.archive("v1/Kit.doccarchive", symbols=["doc://pkg/documentation/Kit"])
    newer = archive_builder.archive("v2/Kit.doccarchive", symbols=["doc://pkg/documentation/Kit"])

    response = client.post(
        "/diff",
        json={"initial": str(initial), "newer": str(newer), "write": True, "newer_version": "2.0"},
    )

    assert response.status_code == 200
    changelog = Path(response.json()["changelog_path"])
    assert changelog.name == "Kit_ChangeLog.md"
    assert "Diff between [Release A] and 2.0" in changelog.read_text(encoding="utf-8")


def test_diff_endpoint_missing_archive(client: TestClient, tmp_path: Path) -> None:
    response = client.post(
        "/diff",
        json={"initial": str(tmp_path / "a.doccarchive"), "newer": str(tmp_path / "b.doccarchive")},
    )
    assert response.status_code == 404


def test_merge_endpoint_validates_before_running(
    client: TestClient, merge_runner: _RecordingMerge, tmp_path: Path
) -> None:
    response = client.post("/merge", json={"archives": [str(tmp_path / "Kit.zip")]})

    assert response.status_code == 400
    assert "Path extension 'zip'" in response.json()["detail"]
    assert merge_runner.requests == []


def test_merge_endpoint_runs_merge(
    client: TestClient, merge_runner: _RecordingMerge, tmp_path: Path
) -> None:
    archive = tmp_path / "A.doccarchive"
    archive.mkdir()
    output = tmp_path / "Out.doccarchive"

    response = client.post(
        "/merge", json={"archives": [str(archive)], "output_path": str(output)}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["output_path"] == str(output)
    assert data["symbol_count"] == 2
    assert data["collisions"] == {
        "doc://pkg/documentation/Shared": ["A.doccarchive", "B.doccarchive"]
    }
    assert data["conflicts"] == {
        "data/documentation/kit/foo.json": ["A.doccarchive", "B.doccarchive"]
    }
    assert merge_runner.requests[0].archives == [archive]
