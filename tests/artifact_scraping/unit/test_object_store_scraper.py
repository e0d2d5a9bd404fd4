"""Object store scraper tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
from boto3.exceptions import S3UploadFailedError
from botocore.exceptions import ClientError
from nx_test_executor.artifact_scraping import ObjectStoreScraper, ScrapeError, scrape_artifacts
from nx_test_executor.configuration import RunnerConfig
from nx_test_executor.execution_results import ExecutionResult, ExecutionStatus, StepResult


def _config(location: str = "") -> RunnerConfig:
    return RunnerConfig(
        endpoint="minio:9000",
        access_key_id="access",
        secret_access_key="secret",
        location=location,
        token="",
        ssl=False,
        scraper_enabled=True,
        git_username="",
        git_token="",
        datadir=Path("/data"),
        nx_project="web-app-e2e",
    )


def _client_error(code: str, operation: str) -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, operation)


class FakeS3Client:
    def __init__(
        self,
        *,
        bucket_exists: bool = True,
        head_error: ClientError | None = None,
        upload_error: Exception | None = None,
    ) -> None:
        self.bucket_exists = bucket_exists
        self.head_error = head_error
        self.upload_error = upload_error
        self.created: list[tuple[str, dict[str, Any]]] = []
        self.uploads: list[tuple[str, str, str]] = []

    def head_bucket(self, *, Bucket: str) -> dict[str, Any]:  # noqa: N803
        if self.head_error is not None:
            raise self.head_error
        if not self.bucket_exists:
            raise _client_error("404", "HeadBucket")
        return {}

    def create_bucket(self, *, Bucket: str, **kwargs: Any) -> dict[str, Any]:  # noqa: N803
        self.created.append((Bucket, kwargs))
        return {}

    def upload_file(self, Filename: str, Bucket: str, Key: str) -> None:  # noqa: N803
        if self.upload_error is not None:
            raise self.upload_error
        self.uploads.append((Filename, Bucket, Key))


def _artifacts(tmp_path: Path) -> tuple[Path, Path]:
    videos = tmp_path / "cypress" / "videos"
    screenshots = tmp_path / "cypress" / "screenshots"
    (screenshots / "login.cy.ts").mkdir(parents=True)
    videos.mkdir(parents=True)
    (videos / "login.cy.ts.mp4").write_bytes(b"video")
    (screenshots / "login.cy.ts" / "failed.png").write_bytes(b"png")
    return videos, screenshots


def test_uploads_files_keyed_relative_to_artifact_root(tmp_path: Path) -> None:
    client = FakeS3Client()
    videos, screenshots = _artifacts(tmp_path)

    ObjectStoreScraper(_config(), client=client).scrape("65f1c0ffee", (videos, screenshots))

    assert client.created == []
    assert client.uploads == [
        (str(videos / "login.cy.ts.mp4"), "65f1c0ffee", "videos/login.cy.ts.mp4"),
        (
            str(screenshots / "login.cy.ts" / "failed.png"),
            "65f1c0ffee",
            "screenshots/login.cy.ts/failed.png",
        ),
    ]


def test_creates_missing_bucket_in_configured_location(tmp_path: Path) -> None:
    client = FakeS3Client(bucket_exists=False)

    ObjectStoreScraper(_config(location="eu-central-1"), client=client).scrape(
        "65f1c0ffee", _artifacts(tmp_path)
    )

    assert client.created == [
        (
            "65f1c0ffee",
            {"CreateBucketConfiguration": {"LocationConstraint": "eu-central-1"}},
        )
    ]
    assert len(client.uploads) == 2


def test_missing_directories_are_skipped(tmp_path: Path) -> None:
    client = FakeS3Client(bucket_exists=False)

    ObjectStoreScraper(_config(), client=client).scrape(
        "65f1c0ffee", (tmp_path / "cypress" / "videos",)
    )

    assert client.created == []
    assert client.uploads == []


def test_upload_failure_is_a_scrape_error(tmp_path: Path) -> None:
    client = FakeS3Client(upload_error=_client_error("AccessDenied", "PutObject"))

    with pytest.raises(ScrapeError, match="65f1c0ffee"):
        ObjectStoreScraper(_config(), client=client).scrape("65f1c0ffee", _artifacts(tmp_path))


def test_unexpected_head_bucket_failure_is_a_scrape_error(tmp_path: Path) -> None:
    client = FakeS3Client(head_error=_client_error("403", "HeadBucket"))

    with pytest.raises(ScrapeError):
        ObjectStoreScraper(_config(), client=client).scrape("65f1c0ffee", _artifacts(tmp_path))

    assert client.created == []


def test_transfer_failure_is_a_scrape_error(tmp_path: Path) -> None:
    client = FakeS3Client(upload_error=S3UploadFailedError("Failed to upload: AccessDenied"))

    with pytest.raises(ScrapeError, match="AccessDenied"):
        ObjectStoreScraper(_config(), client=client).scrape("65f1c0ffee", _artifacts(tmp_path))


def test_transfer_failure_keeps_mapped_steps(tmp_path: Path) -> None:
    client = FakeS3Client(upload_error=S3UploadFailedError("Failed to upload: AccessDenied"))
    _artifacts(tmp_path)
    result = ExecutionResult(
        status=ExecutionStatus.PASSED,
        output="raw",
        steps=(StepResult("smoke - loads", "1.5s", ExecutionStatus.PASSED),),
    )

    scraped = scrape_artifacts(
        result,
        execution_id="65f1c0ffee",
        run_path=tmp_path,
        scraper=ObjectStoreScraper(_config(), client=client),
    )

    assert scraped.status is ExecutionStatus.FAILED
    assert scraped.steps == result.steps
    assert len(scraped.errors) == 1
    assert scraped.errors[0].startswith("scrape artifacts error:")
    assert "AccessDenied" in scraped.errors[0]


def test_unreadable_artifact_directory_is_a_scrape_error(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    videos, screenshots = _artifacts(tmp_path)

    def _fail_rglob(self: Path, pattern: str) -> Any:
        raise PermissionError(13, "Permission denied", str(self))

    monkeypatch.setattr(Path, "rglob", _fail_rglob)

    with pytest.raises(ScrapeError, match="Permission denied"):
        ObjectStoreScraper(_config(), client=FakeS3Client()).scrape(
            "65f1c0ffee", (videos, screenshots)
        )
