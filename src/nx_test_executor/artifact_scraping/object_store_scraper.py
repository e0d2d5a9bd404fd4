"""S3-compatible object store scraper service."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any, Protocol, cast

import boto3
from boto3.exceptions import Boto3Error
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from nx_test_executor.configuration import RunnerConfig

logger = logging.getLogger(__name__)

_MISSING_BUCKET_CODES = frozenset({"404", "NoSuchBucket", "NotFound"})
_DEFAULT_REGION = "us-east-1"


class ScrapeError(Exception):
    """Raised when artifacts cannot be uploaded to the object store."""


class Scraper(Protocol):  # pylint: disable=too-few-public-methods
    """Protocol for uploading artifact directories keyed by execution id."""

    def scrape(self, execution_id: str, directories: Sequence[Path]) -> None: ...


class ObjectStoreClientProtocol(Protocol):
    """Subset of the boto3 S3 client API used by the scraper."""

    def head_bucket(self, *, Bucket: str) -> Any: ...  # noqa: N803

    def create_bucket(self, *, Bucket: str, **kwargs: Any) -> Any: ...  # noqa: N803

    def upload_file(self, Filename: str, Bucket: str, Key: str) -> None: ...  # noqa: N803


class ObjectStoreScraper:
    """Uploads every file of the artifact directories into a bucket named after the execution."""

    def __init__(
        self,
        config: RunnerConfig,
        client: ObjectStoreClientProtocol | None = None,
    ) -> None:
        self._config = config
        self._client = client or self._create_client()

    def scrape(self, execution_id: str, directories: Sequence[Path]) -> None:
        try:
            files = [
                (directory, path)
                for directory in directories
                for path in _list_files(directory)
            ]
            if not files:
                logger.debug("no artifacts found for execution %s", execution_id)
                return
            self._ensure_bucket(execution_id)
            for directory, path in files:
                key = path.relative_to(directory.parent).as_posix()
                logger.debug("uploading %s to %s/%s", path, execution_id, key)
                self._client.upload_file(str(path), execution_id, key)
        except (Boto3Error, BotoCoreError, ClientError, OSError) as exc:
            raise ScrapeError(f"uploading artifacts of execution {execution_id}: {exc}") from exc

    def _ensure_bucket(self, bucket: str) -> None:
        try:
            self._client.head_bucket(Bucket=bucket)
            return
        except ClientError as exc:
            code = str(exc.response.get("Error", {}).get("Code", ""))
            if code not in _MISSING_BUCKET_CODES:
                raise
        kwargs: dict[str, Any] = {}
        if self._config.location and self._config.location != _DEFAULT_REGION:
            kwargs["CreateBucketConfiguration"] = {"LocationConstraint": self._config.location}
        self._client.create_bucket(Bucket=bucket, **kwargs)

    def _create_client(self) -> ObjectStoreClientProtocol:
        endpoint = self._config.endpoint
        if endpoint and "://" not in endpoint:
            scheme = "https" if self._config.ssl else "http"
            endpoint = f"{scheme}://{endpoint}"
        try:
            return cast(
                ObjectStoreClientProtocol,
                boto3.client(
                    "s3",
                    endpoint_url=endpoint or None,
                    aws_access_key_id=self._config.access_key_id or None,
                    aws_secret_access_key=self._config.secret_access_key or None,
                    aws_session_token=self._config.token or None,
                    region_name=self._config.location or _DEFAULT_REGION,
                    use_ssl=self._config.ssl,
                    config=Config(s3={"addressing_style": "path"}),
                ),
            )
        except (BotoCoreError, ValueError) as exc:
            raise ScrapeError(f"creating object store client: {exc}") from exc


def _list_files(directory: Path) -> list[Path]:
    if not directory.is_dir():
        return []
    return sorted(path for path in directory.rglob("*") if path.is_file())
