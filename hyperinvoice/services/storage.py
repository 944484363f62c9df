"""Object storage for generated invoice PDFs.

Both uploaders share one contract: ``upload(content, logical_name)`` stores
the bytes under ``<namespace>/<logical_name>.pdf`` and returns a public URL
that makes browsers save the file instead of displaying it when
``force_download`` is set.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

import boto3
from botocore.client import BaseClient
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from hyperinvoice.services.exceptions import StorageFailure

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"


class ObjectStoreUploader(Protocol):
    def upload(self, content: bytes, logical_name: str) -> str:  # pragma: no cover - protocol
        ...


def object_key(namespace: str, logical_name: str) -> str:
    filename = f"{logical_name}.pdf"
    return f"{namespace}/{filename}" if namespace else filename


def attachment_disposition(logical_name: str) -> str:
    return f'attachment; filename="{logical_name}.pdf"'


class S3ObjectStoreUploader:
    """Stores PDFs as public-read S3 objects."""

    def __init__(
        self,
        bucket: str,
        *,
        region: str,
        namespace: str = "invoices",
        force_download: bool = True,
        public_base_url: str | None = None,
        access_key_id: str | None = None,
        secret_access_key: str | None = None,
        client: BaseClient | None = None,
    ) -> None:
        if not bucket:
            raise ValueError("An S3 bucket name is required for the s3 storage backend")
        self._bucket = bucket
        self._region = region
        self._namespace = namespace
        self._force_download = force_download
        self._public_base_url = (
            public_base_url.rstrip("/")
            if public_base_url
            else f"https://{bucket}.s3.{region}.amazonaws.com"
        )
        self._access_key_id = access_key_id
        self._secret_access_key = secret_access_key
        self._client = client

    def _s3(self) -> BaseClient:
        if self._client is None:
            client_kwargs: dict[str, object] = {
                "region_name": self._region,
                "config": Config(signature_version="s3v4"),
            }
            if self._access_key_id and self._secret_access_key:
                client_kwargs["aws_access_key_id"] = self._access_key_id
                client_kwargs["aws_secret_access_key"] = self._secret_access_key
            self._client = boto3.client("s3", **client_kwargs)
        return self._client

    def upload(self, content: bytes, logical_name: str) -> str:
        key = object_key(self._namespace, logical_name)
        put_kwargs: dict[str, object] = {
            "Bucket": self._bucket,
            "Key": key,
            "Body": content,
            "ContentType": PDF_CONTENT_TYPE,
            "ACL": "public-read",
        }
        if self._force_download:
            put_kwargs["ContentDisposition"] = attachment_disposition(logical_name)

        logger.info(
            "Uploading %s (%d bytes) to s3://%s", key, len(content), self._bucket
        )
        try:
            self._s3().put_object(**put_kwargs)
        except (BotoCoreError, ClientError) as exc:
            logger.error("S3 upload failed for %s: %s", key, exc)
            raise StorageFailure(
                f"Failed to upload PDF to storage: {exc}", cause=exc
            ) from exc

        url = f"{self._public_base_url}/{key}"
        logger.info("Uploaded %s to %s", key, url)
        return url


class LocalObjectStoreUploader:
    """Writes PDFs to a local directory served by the app under ``/files``."""

    def __init__(
        self,
        root: str | Path,
        *,
        namespace: str = "invoices",
        force_download: bool = True,
        public_base_url: str | None = None,
    ) -> None:
        self._root = Path(root)
        self._namespace = namespace
        self._force_download = force_download
        self._public_base_url = (public_base_url or "http://localhost:8000").rstrip("/")

    @property
    def root(self) -> Path:
        return self._root

    def upload(self, content: bytes, logical_name: str) -> str:
        key = object_key(self._namespace, logical_name)
        destination = self._root / key
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            destination.write_bytes(content)
        except OSError as exc:
            logger.error("Local storage write failed for %s: %s", destination, exc)
            raise StorageFailure(
                f"Failed to upload PDF to storage: {exc}", cause=exc
            ) from exc

        url = f"{self._public_base_url}/files/{key}"
        if self._force_download:
            url += "?download=1"
        logger.info("Stored %s at %s", key, destination)
        return url
