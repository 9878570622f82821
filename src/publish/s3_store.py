# src/publish/s3_store.py — v2
"""S3 object store (PUBLISH_MODE=live).

Requires 'boto3' package: pip install boto3.
Sync uploads files whose content differs from the remote copy (MD5 against
ETag) and, with delete, removes remote keys under the prefix that no longer
exist locally.
"""

from __future__ import annotations

import hashlib
import logging
import mimetypes
from pathlib import Path

from docship.core.errors import PublishError
from docship.publish.base_object_store import (
    BaseObjectStore,
    StoredObject,
    SyncResult,
    local_files,
)

logger = logging.getLogger(__name__)

_DELETE_BATCH = 1000


def _md5(path: Path) -> str:
    digest = hashlib.md5()
    with path.open("rb") as fh:
        for block in iter(lambda: fh.read(1024 * 1024), b""):
            digest.update(block)
    return digest.hexdigest()


def _unchanged(remote: StoredObject, path: Path) -> bool:
    """Same size and, for single-part uploads, same MD5.

    Multipart ETags ("<md5>-<parts>") are not content hashes, so those objects
    are compared by size only.
    """
    if remote.size != path.stat().st_size:
        return False
    if "-" in remote.etag:
        return True
    return remote.etag == _md5(path)


class S3ObjectStore(BaseObjectStore):
    """Publish to an S3 bucket."""

    def __init__(
        self,
        bucket: str,
        region: str | None = None,
        access_key_id: str | None = None,
        secret_access_key: str | None = None,
        endpoint_url: str | None = None,
    ) -> None:
        """Initialize the S3 client.

        Args:
            bucket: Target bucket name.
            region: AWS region (optional, uses boto3 default if not set).
            access_key_id: Explicit credentials (optional, boto3 chain otherwise).
            secret_access_key: Secret matching access_key_id.
            endpoint_url: Custom endpoint for S3-compatible storage.
        """
        try:
            import boto3
            from boto3.exceptions import S3UploadFailedError
            from botocore.exceptions import BotoCoreError, ClientError
        except ImportError as e:
            raise ImportError(
                "boto3 package required for S3 publishing: pip install boto3"
            ) from e

        kwargs: dict = {}
        if region:
            kwargs["region_name"] = region
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url
        if access_key_id and secret_access_key:
            kwargs["aws_access_key_id"] = access_key_id
            kwargs["aws_secret_access_key"] = secret_access_key

        self._s3 = boto3.client("s3", **kwargs)
        self._bucket = bucket
        self._errors: tuple[type[Exception], ...] = (
            BotoCoreError, ClientError, S3UploadFailedError,
        )

    def _upload(self, local_path: Path, key: str) -> None:
        extra: dict = {}
        content_type, _ = mimetypes.guess_type(local_path.name)
        if content_type:
            extra["ContentType"] = content_type
        try:
            self._s3.upload_file(
                str(local_path), self._bucket, key, ExtraArgs=extra or None,
            )
        except self._errors as exc:
            raise PublishError(f"Upload of {local_path} to s3://{self._bucket}/{key} failed: {exc}") from exc
        logger.debug("upload: %s to s3://%s/%s", local_path, self._bucket, key)

    def copy_file(self, local_path: Path, key: str) -> None:
        logger.info("Copying %s ...", local_path.name)
        self._upload(local_path, key)

    def sync_dir(self, local_dir: Path, prefix: str, delete: bool = True) -> SyncResult:
        logger.info("Sync %s to s3://%s/%s ...", local_dir.name, self._bucket, prefix)
        base = prefix.strip("/")
        remote = {obj.key: obj for obj in self.list_objects(f"{base}/")}
        result = SyncResult()

        wanted: set[str] = set()
        for rel, path in local_files(local_dir).items():
            key = f"{base}/{rel}"
            wanted.add(key)
            existing = remote.get(key)
            if existing is not None and _unchanged(existing, path):
                continue
            self._upload(path, key)
            result.uploaded += 1

        if delete:
            stale = sorted(k for k in remote if k not in wanted)
            for i in range(0, len(stale), _DELETE_BATCH):
                batch = stale[i:i + _DELETE_BATCH]
                try:
                    self._s3.delete_objects(
                        Bucket=self._bucket,
                        Delete={"Objects": [{"Key": k} for k in batch], "Quiet": True},
                    )
                except self._errors as exc:
                    raise PublishError(f"Delete under s3://{self._bucket}/{base} failed: {exc}") from exc
                for k in batch:
                    logger.debug("delete: s3://%s/%s", self._bucket, k)
            result.deleted = len(stale)

        return result

    def list_objects(self, prefix: str = "") -> list[StoredObject]:
        objects: list[StoredObject] = []
        try:
            paginator = self._s3.get_paginator("list_objects_v2")
            for page in paginator.paginate(Bucket=self._bucket, Prefix=prefix):
                for obj in page.get("Contents", []):
                    modified = obj.get("LastModified")
                    objects.append(StoredObject(
                        key=obj["Key"],
                        size=int(obj.get("Size", 0)),
                        etag=str(obj.get("ETag", "")).strip('"'),
                        last_modified=modified.isoformat() if hasattr(modified, "isoformat") else str(modified or ""),
                    ))
        except self._errors as exc:
            raise PublishError(f"Listing s3://{self._bucket}/{prefix} failed: {exc}") from exc
        return objects
