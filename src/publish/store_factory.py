# src/publish/store_factory.py — v1
"""Factory: instantiate object store and CDN invalidator from configuration."""

from __future__ import annotations

from docship.config.settings import ConfigurationError, Settings
from docship.publish.base_object_store import BaseObjectStore
from docship.publish.cdn import BaseInvalidator, DryRunInvalidator
from docship.publish.dry_run_store import DryRunObjectStore

SYNC_TRANSCRIPT = "aws_sync.log"


def create_object_store(settings: Settings) -> BaseObjectStore:
    """Create the publish target for PUBLISH_MODE.

    Raises:
        ConfigurationError: If live mode lacks a bucket.
    """
    if settings.publish_mode == "dry_run":
        return DryRunObjectStore(
            bucket=settings.s3_bucket,
            transcript=settings.logs_path / SYNC_TRANSCRIPT,
        )

    if settings.publish_mode == "live":
        from docship.publish.s3_store import S3ObjectStore
        if not settings.s3_bucket:
            raise ConfigurationError("S3_BUCKET must be set when PUBLISH_MODE=live")
        return S3ObjectStore(
            bucket=settings.s3_bucket,
            region=settings.aws_region or None,
            access_key_id=settings.aws_access_key_id or None,
            secret_access_key=settings.aws_secret_access_key or None,
        )

    raise ConfigurationError(f"Unsupported publish mode: {settings.publish_mode!r}")


def create_invalidator(settings: Settings) -> BaseInvalidator:
    """Create the CDN invalidator for PUBLISH_MODE.

    Raises:
        ConfigurationError: If live mode lacks a distribution id.
    """
    if settings.publish_mode == "dry_run":
        return DryRunInvalidator(
            distribution_id=settings.aws_cloudfront_id,
            transcript=settings.logs_path / SYNC_TRANSCRIPT,
        )

    if settings.publish_mode == "live":
        from docship.publish.cdn import CloudFrontInvalidator
        if not settings.aws_cloudfront_id:
            raise ConfigurationError(
                "AWS_CLOUDFRONT_ID must be set when PUBLISH_MODE=live"
            )
        return CloudFrontInvalidator(
            distribution_id=settings.aws_cloudfront_id,
            access_key_id=settings.aws_access_key_id or None,
            secret_access_key=settings.aws_secret_access_key or None,
        )

    raise ConfigurationError(f"Unsupported publish mode: {settings.publish_mode!r}")
