# src/publish/cdn.py — v1
"""CDN cache invalidation.

Invalidation always covers the whole distribution ("/*"): it is not scoped to
the paths that changed.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path

from docship.core.errors import PublishError
from docship.logging.handlers import append_line

logger = logging.getLogger(__name__)

ALL_PATHS: tuple[str, ...] = ("/*",)


class BaseInvalidator(ABC):
    """Unified interface for CDN invalidation backends."""

    @abstractmethod
    def invalidate(self, paths: Sequence[str] = ALL_PATHS) -> str:
        """Request invalidation and return the invalidation id."""


class CloudFrontInvalidator(BaseInvalidator):
    """Invalidate a CloudFront distribution via boto3."""

    def __init__(
        self,
        distribution_id: str,
        access_key_id: str | None = None,
        secret_access_key: str | None = None,
    ) -> None:
        try:
            import boto3
            from botocore.exceptions import BotoCoreError, ClientError
        except ImportError as e:
            raise ImportError(
                "boto3 package required for CloudFront invalidation: pip install boto3"
            ) from e

        kwargs: dict = {}
        if access_key_id and secret_access_key:
            kwargs["aws_access_key_id"] = access_key_id
            kwargs["aws_secret_access_key"] = secret_access_key

        self._client = boto3.client("cloudfront", **kwargs)
        self._distribution_id = distribution_id
        self._errors: tuple[type[Exception], ...] = (BotoCoreError, ClientError)

    def invalidate(self, paths: Sequence[str] = ALL_PATHS) -> str:
        items = list(paths)
        try:
            response = self._client.create_invalidation(
                DistributionId=self._distribution_id,
                InvalidationBatch={
                    "Paths": {"Quantity": len(items), "Items": items},
                    "CallerReference": f"docship-{time.time_ns()}",
                },
            )
        except self._errors as exc:
            raise PublishError(
                f"Invalidation of {self._distribution_id} failed: {exc}"
            ) from exc
        invalidation_id = response["Invalidation"]["Id"]
        logger.info(
            "CloudFront invalidation %s created for %s (%s)",
            invalidation_id, self._distribution_id, ", ".join(items),
        )
        return invalidation_id


class DryRunInvalidator(BaseInvalidator):
    """Record the invalidation command instead of calling CloudFront."""

    def __init__(self, distribution_id: str, transcript: Path) -> None:
        self._distribution_id = distribution_id or "DRY-RUN-DISTRIBUTION"
        self._transcript = transcript

    def invalidate(self, paths: Sequence[str] = ALL_PATHS) -> str:
        quoted = " ".join(f'"{p}"' for p in paths)
        command = (
            f"aws cloudfront create-invalidation "
            f"--distribution-id {self._distribution_id} --paths {quoted}"
        )
        append_line(self._transcript, command)
        logger.info("[dry-run] %s", command)
        return "dry-run"
