# src/config/settings.py — v2
"""Typed configuration loaded from the environment via pydantic-settings.

The pipeline takes no positional parameters: CI sets environment variables
(VERSION, S3_BUCKET, AWS_CLOUDFRONT_ID, JEKYLL_ENV, ...) and everything else
has a default matching the standard checkout layout under BASEDIR.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file and environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Checkouts ===
    basedir: Path = Path("..")
    site_repo: str = "arrow-site"
    core_repo: str = "arrow"
    orchestrator_repo: str = "arrow-master"
    manifest_file: str = "arrow/lists/libs.txt"
    version_list_file: str = "arrow-site/update-other-versions.txt"
    logs_dir: str = "logs"

    # === Version ===
    version: str = ""
    latest_version_key: str = "LATEST_VERSION"

    # === Site ===
    site_source_dir: str = "docs"
    site_output_dir: str = "_site"
    site_override_page: str = "docs/index.md"
    site_sidebar_dir: str = "sidebar"
    site_data_dir: str = "docs/_data"
    site_head_template: str = "docs/_includes/_head-docs.html"
    site_version_placeholder: str = "latest"
    site_url: str = "https://arrow-kt.io"
    jekyll_env: str = "production"

    # === Library build ===
    docs_module_line: str = "include 'arrow-docs'"
    docs_build_file: str = "arrow-docs/build.gradle"
    global_properties_ref: str = (
        "https://raw.githubusercontent.com/arrow-kt/arrow/master/gradle.properties"
    )
    local_conf_ref: str = "../arrow/gradle.properties"
    oss_repository: str = "https://oss.jfrog.org/artifactory/oss-snapshot-local/"
    hosted_repository: str = "https://dl.bintray.com/arrow-kt/arrow-kt/"

    # === Publishing ===
    publish_mode: Literal["live", "dry_run"] = "dry_run"
    s3_bucket: str = ""
    s3_prefix: str = ""
    aws_region: str = ""
    aws_access_key_id: str = ""
    aws_secret_access_key: str = ""
    aws_cloudfront_id: str = ""
    main_content: str = (
        "index.html,404.html,css,js,img,fonts,favicon.ico,robots.txt,CNAME"
    )
    sitemap_enabled: bool = False

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "text"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 5

    # --- Validators ---

    @field_validator("s3_prefix")
    @classmethod
    def strip_prefix_slashes(cls, v: str) -> str:
        """Keys never start or end with '/'."""
        return v.strip("/")

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Cross-field consistency rules."""
        errors: list[str] = []

        if self.publish_mode == "live" and not self.s3_bucket:
            errors.append("PUBLISH_MODE=live requires S3_BUCKET")

        if self.publish_mode == "live" and not self.aws_cloudfront_id:
            errors.append("PUBLISH_MODE=live requires AWS_CLOUDFRONT_ID")

        if bool(self.aws_access_key_id) != bool(self.aws_secret_access_key):
            errors.append(
                "AWS_ACCESS_KEY_ID and AWS_SECRET_ACCESS_KEY must be set together"
            )

        if not self.main_content_list:
            errors.append("MAIN_CONTENT must name at least one entry")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    @property
    def main_content_list(self) -> list[str]:
        """Parse comma-separated main-content allow-list."""
        return [n.strip() for n in self.main_content.split(",") if n.strip()]

    @property
    def site_path(self) -> Path:
        return self.basedir / self.site_repo

    @property
    def core_path(self) -> Path:
        return self.basedir / self.core_repo

    @property
    def orchestrator_path(self) -> Path:
        return self.basedir / self.orchestrator_repo

    @property
    def manifest_path(self) -> Path:
        return self.basedir / self.manifest_file

    @property
    def version_list_path(self) -> Path:
        return self.basedir / self.version_list_file

    @property
    def logs_path(self) -> Path:
        return self.basedir / self.logs_dir

    def library_path(self, library: str) -> Path:
        """Working copy of a library listed in the manifest."""
        return self.basedir / library

    def docs_prefix(self, short_version: str) -> str:
        """Remote key prefix for a version's documentation tree."""
        parts = [self.s3_prefix, "docs", short_version]
        return "/".join(p for p in parts if p)


def load_settings(**overrides: object) -> Settings:
    """Load settings from environment with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or one-off runs).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
