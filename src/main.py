# src/main.py — v2
"""CLI entry point: run, resolve, build, publish commands.

Usage:
    docship run        # build and publish every requested version
    docship resolve    # print the short version and tag for VERSION
    docship build      # build without publishing
    docship publish    # publish an existing _site for VERSION

All parameters come from the environment (VERSION, BASEDIR, S3_BUCKET,
AWS_CLOUDFRONT_ID, PUBLISH_MODE, JEKYLL_ENV, ...).
"""

from __future__ import annotations

import argparse
import logging
import sys

from docship.core.errors import root_tool_error
from docship.version import __version__

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        settings = _load_settings()
        _setup_logging(settings, args.verbose)
        return args.func(settings)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return _exit_code(exc)


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="docship",
        description=f"docship v{__version__}: multi-version documentation pipeline",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    p_run = subparsers.add_parser(
        "run", help="Build and publish all requested versions",
    )
    p_run.set_defaults(func=_cmd_run)

    p_resolve = subparsers.add_parser(
        "resolve", help="Resolve VERSION to its short version and tag",
    )
    p_resolve.set_defaults(func=_cmd_resolve)

    p_build = subparsers.add_parser(
        "build", help="Generate docs and assemble the site without publishing",
    )
    p_build.set_defaults(func=_cmd_build)

    p_publish = subparsers.add_parser(
        "publish", help="Publish the assembled site for VERSION and invalidate the CDN",
    )
    p_publish.set_defaults(func=_cmd_publish)

    return parser


def _cmd_run(settings) -> int:
    from docship.pipeline.orchestrator import DocsPipeline

    report = DocsPipeline(settings).run()
    print(f"\nPublished {len(report.versions)} version(s):")
    for version in report.versions:
        uploaded = version.publish.uploaded if version.publish else 0
        print(
            f"  {version.resolved.version:<12} tag={version.resolved.tag:<14} "
            f"libraries={len(version.libraries)} uploaded={uploaded}"
        )
    print(f"  Duration: {report.duration_seconds:.1f}s")
    return 0


def _cmd_resolve(settings) -> int:
    from docship.pipeline.orchestrator import DocsPipeline

    pipeline = DocsPipeline(settings)
    resolved = pipeline.resolve(pipeline.primary_version())
    print(f"SHORT_VERSION={resolved.short_version}")
    print(f"LAST_TAG={resolved.tag}")
    return 0


def _cmd_build(settings) -> int:
    from docship.pipeline.orchestrator import DocsPipeline

    reports = DocsPipeline(settings).build()
    for report in reports:
        print(f"  {report.resolved.version}: {report.output_dir}")
    return 0


def _cmd_publish(settings) -> int:
    from docship.pipeline.orchestrator import DocsPipeline

    report = DocsPipeline(settings).publish_existing()
    if report.publish is not None:
        print(
            f"  {report.publish.target_prefix}: {len(report.publish.actions)} actions, "
            f"{report.publish.uploaded} uploaded, {report.publish.deleted} deleted"
        )
    return 0


def _load_settings():
    from docship.config.settings import load_settings

    return load_settings()


def _exit_code(exc: BaseException) -> int:
    """Exit with the failing tool's status when a tool caused the error."""
    tool_error = root_tool_error(exc)
    if tool_error is not None and tool_error.returncode > 0:
        return min(tool_error.returncode, 255)
    return 1


def _setup_logging(settings, verbose: bool) -> None:
    """Configure logging from settings; -v forces DEBUG."""
    from docship.logging.logger import setup_logging

    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=str(settings.log_file) if settings.log_file else None,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )


if __name__ == "__main__":
    sys.exit(main())
