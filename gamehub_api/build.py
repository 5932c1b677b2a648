"""
Build pipeline — sources → registry → validation → documents on disk.

Pipeline steps:
  1. Parse the catalog XML and the custom components file
  2. Register components (first id wins) and the reference data
  3. Validate; any error aborts the build before anything is written
  4. Render every document with one shared timestamp and write them
  5. Check the release for component files that were never uploaded
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from gamehub_api.catalog import (
    COMPONENT_TYPE_META, ComponentRegistry, ValidationResult, build_registry, load_sources,
)
from gamehub_api.config import BuildConfig
from gamehub_api.generators import get_timestamp
from gamehub_api.output import render_documents, write_documents
from gamehub_api.release import AssetCheck, find_missing_assets, list_release_assets


log = logging.getLogger("gamehub.build")


class BuildError(Exception):
    """Raised when a build must not be published."""

    def __init__(
        self,
        message: str,
        errors: list[str] | None = None,
        asset_check: AssetCheck | None = None,
    ) -> None:
        self.errors = list(errors or [])
        self.asset_check = asset_check
        super().__init__(message)


@dataclass
class BuildReport:
    timestamp: str
    written: list[Path] = field(default_factory=list)
    counts: dict[int, int] = field(default_factory=dict)
    total_components: int = 0
    container_count: int = 0
    asset_check: AssetCheck | None = None


def load_registry(config: BuildConfig) -> ComponentRegistry:
    """Read every source and return the frozen registry."""
    log.info("Parsing sources...")
    sources = load_sources(config)
    log.info("Total: %d components", len(sources.components))

    log.info("Building registry...")
    registry = build_registry(
        config,
        sources.components,
        containers=sources.containers,
        imagefs=sources.imagefs,
        defaults=sources.defaults,
        execution_config=sources.execution_config,
    )
    log.info("Registered %d unique components", registry.get_total_count())
    return registry


def validate_sources(config: BuildConfig) -> ValidationResult:
    result = load_registry(config).validate()
    _log_validation(result)
    return result


def _log_validation(result: ValidationResult) -> None:
    if result.valid:
        log.info("All validations passed")
        return
    log.error("Validation errors:")
    for error in result.errors:
        log.error("  - %s", error)


def _log_summary(registry: ComponentRegistry) -> None:
    counts = registry.get_counts_by_type()
    log.info("Summary:")
    log.info("  Total components: %d", registry.get_total_count())
    for t, count in counts.items():
        log.info("  - Type %d (%s): %d", t, COMPONENT_TYPE_META[t].display_name, count)
    log.info("  Containers: %d", len(registry.containers))


def build(config: BuildConfig, *, check_release: bool = True) -> BuildReport:
    """Run one full build pass.

    Raises
    ------
    SourceError
        A source file is unreadable or incomplete.
    BuildError
        Validation failed, or component files are missing from the release.
    GenerationError
        A strict reference could not be resolved while rendering.
    """
    registry = load_registry(config)

    # ── Validate ──────────────────────────────────────────────────
    log.info("Validating...")
    result = registry.validate()
    _log_validation(result)
    if not result.valid:
        raise BuildError(f"Validation failed with {len(result.errors)} error(s)", result.errors)

    # ── Render + write ────────────────────────────────────────────
    timestamp = config.timestamp or get_timestamp()
    log.info("Generating output files (time=%s)...", timestamp)
    documents = render_documents(registry, timestamp)
    written = write_documents(config.output_dir, documents)
    log.info("Build complete: %d files in %s", len(written), config.output_dir)
    _log_summary(registry)

    report = BuildReport(
        timestamp=timestamp,
        written=written,
        counts=registry.get_counts_by_type(),
        total_components=registry.get_total_count(),
        container_count=len(registry.containers),
    )

    # ── Release assets ────────────────────────────────────────────
    if check_release and config.github_repo:
        log.info("Checking release %s for missing files...", config.github_release)
        assets = list_release_assets(config.github_repo, config.github_release)
        check = find_missing_assets(registry, assets)
        report.asset_check = check
        if check.skipped:
            log.info("Skipped (could not fetch release assets)")
        elif check.ok:
            log.info("All %d component files exist on the release", check.total)
        else:
            names = [o.asset_name for o in check.missing]
            raise BuildError(
                f"{len(check.missing)} of {check.total} files are missing from the release",
                names,
                asset_check=check,
            )

    return report
