"""
Generator runner — top-level orchestration: wreq-util source → generated files.

This module ties location, extraction, rendering and IO together into a
single ``run_codegen`` function that can be called from a build step, a
CLI, or programmatically.

Architecture:
  1. Locate wreq-util's emulation table via cargo metadata.
  2. Read it into memory.
  3. Pass A (profiles) and Pass B (operating systems); gate each.
  4. Render the TypeScript and Rust documents.
  5. Write both (or, in check mode, compare them against disk).
  6. Build the report; print cargo directives from the CLI.
"""
from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from emulation_codegen.config import load_settings
from emulation_codegen.core.extractor import extract_operating_systems, extract_profiles
from emulation_codegen.core.locator import locate_enumeration_file
from emulation_codegen.core.renderer import (
    RenderedArtifact,
    render_rust_profiles,
    render_typescript_types,
)
from emulation_codegen.io.directives import format_directives
from emulation_codegen.io.loader import read_source_text
from emulation_codegen.io.schema import GenerationReport
from emulation_codegen.io.writer import (
    artifact_record,
    is_stale,
    write_artifact,
    write_report,
)
from emulation_codegen.policy.failure import CodegenError, FailureStage, gate_extraction
from emulation_codegen.policy.profile import CodegenProfile

logger = logging.getLogger(__name__)


def _dest(manifest_dir: Path, relative: str) -> Path:
    return Path(os.path.normpath(manifest_dir / relative))


def _rerun_paths(profile: CodegenProfile, source_path: Path, track_source: bool) -> List[str]:
    paths = list(profile.rerun_paths)
    if track_source:
        paths.append(str(source_path))
    return paths


# ── Public API ───────────────────────────────────────────────────────────────

def run_codegen(
    manifest_dir: Path,
    profile: CodegenProfile | None = None,
    cargo: str = "cargo",
    track_source: bool | None = None,
    check: bool = False,
    report_path: Path | None = None,
) -> GenerationReport:
    """
    Generate the TypeScript and Rust emulation bindings for one crate.

    Parameters
    ----------
    manifest_dir : Path
        Directory holding the crate's Cargo.toml; destinations are
        resolved relative to it.
    profile : CodegenProfile, optional
        Support profile. Defaults to CodegenProfile.v0().
    cargo : str
        cargo binary used for the metadata query.
    track_source : bool, optional
        Also declare the scanned wreq-util file as a rerun trigger.
        Defaults to ``profile.track_source``.
    check : bool
        Compare rendered output against disk instead of writing;
        raise STALE_ARTIFACT on any difference.
    report_path : Path, optional
        Where to write the JSON report. If None, no report is written.

    Raises
    ------
    CodegenError
        On the first failing stage. Nothing is retried.
    """
    if profile is None:
        profile = CodegenProfile.v0()
    if track_source is None:
        track_source = profile.track_source

    # ── Step 1: locate ───────────────────────────────────────────────
    package, source_path = locate_enumeration_file(manifest_dir, profile, cargo)

    # ── Step 2: read ─────────────────────────────────────────────────
    text, source_sha256 = read_source_text(source_path)

    # ── Step 3: extract ──────────────────────────────────────────────
    profiles = gate_extraction(
        extract_profiles(text, profile), "profiles", profile.dependency_name,
    )
    operating_systems = gate_extraction(
        extract_operating_systems(text, profile), "operating systems", profile.dependency_name,
    )
    logger.info(
        "Found %d browser profiles and %d operating systems",
        len(profiles), len(operating_systems),
    )

    # ── Step 4: render ───────────────────────────────────────────────
    artifacts = [
        RenderedArtifact(
            kind="typescript",
            path=_dest(manifest_dir, profile.typescript_dest),
            content=render_typescript_types(profiles, operating_systems, profile),
        ),
        RenderedArtifact(
            kind="rust",
            path=_dest(manifest_dir, profile.rust_dest),
            content=render_rust_profiles(profiles, operating_systems, profile),
        ),
    ]

    # ── Step 5: write or check ───────────────────────────────────────
    if check:
        records = [artifact_record(a, is_stale(a)) for a in artifacts]
        stale = [r.path for r in records if r.changed]
        if stale:
            raise CodegenError(
                FailureStage.STALE_ARTIFACT,
                f"Generated files are out of date: {', '.join(stale)}",
            )
    else:
        records = [write_artifact(a) for a in artifacts]

    # ── Step 6: report ───────────────────────────────────────────────
    report = GenerationReport(
        profile_id=profile.profile_id,
        dependency_name=package.name,
        dependency_version=package.version,
        source_path=str(source_path),
        source_sha256=source_sha256,
        profiles=profiles,
        operating_systems=operating_systems,
        profile_count=len(profiles),
        operating_system_count=len(operating_systems),
        artifacts=records,
        rerun_if_changed=_rerun_paths(profile, source_path, track_source),
        check_only=check,
    )

    if report_path:
        write_report(report, report_path)
        logger.info("Wrote report to %s", report_path)

    return report


# ── CLI ──────────────────────────────────────────────────────────────────────

def main(argv: Optional[List[str]] = None):
    """CLI entry point for emulation_codegen."""
    settings = load_settings()

    parser = argparse.ArgumentParser(
        description="emulation_codegen — generate TypeScript/Rust bindings from wreq-util's emulation table",
    )
    parser.add_argument(
        "--manifest-dir",
        type=Path,
        default=Path(settings.CARGO_MANIFEST_DIR) if settings.CARGO_MANIFEST_DIR else None,
        help="Crate directory holding Cargo.toml (default: $CARGO_MANIFEST_DIR)",
    )
    parser.add_argument(
        "--cargo",
        default=settings.CARGO,
        help="cargo binary (default: $CARGO or 'cargo')",
    )
    parser.add_argument(
        "--track-source",
        action="store_true",
        help="Also re-run when the scanned wreq-util source changes",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Fail if generated files are out of date instead of writing them",
    )
    parser.add_argument(
        "--report",
        type=Path,
        default=None,
        help="Write a JSON report of the run to this path",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.manifest_dir is None:
        logger.error("No manifest directory: pass --manifest-dir or set CARGO_MANIFEST_DIR")
        sys.exit(1)

    try:
        report = run_codegen(
            manifest_dir=args.manifest_dir,
            cargo=args.cargo,
            track_source=args.track_source or None,
            check=args.check,
            report_path=args.report,
        )
    except CodegenError as e:
        logger.error("%s", e)
        sys.exit(1)

    for line in format_directives(report):
        print(line)


if __name__ == "__main__":
    main()
