"""
Locator — find wreq-util's emulation table on disk via ``cargo metadata``.

Responsibilities:
  - Run ``cargo metadata --format-version 1`` once and decode its JSON.
  - Validate the package list and pick the dependency by exact name.
  - Join the package directory with the profile's enumeration subpath.

Every failure here is fatal: without the path there is nothing to scan.
"""
from __future__ import annotations

import json
import logging
import subprocess
from pathlib import Path
from typing import Any, Dict, Tuple

from pydantic import ValidationError

from emulation_codegen.io.schema import CargoMetadata, CargoPackage
from emulation_codegen.policy.failure import CodegenError, FailureStage
from emulation_codegen.policy.profile import CodegenProfile

logger = logging.getLogger(__name__)


def query_cargo_metadata(manifest_dir: Path, cargo: str = "cargo") -> Dict[str, Any]:
    """
    Run cargo metadata in *manifest_dir* and return the decoded JSON.

    Raises
    ------
    CodegenError
        METADATA_UNAVAILABLE if cargo cannot be run, exits non-zero,
        or prints something that is not UTF-8 JSON.
    """
    cmd = [cargo, "metadata", "--format-version", "1"]
    logger.info("Running %s", " ".join(cmd))

    try:
        result = subprocess.run(
            cmd,
            cwd=str(manifest_dir),
            capture_output=True,
        )
    except OSError as e:
        raise CodegenError(
            FailureStage.METADATA_UNAVAILABLE,
            f"Failed to run cargo metadata: {e}",
        ) from e

    if result.returncode != 0:
        stderr = result.stderr.decode("utf-8", errors="replace").strip()
        raise CodegenError(
            FailureStage.METADATA_UNAVAILABLE,
            f"cargo metadata exited with {result.returncode}: {stderr}",
        )

    try:
        stdout = result.stdout.decode("utf-8")
    except UnicodeDecodeError as e:
        raise CodegenError(
            FailureStage.METADATA_UNAVAILABLE,
            f"cargo metadata output is not valid UTF-8: {e}",
        ) from e

    try:
        metadata = json.loads(stdout)
    except json.JSONDecodeError as e:
        raise CodegenError(
            FailureStage.METADATA_UNAVAILABLE,
            f"Failed to parse cargo metadata JSON: {e}",
        ) from e

    if not isinstance(metadata, dict):
        raise CodegenError(
            FailureStage.MALFORMED_METADATA,
            f"cargo metadata is a {type(metadata).__name__}, expected an object",
        )
    return metadata


def find_package(metadata: Dict[str, Any], name: str) -> CargoPackage:
    """
    Return the first package in *metadata* whose name is exactly *name*.

    Only the matching entry is validated; malformed entries for other
    packages are skipped, as are entries without a string name.

    Raises
    ------
    CodegenError
        MALFORMED_METADATA if the package list is missing or the matching
        entry has no usable manifest path; DEPENDENCY_NOT_FOUND if no
        package matches.
    """
    try:
        parsed = CargoMetadata.model_validate(metadata)
    except ValidationError as e:
        raise CodegenError(
            FailureStage.MALFORMED_METADATA,
            f"Unexpected cargo metadata shape: {e}",
        ) from e

    for entry in parsed.packages:
        if not isinstance(entry, dict) or entry.get("name") != name:
            continue
        try:
            return CargoPackage.model_validate(entry)
        except ValidationError as e:
            raise CodegenError(
                FailureStage.MALFORMED_METADATA,
                f"Unexpected metadata for {name}: {e}",
            ) from e

    raise CodegenError(
        FailureStage.DEPENDENCY_NOT_FOUND,
        f"{name} package not found in cargo metadata",
    )


def resolve_enumeration_file(package: CargoPackage, subpath: Tuple[str, ...]) -> Path:
    """The enumeration file inside *package*'s source tree."""
    return Path(package.manifest_path).parent.joinpath(*subpath)


def locate_enumeration_file(
    manifest_dir: Path,
    profile: CodegenProfile,
    cargo: str = "cargo",
) -> Tuple[CargoPackage, Path]:
    """Resolve the dependency package and its enumeration file path."""
    metadata = query_cargo_metadata(manifest_dir, cargo)
    package = find_package(metadata, profile.dependency_name)
    path = resolve_enumeration_file(package, profile.enumeration_subpath)
    logger.info(
        "Found %s %s at %s",
        package.name, package.version or "(unversioned)", path,
    )
    return package, path
