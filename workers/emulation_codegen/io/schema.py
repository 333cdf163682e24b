"""
Schema — Pydantic models for cargo metadata input and the run report.

Input:
  CargoMetadata          — the subset of ``cargo metadata --format-version 1``
                           the locator reads.  Unknown fields are ignored.

Output:
  GenerationReport       — optional ``--report`` JSON summarising one run.

Runtime contract fields (present in the report):
  package_name, generator_version, profile_id, schema_version.
"""
from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, Field

from emulation_codegen import GENERATOR_VERSION, PACKAGE_NAME, SCHEMA_VERSION


# ── cargo metadata ───────────────────────────────────────────────────────────

class CargoPackage(BaseModel):
    """One resolved package from cargo metadata."""
    name: str
    version: Optional[str] = None
    manifest_path: str


class CargoMetadata(BaseModel):
    # Entries stay raw; only the package being looked up is validated
    packages: List[Any]
    workspace_root: Optional[str] = None


# ── Report ───────────────────────────────────────────────────────────────────

class ArtifactRecord(BaseModel):
    """One generated file."""
    kind: str                # typescript | rust
    path: str
    sha256: str
    changed: bool            # content differs from what was on disk


class GenerationReport(BaseModel):
    """
    generation_report.json — what was scanned and what was generated.
    """
    package_name: str = PACKAGE_NAME
    generator_version: str = GENERATOR_VERSION
    schema_version: str = SCHEMA_VERSION
    profile_id: str

    dependency_name: str
    dependency_version: Optional[str] = None
    source_path: str
    source_sha256: str

    profiles: List[str] = Field(default_factory=list)
    operating_systems: List[str] = Field(default_factory=list)
    profile_count: int = 0
    operating_system_count: int = 0

    artifacts: List[ArtifactRecord] = Field(default_factory=list)
    rerun_if_changed: List[str] = Field(default_factory=list)
    check_only: bool = False
