"""
Profile — descriptor of everything the generator assumes about wreq-util.

Markers, type names, subpaths and destinations live here so that core
scanning and rendering logic contains no literals.  A wreq-util layout
change is a profile change, not a code change.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class CodegenProfile:
    """emulation_codegen v0 support profile."""

    # Identity
    profile_id: str

    # Dependency lookup
    dependency_name: str = "wreq-util"
    enumeration_subpath: Tuple[str, ...] = ("src", "emulation", "mod.rs")

    # Pass A: `Chrome100 => ("chrome_100", v100::emulation),`
    profile_marker: str = '=> ("'

    # Pass B: plain sentinel, then the type-name line, then `Windows => "windows",`
    plain_marker: str = "plain,"
    os_type_name: str = "EmulationOS"
    os_marker: str = '=> "'
    block_end_marker: str = ");"

    # Rendered names
    ts_profile_type: str = "BrowserProfile"
    ts_os_type: str = "EmulationOS"
    rust_profile_const: str = "BROWSER_PROFILES"
    rust_os_const: str = "OPERATING_SYSTEMS"

    # Destinations, relative to the manifest directory
    typescript_dest: str = "../src/generated-types.ts"
    rust_dest: str = "src/generated_profiles.rs"

    # Rebuild tracking
    rerun_paths: Tuple[str, ...] = ("build.rs",)
    track_source: bool = False

    @classmethod
    def v0(cls) -> CodegenProfile:
        """The single supported profile for emulation_codegen v0."""
        return cls(profile_id="wreq-util-emulation-rs")
