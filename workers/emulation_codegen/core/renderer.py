"""
Renderer — turn the extracted name lists into generated source documents.

Pure functions, no IO.  Output order is exactly the input order so the
generated files only change when wreq-util's own table changes.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List

from emulation_codegen import PACKAGE_NAME
from emulation_codegen.policy.profile import CodegenProfile


@dataclass(frozen=True)
class RenderedArtifact:
    """A fully rendered document and where it goes."""
    kind: str          # typescript | rust
    path: Path
    content: str


def _ts_union(type_name: str, names: List[str]) -> str:
    if not names:
        raise ValueError(f"Cannot render an empty union for {type_name}")

    lines = [f"export type {type_name} ="]
    last = len(names) - 1
    for i, name in enumerate(names):
        terminator = ";" if i == last else ""
        lines.append(f"  | '{name}'{terminator}")
    return "\n".join(lines) + "\n"


def _rust_str_array(const_name: str, names: List[str]) -> str:
    if not names:
        raise ValueError(f"Cannot render an empty array for {const_name}")

    lines = [f"pub const {const_name}: &[&str] = &["]
    lines.extend(f'    "{name}",' for name in names)
    lines.append("];")
    return "\n".join(lines) + "\n"


def render_typescript_types(
    profiles: List[str],
    operating_systems: List[str],
    profile: CodegenProfile,
) -> str:
    """Union-of-literals type declarations: profiles first, then operating systems."""
    parts = [
        f"/**\n * Auto-generated by {PACKAGE_NAME}\n * DO NOT EDIT MANUALLY\n */\n\n",
        "/**\n * Browser profile names supported\n */\n",
        _ts_union(profile.ts_profile_type, profiles),
        "\n/**\n * Operating systems supported for emulation\n */\n",
        _ts_union(profile.ts_os_type, operating_systems),
    ]
    return "".join(parts)


def render_rust_profiles(
    profiles: List[str],
    operating_systems: List[str],
    profile: CodegenProfile,
) -> str:
    """Constant string-slice arrays: profiles first, then operating systems."""
    parts = [
        f"// Auto-generated by {PACKAGE_NAME}\n// DO NOT EDIT MANUALLY\n\n",
        _rust_str_array(profile.rust_profile_const, profiles),
        "\n",
        _rust_str_array(profile.rust_os_const, operating_systems),
    ]
    return "".join(parts)
