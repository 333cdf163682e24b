"""
Test fixtures for emulation_codegen.

Provides a sample wreq-util emulation table, a fake crate layout on disk,
and a stand-in for the cargo metadata subprocess.
"""
from __future__ import annotations

import json
import subprocess
import textwrap
from pathlib import Path
from typing import Any, Callable, Dict, List

import pytest

from emulation_codegen.policy.profile import CodegenProfile


# ── Sample wreq-util source (mimics src/emulation/mod.rs) ────────────────────

EMULATION_RS = textwrap.dedent("""\
    mod device;
    #[macro_use]
    mod macros;

    use device::{chrome::*, firefox::*, safari::*};

    define_enum!(
        /// Represents different browser versions for emulation.
        with_dispatch,
        Emulation, Chrome100,

        // Chrome versions
        Chrome100 => ("chrome_100", v100::emulation),
        Chrome101 => ("chrome_101", v101::emulation),

        // Firefox versions
        Firefox109 => ("firefox_109", ff109::emulation),

        // Safari versions
        Safari17_0 => ("safari_17.0", safari17_0::emulation),
    );

    define_enum!(
        /// Represents different operating systems for emulation.
        plain,
        EmulationOS, MacOS,
        Windows => "windows",
        MacOS => "macos",
        Linux => "linux",
        Android => "android",
        IOS => "ios"
    );

    impl EmulationOS {
        fn platform(&self) -> &'static str {
            match self {
                EmulationOS::MacOS => "\\"macOS\\"",
                EmulationOS::Linux => "\\"Linux\\"",
                _ => "\\"Windows\\"",
            }
        }
    }
""")

EXPECTED_PROFILES = ["chrome_100", "chrome_101", "firefox_109", "safari_17.0"]
EXPECTED_OPERATING_SYSTEMS = ["windows", "macos", "linux", "android", "ios"]

NO_OS_TABLE_RS = textwrap.dedent("""\
    define_enum!(
        with_dispatch,
        Emulation, Chrome100,
        Chrome100 => ("chrome_100", v100::emulation),
    );
""")


# ── Fixtures ────────────────────────────────────────────────────────────────

@pytest.fixture
def profile() -> CodegenProfile:
    return CodegenProfile.v0()


@pytest.fixture
def emulation_rs() -> str:
    """The sample wreq-util emulation table."""
    return EMULATION_RS


@pytest.fixture
def no_os_table_rs() -> str:
    """A wreq-util source with profiles but no emulation-OS table."""
    return NO_OS_TABLE_RS


@pytest.fixture
def expected_profiles() -> List[str]:
    return list(EXPECTED_PROFILES)


@pytest.fixture
def expected_operating_systems() -> List[str]:
    return list(EXPECTED_OPERATING_SYSTEMS)


@pytest.fixture
def wreq_util_dir(tmp_path: Path) -> Path:
    """A fake wreq-util checkout holding EMULATION_RS."""
    pkg = tmp_path / "registry" / "wreq-util-2.2.6"
    (pkg / "src" / "emulation").mkdir(parents=True)
    (pkg / "Cargo.toml").write_text('[package]\nname = "wreq-util"\n')
    (pkg / "src" / "emulation" / "mod.rs").write_text(EMULATION_RS)
    return pkg


@pytest.fixture
def manifest_dir(tmp_path: Path) -> Path:
    """
    A fake project: ``<project>/rust`` is the crate, generated TypeScript
    lands in ``<project>/src``.
    """
    crate = tmp_path / "project" / "rust"
    (crate / "src").mkdir(parents=True)
    (tmp_path / "project" / "src").mkdir()
    (crate / "Cargo.toml").write_text('[package]\nname = "wreq-js"\n')
    return crate


def _make_metadata(packages: List[Any]) -> Dict[str, Any]:
    return {
        "packages": packages,
        "workspace_members": [],
        "resolve": None,
        "target_directory": "/tmp/target",
        "version": 1,
        "workspace_root": "/tmp/project",
    }


def _completed(stdout: bytes, returncode: int = 0, stderr: bytes = b"") -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(
        args=["cargo", "metadata", "--format-version", "1"],
        returncode=returncode,
        stdout=stdout,
        stderr=stderr,
    )


@pytest.fixture
def make_metadata() -> Callable[[List[Any]], Dict[str, Any]]:
    """Build a cargo metadata document around a package list."""
    return _make_metadata


@pytest.fixture
def cargo_result() -> Callable[..., subprocess.CompletedProcess]:
    """Build a finished cargo process with bytes stdout/stderr."""
    return _completed


@pytest.fixture
def cargo_metadata(monkeypatch, wreq_util_dir: Path) -> List[List[str]]:
    """
    Replace subprocess.run with a fake cargo metadata that lists
    wreq-util among other packages.  Returns the list of recorded commands.
    """
    calls: List[List[str]] = []
    metadata = _make_metadata([
        {
            "name": "serde_json",
            "version": "1.0.140",
            "manifest_path": "/registry/serde_json-1.0.140/Cargo.toml",
        },
        {
            "name": "wreq-util",
            "version": "2.2.6",
            "manifest_path": str(wreq_util_dir / "Cargo.toml"),
        },
    ])

    def fake_run(cmd, **kwargs):
        calls.append(list(cmd))
        return _completed(json.dumps(metadata).encode("utf-8"))

    monkeypatch.setattr(subprocess, "run", fake_run)
    return calls
