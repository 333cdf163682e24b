"""
Build directives — the lines cargo reads from a build script's stdout.

  cargo:warning=...           shown in the build log (extraction counts)
  cargo:rerun-if-changed=...  files whose change re-runs the generator
"""
from typing import List

from emulation_codegen.io.schema import GenerationReport


def format_directives(report: GenerationReport) -> List[str]:
    lines = [
        f"cargo:warning=Found {report.profile_count} browser profiles",
        f"cargo:warning=Found {report.operating_system_count} operating systems",
    ]
    lines.extend(f"cargo:rerun-if-changed={p}" for p in report.rerun_if_changed)
    return lines
