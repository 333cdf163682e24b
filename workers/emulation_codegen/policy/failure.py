"""
Failure taxonomy for emulation_codegen.

Every failure is fatal to the build.  Each one is tagged with the stage
that produced it so the build log says where the pipeline stopped.
"""
from __future__ import annotations

import logging
from collections import Counter
from enum import Enum
from typing import List

logger = logging.getLogger(__name__)


# ── Enums ────────────────────────────────────────────────────────────────────

class FailureStage(str, Enum):
    METADATA_UNAVAILABLE = "METADATA_UNAVAILABLE"
    DEPENDENCY_NOT_FOUND = "DEPENDENCY_NOT_FOUND"
    MALFORMED_METADATA = "MALFORMED_METADATA"
    SOURCE_UNREADABLE = "SOURCE_UNREADABLE"
    EMPTY_EXTRACTION = "EMPTY_EXTRACTION"
    WRITE_FAILURE = "WRITE_FAILURE"
    STALE_ARTIFACT = "STALE_ARTIFACT"


class CodegenError(RuntimeError):
    """A fatal generator failure, tagged with the stage that raised it."""

    def __init__(self, stage: FailureStage, message: str):
        super().__init__(message)
        self.stage = stage
        self.message = message

    def __str__(self) -> str:
        return f"{self.stage.value}: {self.message}"


# ── Extraction gate ──────────────────────────────────────────────────────────

def gate_extraction(names: List[str], kind: str, dependency: str) -> List[str]:
    """
    Reject an empty extraction; warn on duplicate names.

    An empty list means the dependency's source layout drifted away from
    the markers in the profile.  Returns *names* unchanged.
    """
    if not names:
        raise CodegenError(
            FailureStage.EMPTY_EXTRACTION,
            f"No {kind} found in {dependency} source",
        )

    dupes = sorted(n for n, c in Counter(names).items() if c > 1)
    if dupes:
        logger.warning("Duplicate %s in %s source: %s", kind, dependency, ", ".join(dupes))

    return names
