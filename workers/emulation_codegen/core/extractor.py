"""
Extractor — pull profile and operating-system names out of wreq-util source.

Two independent line-by-line scans over the same text:

  Pass A  every line carrying ``=> ("name"`` contributes one profile name.
  Pass B  a small state machine walks to the emulation-OS table (the
          ``plain,`` sentinel, then the ``EmulationOS`` line) and collects
          ``=> "name"`` entries until the closing ``);``.

Matching is purely textual: one ``str.find`` per line per pattern, so only
the first match on a line is taken.  This is not a Rust parser and finds
nothing if wreq-util reorders these constructs.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Iterator, List, Optional

from emulation_codegen.policy.profile import CodegenProfile

logger = logging.getLogger(__name__)


def _lines(text: str) -> Iterator[str]:
    """
    Split on ``\\n`` only, dropping the ``\\r`` of a ``\\r\\n`` ending.

    Form feeds, ``\\x85``, ``\\u2028`` and friends stay inside the line.
    """
    parts = text.split("\n")
    last = len(parts) - 1
    for i, line in enumerate(parts):
        if i < last and line.endswith("\r"):
            line = line[:-1]
        yield line


def _quoted_after(line: str, marker: str) -> Optional[str]:
    """
    Return the text between the quote that ends *marker* and the next quote.

    None when the marker is absent or the quote is never closed on this line.
    """
    start = line.find(marker)
    if start < 0:
        return None
    value_start = start + len(marker)
    end = line.find('"', value_start)
    if end < 0:
        return None
    return line[value_start:end]


# ── Pass A: profiles ─────────────────────────────────────────────────────────

def extract_profiles(text: str, profile: CodegenProfile) -> List[str]:
    """Profile names in order of appearance; lines without the marker are skipped."""
    profiles: List[str] = []
    for line in _lines(text):
        name = _quoted_after(line, profile.profile_marker)
        if name is not None:
            profiles.append(name)

    logger.debug("Pass A matched %d profile lines", len(profiles))
    return profiles


# ── Pass B: operating systems ────────────────────────────────────────────────

class OsScanState(str, Enum):
    SEEKING = "SEEKING"
    AWAITING_BLOCK_START = "AWAITING_BLOCK_START"
    IN_BLOCK = "IN_BLOCK"
    DONE = "DONE"


class OsBlockScanner:
    """
    Line-fed state machine for the emulation-OS table.

    SEEKING               ``plain,`` seen           -> AWAITING_BLOCK_START
    AWAITING_BLOCK_START  type name seen            -> IN_BLOCK (line not extracted)
    IN_BLOCK              ``);`` seen               -> DONE
    DONE                  terminal, lines ignored
    """

    def __init__(self, profile: CodegenProfile):
        self.profile = profile
        self.state = OsScanState.SEEKING
        self.names: List[str] = []

    def feed(self, line: str) -> OsScanState:
        p = self.profile

        if self.state == OsScanState.SEEKING:
            if p.plain_marker in line:
                self.state = OsScanState.AWAITING_BLOCK_START

        elif self.state == OsScanState.AWAITING_BLOCK_START:
            # A repeated sentinel line never opens the block
            if p.plain_marker not in line and p.os_type_name in line:
                self.state = OsScanState.IN_BLOCK

        elif self.state == OsScanState.IN_BLOCK:
            if p.block_end_marker in line:
                self.state = OsScanState.DONE
            else:
                name = _quoted_after(line, p.os_marker)
                if name is not None:
                    self.names.append(name)

        return self.state


def extract_operating_systems(text: str, profile: CodegenProfile) -> List[str]:
    """Operating-system names from the emulation-OS table, in table order."""
    scanner = OsBlockScanner(profile)
    for line in _lines(text):
        if scanner.feed(line) == OsScanState.DONE:
            break

    logger.debug(
        "Pass B finished in state %s with %d names",
        scanner.state.value, len(scanner.names),
    )
    return scanner.names
