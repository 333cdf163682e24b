"""
Loader — read the enumeration-definition file into memory.
"""
import hashlib
import logging
from pathlib import Path
from typing import Tuple

from emulation_codegen.policy.failure import CodegenError, FailureStage

logger = logging.getLogger(__name__)


def read_source_text(path: Path) -> Tuple[str, str]:
    """
    Read *path* as UTF-8 and return ``(text, sha256)``.

    Raises
    ------
    CodegenError
        SOURCE_UNREADABLE if the file cannot be opened or decoded.
    """
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise CodegenError(
            FailureStage.SOURCE_UNREADABLE,
            f"Failed to read {path}: {e}",
        ) from e

    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise CodegenError(
            FailureStage.SOURCE_UNREADABLE,
            f"{path} is not valid UTF-8: {e}",
        ) from e

    logger.debug("Read %d bytes from %s", len(raw), path)
    return text, hashlib.sha256(raw).hexdigest()
