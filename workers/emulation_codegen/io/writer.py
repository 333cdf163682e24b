"""
Writer — put rendered artifacts and the run report on disk.

Artifacts are written only after they are fully rendered, and always
overwrite.  Their parent directories are NOT created: a missing
destination directory means the project layout is wrong.
"""
import hashlib
import json
import logging
from pathlib import Path

from emulation_codegen.core.renderer import RenderedArtifact
from emulation_codegen.io.schema import ArtifactRecord, GenerationReport
from emulation_codegen.policy.failure import CodegenError, FailureStage

logger = logging.getLogger(__name__)


def _sha256_text(content: str) -> str:
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


def is_stale(artifact: RenderedArtifact) -> bool:
    """True if the file on disk is missing or differs from *artifact*."""
    try:
        return artifact.path.read_text(encoding="utf-8") != artifact.content
    except (OSError, UnicodeDecodeError):
        return True


def artifact_record(artifact: RenderedArtifact, changed: bool) -> ArtifactRecord:
    return ArtifactRecord(
        kind=artifact.kind,
        path=str(artifact.path),
        sha256=_sha256_text(artifact.content),
        changed=changed,
    )


def write_artifact(artifact: RenderedArtifact) -> ArtifactRecord:
    """
    Overwrite ``artifact.path`` with ``artifact.content``.

    Raises
    ------
    CodegenError
        WRITE_FAILURE if the destination cannot be written.
    """
    changed = is_stale(artifact)
    try:
        with open(artifact.path, "w", encoding="utf-8", newline="\n") as f:
            f.write(artifact.content)
    except OSError as e:
        raise CodegenError(
            FailureStage.WRITE_FAILURE,
            f"Failed to write {artifact.kind} output {artifact.path}: {e}",
        ) from e

    logger.info("Wrote %s (%s)", artifact.path, "changed" if changed else "unchanged")
    return artifact_record(artifact, changed)


def write_report(report: GenerationReport, report_path: Path) -> Path:
    """
    Write *report* as JSON to *report_path*.

    Creates the parent directory if it does not exist.

    Raises
    ------
    CodegenError
        WRITE_FAILURE if the directory or file cannot be written.
    """
    try:
        report_path.parent.mkdir(parents=True, exist_ok=True)
        report_path.write_text(
            json.dumps(
                report.model_dump(mode="json"),
                indent=2,
                sort_keys=True,
            )
            + "\n",
            encoding="utf-8",
        )
    except OSError as e:
        raise CodegenError(
            FailureStage.WRITE_FAILURE,
            f"Failed to write report {report_path}: {e}",
        ) from e
    return report_path
