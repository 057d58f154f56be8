from __future__ import annotations

"""
Pipeline Domain Data Models.

Defines the result object and factory functions used to communicate
execution outcomes between the pipeline engine and the CLI.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from structure4ai.domain.tree_models import StructureModel

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class PipelineResult:
    """
    Unified result of a complete walk-and-generate run.

    Attributes:
        ok: True when every requested format was written.
        error: Summary of the failure, empty on success.
        root_path: Normalized root directory that was walked.
        output_dir: Directory receiving the generated files.
        base_name: File name stem shared by every generated file.
        folder_count: Directories found by the walk.
        file_count: Files found by the walk.
        error_count: Error entries recorded by the walk.
        processed_count: Total entries recorded by the walk.
        generated_files: Format name to written file path.
        failed_formats: Format name to failure message.
        summary: Extra execution metadata.
    """
    ok: bool
    error: str

    root_path: str
    output_dir: str
    base_name: str

    folder_count: int = 0
    file_count: int = 0
    error_count: int = 0
    processed_count: int = 0

    generated_files: Dict[str, str] = field(default_factory=dict)
    failed_formats: Dict[str, str] = field(default_factory=dict)
    summary: Dict[str, Any] = field(default_factory=dict)

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_result(
        model: StructureModel,
        output_dir: str,
        base_name: str,
        generated_files: Dict[str, str],
        failed_formats: Dict[str, str],
        summary_extra: Optional[Dict[str, Any]] = None,
) -> PipelineResult:
    """
    Build the result of a run whose walk completed.

    The run is considered successful only if no format failed.

    Args:
        model: The completed structure model.
        output_dir: Resolved output directory.
        base_name: File name stem of the outputs.
        generated_files: Successfully written files per format.
        failed_formats: Failure messages per format.
        summary_extra: Additional metadata for the summary payload.

    Returns:
        PipelineResult: An immutable result object.
    """
    error = ""
    if failed_formats:
        error = "; ".join(f"{fmt}: {msg}" for fmt, msg in failed_formats.items())

    return PipelineResult(
        ok=not failed_formats,
        error=error,
        root_path=model.root_path,
        output_dir=output_dir,
        base_name=base_name,
        folder_count=model.folder_count,
        file_count=model.file_count,
        error_count=model.error_count,
        processed_count=model.processed_count,
        generated_files=dict(generated_files),
        failed_formats=dict(failed_formats),
        summary=summary_extra or {},
    )
